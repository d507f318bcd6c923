"""Dependency injection wiring (dishka)."""

from chatline.setup.ioc.container import create_container

__all__ = ["create_container"]

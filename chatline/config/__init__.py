"""Configuration: environment-backed Config, ChatConfig policy struct, logging."""

from chatline.config.settings import Config, ChatConfig, get_config

__all__ = ["Config", "ChatConfig", "get_config"]

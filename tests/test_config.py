"""Configuration mapping and logging setup."""

import logging
import sys

from chatline.config.logging_config import CorrelationIdFilter, correlation_id_var
from chatline.config.settings import ChatConfig, Config, TestingConfig, get_config
from chatline.setup.ioc import create_container


class OverriddenConfig(TestingConfig):
    CHAT_EDIT_TIME_LIMIT = 60
    CHAT_ALLOWED_ATTACHMENT_TYPES = ["PDF", " png ", ""]
    CHAT_FEATURE_TYPING = False


def test_chat_config_from_config():
    chat_config = ChatConfig.from_config(OverriddenConfig)

    assert chat_config.edit_time_limit == 60
    assert chat_config.allowed_attachment_types == ("pdf", "png")
    assert chat_config.typing_enabled is False
    assert chat_config.read_receipts_enabled == Config.CHAT_FEATURE_READ_RECEIPTS


def test_get_config_falls_back_to_development():
    assert get_config("testing") is TestingConfig
    assert get_config("staging").DEBUG is True


def test_correlation_id_is_attached_to_records():
    record = logging.LogRecord("chatline", logging.INFO, __file__, 1, "hello", None, None)
    token = correlation_id_var.set("req-42")
    try:
        assert CorrelationIdFilter().filter(record)
    finally:
        correlation_id_var.reset(token)

    assert record.correlation_id == "req-42"


def test_memory_backend_does_not_load_the_prisma_client():
    container = create_container(TestingConfig)

    assert container is not None
    assert "chatline.setup.ioc.prisma_provider" not in sys.modules
    assert "chatline.infrastructure.persistence" not in sys.modules

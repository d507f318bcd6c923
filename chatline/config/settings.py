"""Application configuration settings"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    # App settings
    TESTING = _flag("TESTING", "false")
    DEBUG = _flag("DEBUG", "false")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Auth
    SERVICE_AUTH_SECRET = os.getenv("SERVICE_AUTH_SECRET", "")
    SERVICE_AUTH_ISSUER = os.getenv("SERVICE_AUTH_ISSUER", "your_service_name")
    SERVICE_AUTH_AUDIENCE = os.getenv("SERVICE_AUTH_AUDIENCE", "your_service_audience")

    # Storage backend: "prisma" (PostgreSQL + Redis) or "memory" (single process)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "prisma").lower()

    # Redis settings
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    CACHE_PREFIX: str = os.getenv("CACHE_PREFIX", "chatline")

    # Postgresql Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Messages
    CHAT_MAX_MESSAGE_LENGTH: int = int(os.getenv("CHAT_MAX_MESSAGE_LENGTH", "4000"))
    CHAT_ALLOW_EMPTY_MESSAGES: bool = _flag("CHAT_ALLOW_EMPTY_MESSAGES", "false")
    CHAT_SOFT_DELETE_MESSAGES: bool = _flag("CHAT_SOFT_DELETE_MESSAGES", "true")
    CHAT_EDIT_TIME_LIMIT: int = int(os.getenv("CHAT_EDIT_TIME_LIMIT", "300"))  # seconds
    CHAT_DELETE_TIME_LIMIT: int = int(os.getenv("CHAT_DELETE_TIME_LIMIT", "3600"))

    # Conversations
    CHAT_MAX_PARTICIPANTS: int = int(os.getenv("CHAT_MAX_PARTICIPANTS", "100"))
    CHAT_PARTICIPANTS_CAN_LEAVE: bool = _flag("CHAT_PARTICIPANTS_CAN_LEAVE", "true")
    CHAT_CREATOR_CAN_DELETE: bool = _flag("CHAT_CREATOR_CAN_DELETE", "true")

    # Presence / typing (seconds)
    CHAT_PRESENCE_TTL: int = int(os.getenv("CHAT_PRESENCE_TTL", "300"))
    CHAT_TYPING_TTL: int = int(os.getenv("CHAT_TYPING_TTL", "5"))

    # Pagination
    CHAT_MESSAGES_PER_PAGE: int = int(os.getenv("CHAT_MESSAGES_PER_PAGE", "50"))
    CHAT_MAX_MESSAGES_PER_PAGE: int = int(os.getenv("CHAT_MAX_MESSAGES_PER_PAGE", "100"))
    CHAT_CONVERSATIONS_LIMIT: int = int(os.getenv("CHAT_CONVERSATIONS_LIMIT", "50"))

    # Attachments (stored elsewhere, metadata only)
    CHAT_MAX_ATTACHMENT_KB: int = int(os.getenv("CHAT_MAX_ATTACHMENT_KB", "10240"))
    CHAT_ALLOWED_ATTACHMENT_TYPES = os.getenv(
        "CHAT_ALLOWED_ATTACHMENT_TYPES",
        "jpg,jpeg,png,gif,webp,svg,pdf,doc,docx,xls,xlsx,ppt,pptx,txt,csv,zip,rar,7z,mp3,wav,mp4,avi,mov",
    ).split(",")
    CHAT_ATTACHMENT_BASE_URL: str = os.getenv("CHAT_ATTACHMENT_BASE_URL", "/attachments")

    # Broadcasting
    CHAT_BROADCAST_TIMEOUT: float = float(os.getenv("CHAT_BROADCAST_TIMEOUT", "2.0"))
    CHAT_EVENT_PREFIX: str = os.getenv("CHAT_EVENT_PREFIX", "Chatline")

    # Feature flags
    CHAT_FEATURE_TYPING = _flag("CHAT_FEATURE_TYPING", "true")
    CHAT_FEATURE_READ_RECEIPTS = _flag("CHAT_FEATURE_READ_RECEIPTS", "true")
    CHAT_FEATURE_PRESENCE = _flag("CHAT_FEATURE_PRESENCE", "true")
    CHAT_FEATURE_SEARCH = _flag("CHAT_FEATURE_SEARCH", "true")
    CHAT_FEATURE_GROUP_CHATS = _flag("CHAT_FEATURE_GROUP_CHATS", "true")
    CHAT_FEATURE_MESSAGE_EDITING = _flag("CHAT_FEATURE_MESSAGE_EDITING", "true")
    CHAT_FEATURE_MESSAGE_DELETION = _flag("CHAT_FEATURE_MESSAGE_DELETION", "true")
    CHAT_FEATURE_CONVERSATION_SETTINGS = _flag(
        "CHAT_FEATURE_CONVERSATION_SETTINGS", "true"
    )
    CHAT_FEATURE_FILE_UPLOADS = _flag("CHAT_FEATURE_FILE_UPLOADS", "true")
    CHAT_FEATURE_BROADCASTING = _flag("CHAT_FEATURE_BROADCASTING", "true")


@dataclass(frozen=True)
class ChatConfig:
    """
    Immutable chat policy handed to every component at construction time.

    Built once at startup (see setup/ioc/container.py). Tests construct it
    directly with the values they need.
    """

    max_message_length: int = 4000
    allow_empty_messages: bool = False
    soft_delete_messages: bool = True
    edit_time_limit: int = 300
    delete_time_limit: int = 3600

    max_participants: int = 100
    participants_can_leave: bool = True
    creator_can_delete: bool = True

    presence_ttl: int = 300
    typing_ttl: int = 5

    messages_per_page: int = 50
    max_messages_per_page: int = 100
    conversations_limit: int = 50

    max_attachment_kb: int = 10240
    allowed_attachment_types: tuple[str, ...] = (
        "jpg", "jpeg", "png", "gif", "webp", "svg",
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "csv",
        "zip", "rar", "7z", "mp3", "wav", "mp4", "avi", "mov",
    )
    attachment_base_url: str = "/attachments"

    broadcast_timeout: float = 2.0
    event_prefix: str = "Chatline"

    typing_enabled: bool = True
    read_receipts_enabled: bool = True
    presence_enabled: bool = True
    search_enabled: bool = True
    group_chats_enabled: bool = True
    message_editing_enabled: bool = True
    message_deletion_enabled: bool = True
    conversation_settings_enabled: bool = True
    file_uploads_enabled: bool = True
    broadcasting_enabled: bool = True

    @classmethod
    def from_config(cls, config: type[Config] = Config) -> "ChatConfig":
        return cls(
            max_message_length=config.CHAT_MAX_MESSAGE_LENGTH,
            allow_empty_messages=config.CHAT_ALLOW_EMPTY_MESSAGES,
            soft_delete_messages=config.CHAT_SOFT_DELETE_MESSAGES,
            edit_time_limit=config.CHAT_EDIT_TIME_LIMIT,
            delete_time_limit=config.CHAT_DELETE_TIME_LIMIT,
            max_participants=config.CHAT_MAX_PARTICIPANTS,
            participants_can_leave=config.CHAT_PARTICIPANTS_CAN_LEAVE,
            creator_can_delete=config.CHAT_CREATOR_CAN_DELETE,
            presence_ttl=config.CHAT_PRESENCE_TTL,
            typing_ttl=config.CHAT_TYPING_TTL,
            messages_per_page=config.CHAT_MESSAGES_PER_PAGE,
            max_messages_per_page=config.CHAT_MAX_MESSAGES_PER_PAGE,
            conversations_limit=config.CHAT_CONVERSATIONS_LIMIT,
            max_attachment_kb=config.CHAT_MAX_ATTACHMENT_KB,
            allowed_attachment_types=tuple(
                ext.strip().lower()
                for ext in config.CHAT_ALLOWED_ATTACHMENT_TYPES
                if ext.strip()
            ),
            attachment_base_url=config.CHAT_ATTACHMENT_BASE_URL,
            broadcast_timeout=config.CHAT_BROADCAST_TIMEOUT,
            event_prefix=config.CHAT_EVENT_PREFIX,
            typing_enabled=config.CHAT_FEATURE_TYPING,
            read_receipts_enabled=config.CHAT_FEATURE_READ_RECEIPTS,
            presence_enabled=config.CHAT_FEATURE_PRESENCE,
            search_enabled=config.CHAT_FEATURE_SEARCH,
            group_chats_enabled=config.CHAT_FEATURE_GROUP_CHATS,
            message_editing_enabled=config.CHAT_FEATURE_MESSAGE_EDITING,
            message_deletion_enabled=config.CHAT_FEATURE_MESSAGE_DELETION,
            conversation_settings_enabled=config.CHAT_FEATURE_CONVERSATION_SETTINGS,
            file_uploads_enabled=config.CHAT_FEATURE_FILE_UPLOADS,
            broadcasting_enabled=config.CHAT_FEATURE_BROADCASTING,
        )


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    STORAGE_BACKEND = "memory"


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])

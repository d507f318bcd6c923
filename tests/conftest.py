import os

# The module-level app reads APP_ENV on import; keep it on in-memory storage
os.environ.setdefault("APP_ENV", "testing")

import pytest
from fastapi.testclient import TestClient

from chatline.config.settings import ChatConfig, Config, TestingConfig
from chatline.fastapi_app import create_fastapi_app
from chatline.setup.ioc import create_container

from helpers import ALICE, BOB, CAROL, FakeClock, build_core
from jwt_generation import generate_jwt_token

TEST_SECRET = "chatline-test-secret-0123456789abcdef0123456789"


@pytest.fixture(autouse=True)
def service_secret(monkeypatch):
    """Sign and verify test tokens with a known secret."""
    monkeypatch.setattr(Config, "SERVICE_AUTH_SECRET", TEST_SECRET)
    return TEST_SECRET


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def chat_config():
    return ChatConfig()


@pytest.fixture()
def core(chat_config, clock):
    """In-memory chat core wired with a recording event sink."""
    return build_core(chat_config, clock)


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture()
def app(chat_config, clock):
    """Create a FastAPI app backed by in-memory storage for each test."""
    container = create_container(TestingConfig, chat_config, clock)
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    return TestClient(app)


def _headers(participant):
    return {"Authorization": f"Bearer {generate_jwt_token(participant, TEST_SECRET)}"}


@pytest.fixture()
def alice_headers():
    return _headers(ALICE)


@pytest.fixture()
def bob_headers():
    return _headers(BOB)


@pytest.fixture()
def carol_headers():
    return _headers(CAROL)

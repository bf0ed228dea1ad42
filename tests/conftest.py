import logging

import httpx
import keyring
import pytest

from cf_purge_tools.models.credentials import Credentials
from cf_purge_tools.models.keyring_config import KeyringConfig
from cf_purge_tools.models.settings import EnvSettings

ENV_VARS = ("CLOUDFLARE_EMAIL", "CLOUDFLARE_API_KEY", "CLOUDFLARE_ZONE_ID", "CLOUDFLARE_VERBOSE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # ignore any .env found from the working directory
    monkeypatch.setitem(EnvSettings.model_config, "env_file", None)


@pytest.fixture(autouse=True)
def restore_log_levels():
    loggers = [logging.getLogger(name) for name in ("cf_purge_tools", "httpx")]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


@pytest.fixture(autouse=True)
def fake_keyring(monkeypatch) -> dict[tuple[str, str], str]:
    """In-memory keyring, so tests never touch the real one."""
    passwords: dict[tuple[str, str], str] = {}

    def get_password(service, username):
        return passwords.get((service, username))

    def set_password(service, username, password):
        passwords[(service, username)] = password

    monkeypatch.setattr(keyring, "get_password", get_password)
    monkeypatch.setattr(keyring, "set_password", set_password)
    return passwords


@pytest.fixture
def stored_config(fake_keyring):
    """Returns a function that saves settings to the fake keyring."""
    def save(**values: str):
        config = KeyringConfig(values)
        config.save()
        return config

    return save


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(email="admin@example.org", api_key="global-key", zone_id="zone123")


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it handled."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def mock_api():
    """Returns a function building an httpx client over a recording transport."""
    def build(handler):
        transport = RecordingTransport(handler)
        return httpx.Client(transport=transport), transport

    return build

from __future__ import annotations

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from landing_site.core.config import Settings
from landing_site.main import create_app

ENV_NAMES = (
    "EMAIL_USER", "EMAIL_PASS", "ADMIN_EMAIL", "PORT", "HOST", "APP_ENV",
    "SMTP_HOST", "SMTP_PORT", "SMTP_USE_TLS", "SMTP_TIMEOUT", "STATIC_DIR",
    "LOG_LEVEL", "ALLOWED_ORIGINS",
)


class FakeMailer:
    """Records messages instead of talking to an SMTP server."""

    def __init__(self, error: Optional[Exception] = None, verified: bool = True) -> None:
        self.error = error
        self.verified = verified
        self.sent: List = []
        self.verify_calls = 0

    async def send(self, message) -> str:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return "250 2.0.0 OK"

    async def verify(self) -> bool:
        self.verify_calls += 1
        return self.verified


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    # keep any developer .env out of the tests
    monkeypatch.chdir(tmp_path)


def make_settings(**overrides) -> Settings:
    values = dict(
        email_user="site@example.com",
        email_pass="app-password",
        admin_email="admin@example.com",
        app_env="production",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def client(settings: Settings, mailer: FakeMailer) -> TestClient:
    return TestClient(create_app(settings, mailer))

"""Shared fixtures: in-memory database, fake push sender and API client."""

from __future__ import annotations

import os
from typing import Any

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
for _name in (
    "OPENAI_API_KEY",
    "VAPID_PUBLIC_KEY",
    "VAPID_PRIVATE_KEY",
    "DISPATCH_TOKEN",
    "APP_TIMEZONE",
):
    os.environ.pop(_name, None)

from byb.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from byb.domain.entities import PushSubscription  # noqa: E402
from byb.infrastructure import database  # noqa: E402


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


class RecordingSender:
    """Push sender recording every attempt; ``failures`` maps endpoints to errors."""

    def __init__(self, failures: dict[str, Exception] | None = None) -> None:
        self.failures = dict(failures or {})
        self.attempts: list[tuple[str, dict[str, Any]]] = []
        self.delivered: list[tuple[str, dict[str, Any]]] = []

    def send(self, subscription: PushSubscription, payload: dict[str, Any]) -> None:
        self.attempts.append((subscription.endpoint, payload))
        error = self.failures.get(subscription.endpoint)
        if error is not None:
            raise error
        self.delivered.append((subscription.endpoint, payload))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def push_sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture()
def db_engine():
    """Recreate every table on the shared in-memory engine."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield database.engine


@pytest.fixture()
def db_session(db_engine):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(db_engine):
    pytest.importorskip("fastapi")
    from byb.main import create_app

    return create_app()


@pytest.fixture()
def client(app):
    """Return a test client bound to a clean application instance."""

    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def settings_env(monkeypatch):
    """Set environment variables and reload the cached settings."""

    def _apply(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key.upper(), value)
        reset_settings_cache()

    yield _apply
    reset_settings_cache()

"""Shared fixtures for the push fan-out test-suite."""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass, field
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ.pop("FCM_CREDENTIALS_FILE", None)
os.environ.pop("FCM_PROJECT_ID", None)

from app.application.use_cases.users import create_user  # noqa: E402
from app.domain.entities import TransportErrorKind, TransportResult, User  # noqa: E402


@dataclass
class SentMessage:
    token: str
    title: str
    body: str
    data: dict[str, str]


@dataclass
class FakeTransport:
    """Push transport returning scripted results per token.

    ``errors`` maps a token to a :class:`TransportErrorKind` (reported as a
    failed result) or to an exception instance (raised from ``send``).
    """

    errors: dict[str, object] = field(default_factory=dict)
    sent: list[SentMessage] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    def send(self, token, title, body, data):
        with self._lock:
            self.sent.append(SentMessage(token, title, body, dict(data)))
        error = self.errors.get(token)
        if isinstance(error, Exception):
            raise error
        if error is None:
            return TransportResult.delivered(f"projects/test/messages/{token}")
        return TransportResult.failed(error, f"{error.value} for {token}")

    @property
    def tokens(self) -> list[str]:
        return [message.token for message in self.sent]


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def db_session():
    """Yield a session bound to freshly created tables."""

    from app.infrastructure import database, models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        database.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def make_user(db_session):
    """Return a helper creating users through the ``create_user`` use case."""

    def _make_user(email: str, role: str = "customer", *, approved: bool = True) -> User:
        return create_user(db_session, email=email, role_alias=role, is_approved=approved)

    return _make_user


@pytest.fixture()
def add_device(db_session):
    """Return a helper registering a device token for a user."""

    from app.infrastructure.models import DeviceModel

    def _add_device(user_id: str, device_id: str, token: str | None) -> None:
        db_session.add(DeviceModel(user_id=user_id, device_id=device_id, token=token))
        db_session.commit()

    return _add_device


__all__ = ["FakeTransport", "SentMessage", "TransportErrorKind"]

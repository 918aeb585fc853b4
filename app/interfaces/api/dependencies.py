"""FastAPI dependency utilities."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Depends, FastAPI, Request
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationFanOut
from app.infrastructure import database
from app.infrastructure.database import get_db
from app.infrastructure.events import RecordEventBus
from app.infrastructure.push import PushTransport


def get_push_transport(request: Request) -> PushTransport:
    """Return the push transport configured for the running application."""

    return request.app.state.push_transport


def get_record_events(request: Request) -> RecordEventBus:
    """Return the bus record-created events are published on."""

    return request.app.state.record_events


def get_fan_out(
    db: Session = Depends(get_db),
    transport: PushTransport = Depends(get_push_transport),
) -> NotificationFanOut:
    """Build a fan-out bound to the request's database session."""

    return NotificationFanOut.from_session(db, transport)


@contextmanager
def open_fan_out(app: FastAPI) -> Iterator[NotificationFanOut]:
    """Yield a fan-out with its own session, for work outside a request."""

    session = database.SessionLocal()
    try:
        yield NotificationFanOut.from_session(session, app.state.push_transport)
    finally:
        session.close()

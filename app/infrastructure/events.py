"""In-process subscriptions for record creation events.

Handlers are registered against a named event (for example
``shared_files.created``) and receive the created record's fields. Publishing
never raises: a failing handler is logged and the remaining handlers still
run, since no caller is waiting on the outcome.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

SHARED_FILE_CREATED = "shared_files.created"
UPLOADED_FILE_CREATED = "user_files.created"


@dataclass(frozen=True)
class RecordCreated:
    """A record that was just persisted in a watched collection."""

    event_name: str
    record_id: str | None
    fields: Mapping[str, Any] = field(default_factory=dict)


RecordHandler = Callable[[RecordCreated], None]


class RecordEventBus:
    """Registry of record-created handlers keyed by event name."""

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[RecordHandler]] = defaultdict(list)

    def subscribe(self, event_name: str) -> Callable[[RecordHandler], RecordHandler]:
        """Decorator registering a handler for ``event_name``."""

        def decorator(handler: RecordHandler) -> RecordHandler:
            self.register(event_name, handler)
            return handler

        return decorator

    def register(self, event_name: str, handler: RecordHandler) -> None:
        handlers = self._handlers[event_name]
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug(
            "Registered handler %s for %s (%s total)",
            getattr(handler, "__name__", repr(handler)),
            event_name,
            len(handlers),
        )

    def handlers_for(self, event_name: str) -> list[RecordHandler]:
        return list(self._handlers.get(event_name, ()))

    def publish(self, event: RecordCreated) -> None:
        """Invoke every handler subscribed to ``event.event_name``."""

        handlers = self.handlers_for(event.event_name)
        logger.info(
            "Publishing %s for record %s to %s handler(s)",
            event.event_name,
            event.record_id,
            len(handlers),
        )
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s record %s",
                    getattr(handler, "__name__", repr(handler)),
                    event.event_name,
                    event.record_id,
                )


__all__ = [
    "RecordCreated",
    "RecordEventBus",
    "RecordHandler",
    "SHARED_FILE_CREATED",
    "UPLOADED_FILE_CREATED",
]

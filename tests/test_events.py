"""Tests for the record event bus."""

import logging

from app.infrastructure.events import (
    SHARED_FILE_CREATED,
    UPLOADED_FILE_CREATED,
    RecordCreated,
    RecordEventBus,
)


def test_publish_invokes_handlers_for_event_only():
    bus = RecordEventBus()
    received = []

    @bus.subscribe(SHARED_FILE_CREATED)
    def on_shared(event):
        received.append(("shared", event.record_id))

    @bus.subscribe(UPLOADED_FILE_CREATED)
    def on_uploaded(event):
        received.append(("uploaded", event.record_id))

    bus.publish(RecordCreated(SHARED_FILE_CREATED, "abc", {"fileName": "a.pdf"}))

    assert received == [("shared", "abc")]


def test_register_ignores_duplicate_handler():
    bus = RecordEventBus()

    def handler(event):
        pass

    bus.register(SHARED_FILE_CREATED, handler)
    bus.register(SHARED_FILE_CREATED, handler)

    assert bus.handlers_for(SHARED_FILE_CREATED) == [handler]


def test_failing_handler_does_not_stop_others(caplog):
    bus = RecordEventBus()
    received = []

    @bus.subscribe(SHARED_FILE_CREATED)
    def broken(event):
        raise RuntimeError("boom")

    @bus.subscribe(SHARED_FILE_CREATED)
    def working(event):
        received.append(event.record_id)

    with caplog.at_level(logging.ERROR):
        bus.publish(RecordCreated(SHARED_FILE_CREATED, "abc"))

    assert received == ["abc"]
    assert "Handler broken failed" in caplog.text


def test_publish_without_handlers_is_noop():
    RecordEventBus().publish(RecordCreated(UPLOADED_FILE_CREATED, None))

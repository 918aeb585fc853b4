"""Tests for the notifications sent when file records are created."""

from __future__ import annotations

import logging
from contextlib import contextmanager

import pytest

from app.application.use_cases import record_uploaded_file, share_file
from app.application.use_cases.notifications import (
    NotificationFanOut,
    notify_file_shared,
    notify_file_uploaded,
    register_record_triggers,
)
from app.domain.entities import TransportErrorKind
from app.infrastructure.events import RecordEventBus
from app.infrastructure.repositories import DeviceRepository, NotificationRepository
from conftest import FakeTransport


@pytest.fixture()
def fan_out_for(db_session):
    def _build(transport) -> NotificationFanOut:
        return NotificationFanOut.from_session(db_session, transport, fan_out_width=4)

    return _build


def test_file_shared_notifies_role_members(
    db_session, make_user, add_device, transport, fan_out_for
):
    admin = make_user("admin@example.com", role="admin")
    driver = make_user("driver@example.com", role="driver")
    add_device(driver.id, "phone", "T1")

    notify_file_shared(
        fan_out_for(transport),
        {
            "fileName": "route.pdf",
            "fileUrl": "https://files.example.com/route.pdf",
            "sharedBy": admin.id,
            "shareWithRole": "driver",
            "description": None,
        },
    )

    sent = transport.sent[0]
    assert sent.title == "New file shared"
    assert sent.body == "route.pdf was shared"
    assert sent.data["type"] == "file_shared"
    assert sent.data["senderName"] == "admin@example.com"
    assert sent.data["description"] == ""
    assert sent.data["timestamp"].isdigit()

    history = NotificationRepository(db_session).list_for_user(driver.id)
    assert len(history) == 1
    assert history[0].data["fileName"] == "route.pdf"


def test_file_shared_by_unknown_sender_uses_admin(
    db_session, make_user, add_device, transport, fan_out_for
):
    driver = make_user("driver@example.com", role="driver")
    add_device(driver.id, "phone", "T1")

    notify_file_shared(
        fan_out_for(transport),
        {"fileName": "route.pdf", "sharedBy": "missing-user", "shareWithRole": "driver"},
    )

    assert transport.sent[0].data["senderName"] == "Admin"
    assert transport.sent[0].data["fileUrl"] == ""


def test_file_shared_prunes_unregistered_tokens(
    db_session, make_user, add_device, fan_out_for
):
    first = make_user("d1@example.com", role="driver")
    second = make_user("d2@example.com", role="driver")
    add_device(first.id, "phone", "T1")
    add_device(second.id, "phone", "T2")
    transport = FakeTransport(errors={"T2": TransportErrorKind.UNREGISTERED})

    notify_file_shared(
        fan_out_for(transport), {"fileName": "route.pdf", "shareWithRole": "driver"}
    )

    devices = DeviceRepository(db_session)
    assert devices.get(first.id, "phone") is not None
    assert devices.get(second.id, "phone") is None
    notifications = NotificationRepository(db_session)
    assert len(notifications.list_for_user(first.id)) == 1
    assert notifications.list_for_user(second.id) == []


def test_file_shared_without_role_is_ignored(transport, fan_out_for, caplog):
    with caplog.at_level(logging.ERROR):
        notify_file_shared(fan_out_for(transport), {"fileName": "route.pdf"})

    assert transport.sent == []
    assert "Missing required parameters: shareWithRole" in caplog.text


def test_file_uploaded_notifies_uploader(
    db_session, make_user, add_device, transport, fan_out_for
):
    """The uploader is notified even before approval."""

    user = make_user("new@example.com", approved=False)
    add_device(user.id, "phone", "T1")
    add_device(user.id, "tablet", "T2")

    notify_file_uploaded(
        fan_out_for(transport),
        {"fileName": "id.png", "fileUrl": "https://files.example.com/id.png", "uploadedBy": user.id},
    )

    assert sorted(transport.tokens) == ["T1", "T2"]
    sent = transport.sent[0]
    assert sent.title == "File upload complete"
    assert sent.body == "id.png was uploaded successfully"
    assert sent.data["fileType"] == "unknown"
    assert len(NotificationRepository(db_session).list_for_user(user.id)) == 2


def test_file_uploaded_prunes_invalid_token(db_session, make_user, add_device, fan_out_for):
    user = make_user("new@example.com")
    add_device(user.id, "phone", "T1")
    transport = FakeTransport(errors={"T1": TransportErrorKind.INVALID_TOKEN})

    notify_file_uploaded(fan_out_for(transport), {"fileName": "id.png", "uploadedBy": user.id})

    assert DeviceRepository(db_session).get(user.id, "phone") is None
    assert NotificationRepository(db_session).list_for_user(user.id) == []


def test_file_uploaded_without_uploader_is_ignored(transport, fan_out_for, caplog):
    with caplog.at_level(logging.ERROR):
        notify_file_uploaded(fan_out_for(transport), {"fileName": "id.png"})

    assert transport.sent == []
    assert "Missing required parameters: uploadedBy" in caplog.text


def test_registered_triggers_react_to_created_records(
    db_session, make_user, add_device, transport, fan_out_for
):
    driver = make_user("driver@example.com", role="driver")
    add_device(driver.id, "phone", "T1")
    bus = RecordEventBus()

    @contextmanager
    def open_fan_out():
        yield fan_out_for(transport)

    register_record_triggers(bus, open_fan_out)

    _, shared = share_file(
        db_session,
        file_name="route.pdf",
        file_url="https://files.example.com/route.pdf",
        shared_by=driver.id,
        share_with_role="Driver",
    )
    _, uploaded = record_uploaded_file(
        db_session,
        file_name="id.png",
        file_url="https://files.example.com/id.png",
        uploaded_by=driver.id,
        file_type="image/png",
    )
    bus.publish(shared)
    bus.publish(uploaded)

    assert [message.title for message in transport.sent] == [
        "New file shared",
        "File upload complete",
    ]
    assert transport.sent[1].data["fileType"] == "image/png"
    assert len(NotificationRepository(db_session).list_for_user(driver.id)) == 2

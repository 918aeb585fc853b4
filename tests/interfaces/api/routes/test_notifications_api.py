"""Integration tests for the notification and file endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.domain.entities import TransportErrorKind
from app.infrastructure.repositories import DeviceRepository, NotificationRepository
from conftest import FakeTransport


@pytest.fixture()
def client(db_session, transport):
    """Return a test client whose push transport records every send."""

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        app.state.push_transport = transport
        yield test_client


def test_email_notification_endpoint(client, make_user, add_device, transport, db_session):
    user = make_user("jane@example.com")
    add_device(user.id, "phone", "T1")

    response = client.post(
        "/notifications/email",
        json={"recipient_email": "Jane@Example.com ", "message": "Your order shipped"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Notification sent successfully: jane@example.com",
        "success_count": 1,
        "failure_count": 0,
        "user_found": True,
    }
    assert transport.tokens == ["T1"]
    assert len(NotificationRepository(db_session).list_for_user(user.id)) == 1


def test_email_notification_endpoint_rejects_missing_parameters(client, transport):
    response = client.post("/notifications/email", json={"recipient_email": "jane@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required parameters: message"
    assert transport.sent == []


def test_role_notification_endpoint(client, make_user, add_device, db_session):
    first = make_user("d1@example.com", role="driver")
    second = make_user("d2@example.com", role="driver")
    add_device(first.id, "phone", "T1")
    add_device(second.id, "phone", "T2")
    client.app.state.push_transport = FakeTransport(
        errors={"T2": TransportErrorKind.UNREGISTERED}
    )

    response = client.post(
        "/notifications/role",
        json={"role": "driver", "title": "Shift", "body": "Report at 8", "data": {"shift": 2}},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Sent 1 notifications successfully",
        "success_count": 1,
        "failure_count": 1,
    }
    db_session.expire_all()
    assert DeviceRepository(db_session).get(second.id, "phone") is None


def test_role_notification_endpoint_without_members(client):
    response = client.post(
        "/notifications/role", json={"role": "nobody", "title": "Shift", "body": "Hi"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "No tokens found for role: nobody"


def test_file_notification_endpoint(client, make_user, add_device, transport):
    user = make_user("jane@example.com")
    add_device(user.id, "phone", "T1")

    response = client.post(
        "/notifications/file",
        json={
            "customer_email": "jane@example.com",
            "file_name": "invoice.pdf",
            "file_url": "https://files.example.com/invoice.pdf",
        },
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert transport.sent[0].body == "invoice.pdf - A new file was sent to you"


def test_uploaded_file_notifies_uploader(client, make_user, add_device, transport, db_session):
    user = make_user("jane@example.com")
    add_device(user.id, "phone", "T1")

    response = client.post(
        "/files/uploaded",
        json={
            "file_name": "id.png",
            "file_url": "https://files.example.com/id.png",
            "uploaded_by": user.id,
            "file_type": "image/png",
        },
    )

    assert response.status_code == 201
    assert response.json()["uploaded_by"] == user.id
    assert [message.title for message in transport.sent] == ["File upload complete"]
    assert transport.sent[0].data["fileType"] == "image/png"
    assert len(NotificationRepository(db_session).list_for_user(user.id)) == 1


def test_shared_file_notifies_role(client, make_user, add_device, transport):
    admin = make_user("admin@example.com", role="admin")
    driver = make_user("driver@example.com", role="driver")
    add_device(driver.id, "phone", "T1")

    response = client.post(
        "/files/shared",
        json={
            "file_name": "route.pdf",
            "file_url": "https://files.example.com/route.pdf",
            "shared_by": admin.id,
            "share_with_role": "Driver",
        },
    )

    assert response.status_code == 201
    assert response.json()["share_with_role"] == "driver"
    assert transport.tokens == ["T1"]
    assert transport.sent[0].data["senderName"] == "admin@example.com"


def test_notification_history_and_mark_read(client, make_user, add_device):
    user = make_user("jane@example.com")
    add_device(user.id, "phone", "T1")
    for message in ("First", "Second"):
        client.post(
            "/notifications/email",
            json={"recipient_email": "jane@example.com", "message": message},
        )

    history = client.get(f"/notifications/users/{user.id}").json()
    assert sorted(entry["body"] for entry in history) == ["First", "Second"]
    assert all(entry["is_read"] is False for entry in history)

    first_id = history[0]["id"]
    response = client.post(
        f"/notifications/users/{user.id}/read", json={"ids": [first_id, first_id]}
    )
    assert response.json() == {"updated": 1}

    unread = client.get(f"/notifications/users/{user.id}", params={"unread_only": True}).json()
    assert len(unread) == 1
    assert unread[0]["id"] != first_id


@pytest.mark.parametrize(
    ("path", "payload", "detail"),
    [
        (
            "/notifications/role",
            {"role": "driver", "body": "Report at 8"},
            "Missing required parameters: title",
        ),
        (
            "/notifications/role",
            {"title": "Shift", "body": "  "},
            "Missing required parameters: role, body",
        ),
        (
            "/notifications/file",
            {"customer_email": "jane@example.com", "file_name": "invoice.pdf"},
            "Missing required parameters: file_url",
        ),
        (
            "/notifications/file",
            {"file_url": "https://files.example.com/invoice.pdf"},
            "Missing required parameters: customer_email, file_name",
        ),
    ],
)
def test_fan_out_endpoints_reject_missing_parameters(client, transport, path, payload, detail):
    response = client.post(path, json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == detail
    assert transport.sent == []

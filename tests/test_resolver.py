"""Tests for recipient resolution and approval gating."""

from __future__ import annotations

from app.application.use_cases.notifications import RecipientResolver
from app.infrastructure.repositories import UserRepository


def test_by_email_normalizes_input(db_session, make_user):
    user = make_user("jane@example.com")

    resolved = RecipientResolver(UserRepository(db_session)).by_email("  Jane@Example.com  ")

    assert resolved is not None
    assert resolved.id == user.id


def test_by_email_returns_none_for_unknown_address(db_session):
    assert RecipientResolver(UserRepository(db_session)).by_email("ghost@example.com") is None


def test_unapproved_customer_is_not_found(db_session, make_user):
    make_user("pending@example.com", approved=False)

    assert RecipientResolver(UserRepository(db_session)).by_email("pending@example.com") is None


def test_unapproved_staff_is_found_by_email(db_session, make_user):
    """Approval gating on email lookups only applies to customers."""

    staff = make_user("ops@example.com", role="staff", approved=False)

    resolved = RecipientResolver(UserRepository(db_session)).by_email("ops@example.com")

    assert resolved is not None
    assert resolved.id == staff.id


def test_by_role_only_returns_approved_members(db_session, make_user):
    approved = make_user("d1@example.com", role="driver")
    make_user("d2@example.com", role="driver", approved=False)
    make_user("c1@example.com", role="customer")

    users = RecipientResolver(UserRepository(db_session)).by_role("Driver")

    assert [user.id for user in users] == [approved.id]


def test_by_role_excludes_unapproved_members_of_any_role(db_session, make_user):
    make_user("admin@example.com", role="admin", approved=False)

    assert list(RecipientResolver(UserRepository(db_session)).by_role("admin")) == []


def test_by_user_id_performs_no_lookup(db_session):
    assert RecipientResolver(UserRepository(db_session)).by_user_id("missing") == "missing"

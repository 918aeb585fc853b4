"""Resolve an email, role or user id into the users that may be notified."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.entities import User, normalize_email
from app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


class RecipientResolver:
    """Map an email, role or user id to the users that may be notified.

    Misses are reported as ``None`` or an empty sequence; only store failures
    propagate.
    """

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def by_email(self, email: str) -> User | None:
        """Return the user registered under ``email`` when it may be notified."""

        normalized = normalize_email(email)
        user = self._users.get_by_email(normalized)
        if user is None:
            logger.info("User not found with email: %s", normalized)
            return None
        if not user.can_receive_notifications():
            logger.info("User found but not approved: %s", normalized)
            return None
        logger.info("User found: %s, id: %s", normalized, user.id)
        return user

    def by_role(self, role: str) -> Sequence[User]:
        """Return every approved user holding ``role``."""

        users = self._users.list_approved_by_role_alias(role)
        logger.info("Found %s approved users for role: %s", len(users), role)
        return users

    @staticmethod
    def by_user_id(user_id: str) -> str:
        # Existence is checked implicitly by the token lookup.
        return user_id

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)


__all__ = ["RecipientResolver"]

"""Use case for creating notification recipients."""

from sqlalchemy.orm import Session

from app.domain.entities import User, normalize_email, normalize_role_alias
from app.infrastructure.repositories import RoleRepository, UserRepository


def create_user(
    session: Session,
    *,
    email: str,
    role_alias: str,
    is_approved: bool = False,
    name: str | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    if not normalized_email:
        raise ValueError("Email is required")
    if repository.get_by_email(normalized_email):
        raise ValueError("Email address is already registered")

    role = RoleRepository(session).get_or_create(normalize_role_alias(role_alias))
    user = User(
        id=None,
        role=role,
        email=normalized_email,
        is_approved=is_approved,
        name=name,
    )
    return repository.create(user)

"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.domain.entities import Role, User, normalize_email, normalize_role_alias
from app.infrastructure.models import RoleModel, UserModel


class UserRepository:
    """Provide read access and seeding helpers for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        """Return the first user whose stored email matches ``email``."""

        normalized = normalize_email(email)
        model = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .filter(func.lower(UserModel.email) == normalized)
            .order_by(UserModel.created_at.asc())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_approved_by_role_alias(self, alias: str) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .options(joinedload(UserModel.role))
            .join(RoleModel, UserModel.role_id == RoleModel.id)
            .filter(func.lower(RoleModel.alias) == normalize_role_alias(alias))
            .filter(UserModel.is_approved.is_(True))
            .order_by(UserModel.created_at.asc(), UserModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel()
        if user.id:
            model.id = user.id
        model.role_id = user.role.id
        model.name = user.name
        model.email = normalize_email(user.email)
        model.is_approved = user.is_approved
        self.session.add(model)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(model)
        if model.role is None:
            self.session.refresh(model, attribute_names=["role"])
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            email=model.email,
            is_approved=bool(model.is_approved),
            name=model.name,
            created_at=model.created_at,
        )

    def _get_model(self, **filters) -> UserModel | None:
        query = self.session.query(UserModel).options(joinedload(UserModel.role))
        return query.filter_by(**filters).first()

    @staticmethod
    def _role_to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["UserRepository"]

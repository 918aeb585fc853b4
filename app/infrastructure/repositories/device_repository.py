"""Persistence helpers for registered push devices."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import DeviceToken
from app.infrastructure.models import DeviceModel


class DeviceRepository:
    """Enumerate and delete the device tokens registered per user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_users(self, user_ids: Iterable[str]) -> Sequence[DeviceToken]:
        unique_ids = list(dict.fromkeys(user_id for user_id in user_ids if user_id))
        if not unique_ids:
            return []
        query = (
            self.session.query(DeviceModel)
            .filter(DeviceModel.user_id.in_(unique_ids))
            .order_by(DeviceModel.user_id.asc(), DeviceModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: str, device_id: str) -> DeviceToken | None:
        model = self._get_model(user_id, device_id)
        return self._to_entity(model) if model else None

    def delete(self, user_id: str, device_id: str) -> bool:
        """Remove the device entry; return ``False`` when it was already gone."""

        model = self._get_model(user_id, device_id)
        if model is None:
            return False
        self.session.delete(model)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return True

    def _get_model(self, user_id: str, device_id: str) -> DeviceModel | None:
        return (
            self.session.query(DeviceModel)
            .filter(DeviceModel.user_id == user_id)
            .filter(DeviceModel.device_id == device_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: DeviceModel) -> DeviceToken:
        return DeviceToken(
            user_id=model.user_id,
            device_id=model.device_id,
            token=model.token or "",
            updated_at=model.updated_at,
        )


__all__ = ["DeviceRepository"]

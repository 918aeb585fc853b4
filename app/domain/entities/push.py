"""Value objects describing a push fan-out and its outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class NotificationPayload:
    """Title, body and string data sent unchanged to every destination token."""

    title: str
    body: str
    data: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {str(key): _as_data_value(value) for key, value in self.data.items()}
        object.__setattr__(self, "data", MappingProxyType(frozen))

    def data_dict(self) -> dict[str, str]:
        """Return a mutable copy of the payload data."""

        return dict(self.data)


def _as_data_value(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class RecipientToken:
    """A live delivery token together with the device that owns it."""

    token: str
    user_id: str
    device_id: str


class TransportErrorKind(str, Enum):
    """Closed set of failure reasons reported by a push transport."""

    UNREGISTERED = "unregistered"
    INVALID_TOKEN = "invalid_token"
    SENDER_ID_MISMATCH = "sender_id_mismatch"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNAVAILABLE = "unavailable"
    AUTHENTICATION = "authentication"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TransportResult:
    """Result of a single transport send."""

    message_id: str | None = None
    error: TransportErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def delivered(cls, message_id: str | None = None) -> "TransportResult":
        return cls(message_id=message_id)

    @classmethod
    def failed(cls, error: TransportErrorKind, detail: str | None = None) -> "TransportResult":
        return cls(error=error, detail=detail)


class DispatchStatus(str, Enum):
    """Classification of a per-token delivery attempt."""

    DELIVERED = "delivered"
    TRANSIENT_FAILURE = "transient_failure"
    PERMANENT_FAILURE = "permanent_failure"


@dataclass(frozen=True)
class DispatchOutcome:
    """Outcome of sending one payload to one token."""

    status: DispatchStatus
    recipient: RecipientToken
    error: TransportErrorKind | None = None
    detail: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status is DispatchStatus.DELIVERED

    @property
    def permanent(self) -> bool:
        return self.status is DispatchStatus.PERMANENT_FAILURE


@dataclass
class FanOutTally:
    """Per-token outcomes of one fan-out, reduced after every send completed."""

    outcomes: list[DispatchOutcome] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.delivered)

    @property
    def failure_count(self) -> int:
        return len(self.outcomes) - self.success_count

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    def delivered(self) -> list[DispatchOutcome]:
        return [outcome for outcome in self.outcomes if outcome.delivered]

    def permanent_failures(self) -> list[DispatchOutcome]:
        return [outcome for outcome in self.outcomes if outcome.permanent]


@dataclass(frozen=True)
class FanOutResult:
    """Summary returned to direct callers of a fan-out.

    ``user_found`` is ``None`` for role broadcasts. For single recipient flows
    it separates "no such (approved) user" from "user without devices" from
    "every send failed".
    """

    success: bool
    message: str
    success_count: int
    failure_count: int
    user_found: bool | None = None

    @classmethod
    def from_tally(
        cls, tally: FanOutTally, *, message: str, user_found: bool | None = None
    ) -> "FanOutResult":
        return cls(
            success=tally.success_count > 0,
            message=message,
            success_count=tally.success_count,
            failure_count=tally.failure_count,
            user_found=user_found,
        )


__all__ = [
    "DispatchOutcome",
    "DispatchStatus",
    "FanOutResult",
    "FanOutTally",
    "NotificationPayload",
    "RecipientToken",
    "TransportErrorKind",
    "TransportResult",
]

"""
Data models for the core module.

This module contains data classes and models used throughout the application.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .result import Err, FetchError, Result


class ObservationState(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class Health(str, Enum):
    PENDING = "pending"
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class PayloadKind(str, Enum):
    MEDIA = "media"
    TABULAR = "tabular"
    EMPTY = "empty"


@dataclass(frozen=True)
class ResourceConfig:
    """A user-registered external endpoint."""

    id: str
    name: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "url": self.url}


@dataclass(frozen=True)
class ResourceObservation:
    """The outcome of the most recent completed fetch of a resource."""

    state: ObservationState = ObservationState.PENDING
    payload: Any = None
    error: FetchError | None = None
    last_fetched_at: datetime | None = None
    # last successful payload, only kept on failure when KEEP_STALE_PAYLOAD is set
    stale_payload: Any = None

    @classmethod
    def pending(cls) -> "ResourceObservation":
        return cls()

    @classmethod
    def from_result(
        cls,
        result: Result[Any, FetchError],
        fetched_at: datetime,
        previous: "ResourceObservation | None" = None,
        keep_stale: bool = False,
    ) -> "ResourceObservation":
        if isinstance(result, Err):
            stale = None
            if keep_stale and previous is not None:
                stale = previous.last_good_payload
            return cls(
                state=ObservationState.FAILURE,
                error=result.error,
                last_fetched_at=fetched_at,
                stale_payload=stale,
            )
        return cls(state=ObservationState.SUCCESS, payload=result.value, last_fetched_at=fetched_at)

    @property
    def health(self) -> Health:
        if self.state == ObservationState.SUCCESS:
            return Health.HEALTHY
        if self.state == ObservationState.FAILURE:
            return Health.UNHEALTHY
        return Health.PENDING

    @property
    def last_good_payload(self) -> Any:
        if self.state == ObservationState.SUCCESS:
            return self.payload
        return self.stale_payload


@dataclass
class ClassifiedPayload:
    """How a payload should be presented. Derived, never persisted."""

    kind: PayloadKind
    items: list[dict[str, Any]] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)

"""
Facade wiring the store, the scheduler and the presentation layer together.
"""

from dataclasses import dataclass
from typing import Any

from .classifier import classify
from .models import (
    ClassifiedPayload,
    Health,
    ObservationState,
    PayloadKind,
    ResourceConfig,
    ResourceObservation,
)
from .render import build_table, render_media
from .result import error_to_dict
from .scheduler import PollScheduler
from .store import ResourceStore

STATUS_LABELS = {
    Health.PENDING: "Pending",
    Health.HEALTHY: "Live",
    Health.UNHEALTHY: "Failed",
}
SYNCING_LABEL = "Syncing..."


@dataclass
class ResourceView:
    """Everything the UI needs to display one resource."""

    resource: ResourceConfig
    observation: ResourceObservation
    syncing: bool = False

    @property
    def status(self) -> str:
        # a failure stays visible while the next attempt runs
        if self.syncing and self.observation.state != ObservationState.FAILURE:
            return SYNCING_LABEL
        return STATUS_LABELS[self.observation.health]

    @property
    def classified(self) -> ClassifiedPayload | None:
        payload = self.observation.last_good_payload
        if self.observation.state == ObservationState.PENDING:
            return None
        if self.observation.state == ObservationState.FAILURE and payload is None:
            return None
        return classify(payload)

    def to_dict(self) -> dict[str, Any]:
        observation = self.observation
        body: dict[str, Any] = {
            **self.resource.to_dict(),
            "health": observation.health.value,
            "status": self.status,
            "last_fetched_at": (
                observation.last_fetched_at.isoformat() if observation.last_fetched_at else None
            ),
            "error": error_to_dict(observation.error) if observation.error else None,
            "stale": (
                observation.state == ObservationState.FAILURE
                and observation.stale_payload is not None
            ),
            "kind": None,
        }
        classified = self.classified
        if classified is None:
            return body
        body["kind"] = classified.kind.value
        if classified.kind == PayloadKind.MEDIA:
            body["tiles"] = [t.to_dict() for t in render_media(classified.items, self.resource.url)]
        elif classified.kind == PayloadKind.TABULAR:
            body["table"] = build_table(classified.items, classified.columns).to_dict()
        return body


class ResourceConnector:
    """Add, remove, refresh and list resources while they are being polled."""

    def __init__(self, store: ResourceStore, scheduler: PollScheduler):
        self.store = store
        self.scheduler = scheduler

    def start(self) -> None:
        self.scheduler.start()

    def add(self, name: str, url: str) -> ResourceConfig:
        resource = self.store.add(name, url)
        self.scheduler.schedule(resource)
        return resource

    def remove(self, resource_id: str) -> None:
        self.store.remove(resource_id)
        self.scheduler.cancel(resource_id)

    def refresh(self, resource_id: str) -> bool:
        if resource_id not in self.store:
            return False
        return self.scheduler.refresh(resource_id)

    def view(self, resource_id: str) -> ResourceView | None:
        entry = self.store.get(resource_id)
        if entry is None:
            return None
        resource, observation = entry
        return ResourceView(resource, observation, self.scheduler.is_in_flight(resource_id))

    def views(self) -> list[ResourceView]:
        return [
            ResourceView(resource, observation, self.scheduler.is_in_flight(resource.id))
            for resource, observation in self.store.list()
        ]

    async def close(self) -> None:
        await self.scheduler.close()

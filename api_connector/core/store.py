"""
Durable, ordered collection of registered resources and their observations.
"""

import json
import logging
import uuid
from typing import Any

from .exceptions import ConfigurationError
from .kv import KeyValueStore
from .models import ResourceConfig, ResourceObservation

logger = logging.getLogger(__name__)


class ResourceStore:
    """Maps resource ids to their config and last observation.

    Insertion order is the display order. Only configurations are persisted;
    observations start as pending after every hydration. Each public method is
    synchronous, so mutations never interleave on the event loop.
    """

    def __init__(self, kv: KeyValueStore, key: str):
        self.kv = kv
        self.key = key
        self._configs: dict[str, ResourceConfig] = {}
        self._observations: dict[str, ResourceObservation] = {}
        self._hydrate()

    def _hydrate(self) -> None:
        raw = self.kv.get(self.key)
        if raw is None:
            return
        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Persisted resources under '{self.key}' are corrupt, starting empty: {e}")
            return
        if not isinstance(records, list):
            logger.warning(f"Persisted resources under '{self.key}' are not a list, starting empty")
            return
        for record in records:
            config = self._parse_record(record)
            if config is None:
                logger.warning(f"Skipping malformed persisted resource: {record!r}")
                continue
            self._configs[config.id] = config
            self._observations[config.id] = ResourceObservation.pending()

    @staticmethod
    def _parse_record(record: Any) -> ResourceConfig | None:
        if not isinstance(record, dict):
            return None
        resource_id, url = record.get("id"), record.get("url")
        if not isinstance(resource_id, str) or not resource_id:
            return None
        if not isinstance(url, str) or not url:
            return None
        name = record.get("name")
        return ResourceConfig(id=resource_id, name=name if isinstance(name, str) else "", url=url)

    def _persist(self, configs: dict[str, ResourceConfig]) -> None:
        self.kv.set(self.key, json.dumps([c.to_dict() for c in configs.values()]))

    def add(self, name: str, url: str) -> ResourceConfig:
        name = (name or "").strip()
        url = (url or "").strip()
        if not url:
            raise ConfigurationError("URL is required")
        if not name:
            raise ConfigurationError("Name is required")
        resource_id = str(uuid.uuid4())
        while resource_id in self._configs:
            resource_id = str(uuid.uuid4())
        config = ResourceConfig(id=resource_id, name=name, url=url)
        # memory only changes once the slot has been written
        self._persist({**self._configs, resource_id: config})
        self._configs[resource_id] = config
        self._observations[resource_id] = ResourceObservation.pending()
        return config

    def remove(self, resource_id: str) -> None:
        if resource_id not in self._configs:
            return
        self._persist({k: c for k, c in self._configs.items() if k != resource_id})
        del self._configs[resource_id]
        self._observations.pop(resource_id, None)

    def get(self, resource_id: str) -> tuple[ResourceConfig, ResourceObservation] | None:
        if resource_id not in self._configs:
            return None
        return self._configs[resource_id], self._observations[resource_id]

    def list(self) -> list[tuple[ResourceConfig, ResourceObservation]]:
        return [(c, self._observations[c.id]) for c in self._configs.values()]

    def record_observation(self, resource_id: str, observation: ResourceObservation) -> bool:
        """Replaces the observation. Returns False if the resource is gone."""
        if resource_id not in self._configs:
            return False
        self._observations[resource_id] = observation
        return True

    def __contains__(self, resource_id: str) -> bool:
        return resource_id in self._configs

    def __len__(self) -> int:
        return len(self._configs)

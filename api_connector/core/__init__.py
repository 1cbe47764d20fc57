"""
Core module for api_connector.

This module contains the business logic separated from the API layer: the
resource store, the fetcher, the shape classifier, the renderers and the poll
scheduler.
"""

from .classifier import classify
from .connector import ResourceConnector, ResourceView
from .exceptions import ConfigurationError, ConnectorException, handle_exception
from .fetcher import Fetcher
from .kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .models import (
    ClassifiedPayload,
    Health,
    ObservationState,
    PayloadKind,
    ResourceConfig,
    ResourceObservation,
)
from .render import render_media, render_table
from .scheduler import PollScheduler
from .store import ResourceStore

__all__ = [
    "ClassifiedPayload",
    "ConfigurationError",
    "ConnectorException",
    "Fetcher",
    "FileKeyValueStore",
    "Health",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "ObservationState",
    "PayloadKind",
    "PollScheduler",
    "ResourceConfig",
    "ResourceConnector",
    "ResourceObservation",
    "ResourceStore",
    "ResourceView",
    "classify",
    "handle_exception",
    "render_media",
    "render_table",
]

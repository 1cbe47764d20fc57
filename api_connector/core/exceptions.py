"""
Exception handling for the core module.
"""

import json

import sentry_sdk
from aiohttp import web

from .. import config


class ConfigurationError(ValueError):
    """A resource is missing a required setting (name or url)."""


class ConnectorException(web.HTTPException):
    """Renders an error as a JSON `{"error": ...}` aiohttp response"""

    def __init__(self, status: int, error: str) -> None:
        self.status_code = status
        super().__init__(content_type="application/json", text=json.dumps({"error": error}))


def handle_exception(status: int, error: str, url: str | None = None):
    """Report server-side errors to Sentry, then raise them as a JSON response."""
    if status >= 500 and config.SENTRY_DSN:
        with sentry_sdk.new_scope() as scope:
            sentry_tags: dict = {"status": status}
            if url:
                sentry_tags["url"] = url
            scope.set_tags(sentry_tags)
            sentry_sdk.capture_message(error, level="error")
    raise ConnectorException(status, error)

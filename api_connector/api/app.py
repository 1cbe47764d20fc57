"""
Main API application factory.

This module creates the aiohttp application with all routes and middleware.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

import sentry_sdk
from aiohttp import ClientSession, web
from aiohttp_swagger import setup_swagger

from api_connector import config
from api_connector.core.connector import ResourceConnector
from api_connector.core.cors import cors_middleware
from api_connector.core.fetcher import Fetcher
from api_connector.core.kv import FileKeyValueStore, KeyValueStore
from api_connector.core.scheduler import PollScheduler
from api_connector.core.sentry import get_sentry_kwargs
from api_connector.core.store import ResourceStore
from api_connector.core.version import get_app_version

from .routes.resources import routes as resource_routes

logger = logging.getLogger(__name__)

SWAGGER_FILE = Path(__file__).parent / "swagger.yaml"


async def health_handler(request):
    """Handle health check requests."""
    start_time = request.app["start_time"]
    current_time = datetime.now(timezone.utc)
    uptime_seconds = (current_time - start_time).total_seconds()
    return web.json_response(
        {
            "status": "ok",
            "version": request.app["app_version"],
            "uptime_seconds": uptime_seconds,
            "resources": len(request.app["connector"].store),
        }
    )


async def app_factory(kv: KeyValueStore | None = None):
    """Create and configure the aiohttp application."""
    if config.SENTRY_DSN:
        sentry_sdk.init(**get_sentry_kwargs())

    async def on_startup(app):
        app["csession"] = ClientSession()
        app["start_time"] = datetime.now(timezone.utc)
        app["app_version"] = await get_app_version()
        backend = kv if kv is not None else FileKeyValueStore(config.STORE_PATH)
        store = ResourceStore(backend, config.STORE_KEY)
        fetcher = Fetcher(app["csession"])
        app["connector"] = ResourceConnector(store, PollScheduler(store, fetcher.fetch))
        app["connector"].start()
        logger.info(f"Loaded {len(store)} resource(s) from '{config.STORE_KEY}'")

    async def on_cleanup(app):
        await app["connector"].close()
        await app["csession"].close()

    app = web.Application(middlewares=[cors_middleware])

    app.add_routes(resource_routes)
    app.router.add_get("/health/", health_handler)

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    setup_swagger(
        app,
        swagger_url=config.DOC_PATH,
        ui_version=3,
        swagger_from_file=str(SWAGGER_FILE),
    )

    return app


def run():
    """Run the application."""
    logging.basicConfig(level=config.LOG_LEVEL)
    web.run_app(app_factory(), path=os.environ.get("CONNECTOR_APP_SOCKET_PATH"))

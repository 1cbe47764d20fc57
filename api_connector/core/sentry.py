from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from api_connector import config


def get_sentry_kwargs():
    """
    Returns Sentry configuration kwargs.

    The integration is created fresh each time to ensure proper initialization
    when sentry_sdk.init() is called.
    """
    return {
        "dsn": config.SENTRY_DSN,
        "integrations": [AioHttpIntegration()],
        "environment": config.SERVER_NAME or "unknown",
        "traces_sample_rate": (
            1.0 if config.SENTRY_SAMPLE_RATE is None else config.SENTRY_SAMPLE_RATE
        ),
    }

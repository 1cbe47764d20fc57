"""
Bounded-time HTTP GET against a resource URL, normalized into a Result.
"""

import asyncio
import json
import logging
from typing import Any

import aiohttp
from aiohttp import ClientSession

from .. import config
from .result import (
    ConnectionFailed,
    Err,
    FetchError,
    HttpStatus,
    InvalidPayload,
    MissingUrl,
    Ok,
    Result,
)

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetches JSON from arbitrary URLs. Never raises: failures are returned as `Err`."""

    def __init__(
        self,
        session: ClientSession,
        timeout: float | None = None,
        body_max_length: int | None = None,
    ):
        self.session = session
        self.timeout = config.FETCH_TIMEOUT if timeout is None else timeout
        self.body_max_length = (
            config.ERROR_BODY_MAX_LENGTH if body_max_length is None else body_max_length
        )

    async def fetch(self, url: str) -> Result[Any, FetchError]:
        if not url:
            return Err(MissingUrl())
        logger.info(f"[Resource] Testing URL: {url}")
        try:
            async with self.session.get(
                url, timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as res:
                logger.info(f"[Resource] Response status: {res.status}")
                # aiohttp considers any status below 400 "ok"
                if not 200 <= res.status < 300:
                    text = await res.text(errors="replace")
                    logger.info(f"[Resource] Error response: {text[:self.body_max_length]}")
                    return Err(
                        HttpStatus(res.status, text[: self.body_max_length], res.reason or "")
                    )
                body = await res.read()
        except asyncio.TimeoutError:
            logger.error(f"[Resource] Timeout after {self.timeout}s: {url}")
            return Err(ConnectionFailed(f"Request timed out after {self.timeout}s"))
        except (aiohttp.ClientError, ValueError) as e:
            # ValueError covers URLs yarl refuses to parse
            logger.error(f"[Resource] Error: {e}")
            return Err(ConnectionFailed(str(e) or type(e).__name__))

        try:
            data = json.loads(body)
        except ValueError as e:
            logger.error(f"[Resource] Invalid JSON from {url}: {e}")
            return Err(InvalidPayload(str(e)))
        if isinstance(data, dict):
            logger.info(f"[Resource] Success. Data keys: {', '.join(data.keys())}")
        else:
            logger.info(f"[Resource] Success. Data type: {type(data).__name__}")
        return Ok(data)

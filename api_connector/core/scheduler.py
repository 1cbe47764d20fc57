"""
Periodic per-resource polling.

Each resource owns one `PollTask`: an asyncio task looping fetch -> record ->
wait, with its own stop event. A resource never has two fetches in flight;
different resources poll independently.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from .. import config
from .models import ResourceConfig, ResourceObservation
from .result import ConnectionFailed, Err, FetchError, Result
from .store import ResourceStore

logger = logging.getLogger(__name__)

FetchFunc = Callable[[str], Awaitable[Result[Any, FetchError]]]


@dataclass
class PollTask:
    resource_id: str
    url: str
    stopped: asyncio.Event = field(default_factory=asyncio.Event)
    wake: asyncio.Event = field(default_factory=asyncio.Event)
    in_flight: bool = False
    task: asyncio.Task | None = None


class PollScheduler:
    def __init__(
        self,
        store: ResourceStore,
        fetch: FetchFunc,
        interval: float | None = None,
        keep_stale: bool | None = None,
    ):
        self.store = store
        self.fetch = fetch
        self.interval = config.POLL_INTERVAL if interval is None else interval
        self.keep_stale = config.KEEP_STALE_PAYLOAD if keep_stale is None else keep_stale
        self.tasks: dict[str, PollTask] = {}
        # cancelled polls still finishing their last fetch
        self.retired: set[asyncio.Task] = set()

    def start(self) -> None:
        """Schedules every resource already in the store."""
        for resource, _ in self.store.list():
            self.schedule(resource)

    def schedule(self, resource: ResourceConfig) -> PollTask:
        """Starts polling a resource now, then every `interval` seconds."""
        if resource.id in self.tasks:
            return self.tasks[resource.id]
        poll = PollTask(resource_id=resource.id, url=resource.url)
        poll.task = asyncio.create_task(self._run(poll), name=f"poll-{resource.id}")
        self.tasks[resource.id] = poll
        logger.info(f"Polling {resource.url} every {self.interval}s ({resource.id})")
        return poll

    def cancel(self, resource_id: str) -> None:
        """Stops polling. An in-flight fetch completes and is then discarded."""
        poll = self.tasks.pop(resource_id, None)
        if poll is None:
            return
        poll.stopped.set()
        poll.wake.set()
        if poll.task is not None and not poll.task.done():
            self.retired.add(poll.task)
            poll.task.add_done_callback(self.retired.discard)
        logger.info(f"Stopped polling {poll.url} ({resource_id})")

    def refresh(self, resource_id: str) -> bool:
        """Requests an immediate fetch, coalesced with any fetch in flight."""
        poll = self.tasks.get(resource_id)
        if poll is None:
            return False
        poll.wake.set()
        return True

    def is_in_flight(self, resource_id: str) -> bool:
        poll = self.tasks.get(resource_id)
        return poll is not None and poll.in_flight

    async def _poll_once(self, poll: PollTask) -> None:
        poll.in_flight = True
        try:
            result = await self.fetch(poll.url)
        except Exception as e:
            logger.exception(f"Unexpected error while fetching {poll.url}")
            result = Err(ConnectionFailed(str(e) or type(e).__name__))
        finally:
            poll.in_flight = False
        current = self.store.get(poll.resource_id)
        observation = ResourceObservation.from_result(
            result,
            fetched_at=datetime.now(timezone.utc),
            previous=current[1] if current else None,
            keep_stale=self.keep_stale,
        )
        if not self.store.record_observation(poll.resource_id, observation):
            logger.debug(f"Discarding result for deleted resource {poll.resource_id}")

    async def _run(self, poll: PollTask) -> None:
        while not poll.stopped.is_set():
            # a refresh arriving while the fetch is in flight re-arms `wake`
            poll.wake.clear()
            await self._poll_once(poll)
            try:
                await asyncio.wait_for(poll.wake.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

    async def close(self) -> None:
        """Tears down every timer, cancelling in-flight fetches."""
        polls = list(self.tasks.values())
        self.tasks.clear()
        for poll in polls:
            poll.stopped.set()
        tasks = [p.task for p in polls if p.task is not None] + list(self.retired)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

"""Scripted delivery progress for demos and tests.

Advances an assigned delivery through picked_up, in_transit and delivered on
a fixed timetable. Nothing in the API uses this module.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Protocol

from ...errors import DeliveryEngineError
from ...models.domain import DeliveryStatus
from .service import DeliveryOrderService

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class ProgressStep:
    delay_seconds: float
    status: DeliveryStatus
    message: str
    location: str | None = None


DEFAULT_STEPS: tuple[ProgressStep, ...] = (
    ProgressStep(30, DeliveryStatus.PICKED_UP, "Package picked up from seller"),
    ProgressStep(60, DeliveryStatus.IN_TRANSIT, "Package is on the way"),
    ProgressStep(90, DeliveryStatus.DELIVERED, "Package delivered successfully"),
)


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, job: Job) -> None:
        ...


@dataclass(order=True)
class _Pending:
    due: float
    seq: int
    job: Job = field(compare=False)


class VirtualScheduler:
    """Runs jobs only when virtual time is advanced."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[_Pending] = []
        self._counter = itertools.count()

    def call_later(self, delay_seconds: float, job: Job) -> None:
        heapq.heappush(self._queue, _Pending(self.now + delay_seconds, next(self._counter), job))

    @property
    def pending(self) -> int:
        return len(self._queue)

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0].due <= target:
            pending = heapq.heappop(self._queue)
            self.now = pending.due
            await pending.job()
        self.now = target


class AsyncioScheduler:
    """Runs jobs on the event loop after a real delay."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def call_later(self, delay_seconds: float, job: Job) -> None:
        async def _run() -> None:
            await asyncio.sleep(delay_seconds)
            await job()

        task = asyncio.get_running_loop().create_task(_run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*self._tasks)


class ProgressSimulator:
    def __init__(
        self,
        service: DeliveryOrderService,
        scheduler: Scheduler,
        steps: tuple[ProgressStep, ...] = DEFAULT_STEPS,
    ) -> None:
        self.service = service
        self.scheduler = scheduler
        self.steps = steps

    def start(self, delivery_id: str) -> None:
        for step in self.steps:
            self.scheduler.call_later(step.delay_seconds, self._job(delivery_id, step))
        logger.info(f"Scheduled {len(self.steps)} progress updates for {delivery_id}")

    def _job(self, delivery_id: str, step: ProgressStep) -> Job:
        async def _advance() -> None:
            try:
                await self.service.update_delivery_status(delivery_id, step.status, step.message, step.location)
            except DeliveryEngineError as exc:
                # Deliveries cancelled or removed mid-run stop advancing.
                logger.warning(f"Skipped simulated {step.status.value} for {delivery_id}: {exc}")

        return _advance

"""Render job status tracking.

The engine owns job state. The tracker only translates the engine's status
vocabulary into the four-state lifecycle:

    queued -> rendering -> done
    queued | rendering -> failed

There is no cancellation path.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable

from scenecast.exceptions import InvalidFieldValueError
from scenecast.schemas.render import EngineJobSnapshot, RenderJob, RenderJobStatus
from scenecast.services.render_engine import RenderEngineClient

logger = logging.getLogger(__name__)

ENGINE_STATUS_MAP: dict[str, RenderJobStatus] = {
    "queued": RenderJobStatus.QUEUED,
    "fetching": RenderJobStatus.RENDERING,
    "preprocessing": RenderJobStatus.RENDERING,
    "rendering": RenderJobStatus.RENDERING,
    "saving": RenderJobStatus.RENDERING,
    "done": RenderJobStatus.DONE,
    "failed": RenderJobStatus.FAILED,
}

ALLOWED_TRANSITIONS: dict[RenderJobStatus, frozenset[RenderJobStatus]] = {
    RenderJobStatus.QUEUED: frozenset(
        {RenderJobStatus.QUEUED, RenderJobStatus.RENDERING, RenderJobStatus.FAILED}
    ),
    RenderJobStatus.RENDERING: frozenset(
        {RenderJobStatus.RENDERING, RenderJobStatus.DONE, RenderJobStatus.FAILED}
    ),
    RenderJobStatus.DONE: frozenset({RenderJobStatus.DONE}),
    RenderJobStatus.FAILED: frozenset({RenderJobStatus.FAILED}),
}


def map_engine_status(engine_status: str) -> RenderJobStatus:
    status = ENGINE_STATUS_MAP.get(engine_status.strip().lower())
    if status is None:
        logger.warning(f"Unknown render engine status '{engine_status}', treating as rendering")
        return RenderJobStatus.RENDERING
    return status


def can_transition(current: RenderJobStatus, new: RenderJobStatus) -> bool:
    return new in ALLOWED_TRANSITIONS[current]


def to_render_job(snapshot: EngineJobSnapshot) -> RenderJob:
    return RenderJob(
        id=snapshot.id,
        status=map_engine_status(snapshot.status),
        engine_status=snapshot.status,
        url=snapshot.url or None,
        poster=snapshot.poster or None,
        thumbnail=snapshot.thumbnail or None,
        error=snapshot.error or None,
        created_at=snapshot.created,
        updated_at=snapshot.updated,
    )


class RenderJobTracker:
    """Polls the engine for job state by id."""

    def __init__(
        self,
        engine: RenderEngineClient,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.engine = engine
        self._sleep = sleep

    async def poll(self, job_id: str) -> RenderJob:
        """Fetch the current state of a job.

        Raises:
            RenderJobNotFoundError: If the engine does not know the id
            RenderStatusError: On transport or upstream failure
        """
        snapshot = await self.engine.get_status(job_id)
        job = to_render_job(snapshot)
        logger.debug(f"Render {job_id}: {job.engine_status} -> {job.status.value}")
        return job

    async def wait_until_terminal(
        self,
        job_id: str,
        *,
        initial_delay_s: float,
        max_delay_s: float,
        multiplier: float,
        max_attempts: int,
        jitter_s: float = 0.0,
    ) -> RenderJob:
        """Poll until the job is done or failed.

        Delays grow geometrically from initial_delay_s up to max_delay_s,
        plus up to jitter_s of random jitter. Returns the last observed job
        after max_attempts polls even if it is not terminal yet.
        """
        if initial_delay_s <= 0 or max_delay_s < initial_delay_s:
            raise InvalidFieldValueError("Backoff delays must satisfy 0 < initial <= max")
        if multiplier < 1 or max_attempts < 1 or jitter_s < 0:
            raise InvalidFieldValueError("Backoff requires multiplier >= 1 and max_attempts >= 1")

        delay = initial_delay_s
        job = await self.poll(job_id)
        for _ in range(max_attempts - 1):
            if job.status.is_terminal:
                break
            await self._sleep(delay + random.uniform(0, jitter_s))
            delay = min(delay * multiplier, max_delay_s)

            previous = job.status
            job = await self.poll(job_id)
            if not can_transition(previous, job.status):
                logger.warning(
                    f"Render {job_id} moved {previous.value} -> {job.status.value} unexpectedly"
                )
        return job

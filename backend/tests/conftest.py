"""
Pytest fixtures for scenecast backend tests.

The render engine is replaced by FakeRenderEngine, an in-memory stand-in
that records submitted payloads and replays scripted job statuses. No test
talks to the real engine.
"""

from typing import Any

import pytest

from scenecast.config import Settings
from scenecast.exceptions import RenderJobNotFoundError
from scenecast.schemas.render import EngineJobSnapshot, SubmittedRender
from scenecast.services.video_service import VideoRenderService


class FakeRenderEngine:
    """In-memory render engine.

    Every submission creates a job in the "queued" state. Use script() to
    make subsequent get_status calls walk through a sequence of engine
    records; the last record repeats once the sequence is exhausted.
    """

    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []
        self.jobs: dict[str, list[dict[str, Any]]] = {}
        self.status_calls: list[str] = []

    async def submit(self, payload: dict[str, Any]) -> SubmittedRender:
        self.payloads.append(payload)
        job_id = f"job-{len(self.payloads)}"
        self.jobs[job_id] = [{"status": "queued"}]
        return SubmittedRender(job_id=job_id, message="Created")

    def script(self, job_id: str, *records: dict[str, Any]) -> None:
        self.jobs[job_id] = list(records)

    async def get_status(self, job_id: str) -> EngineJobSnapshot:
        self.status_calls.append(job_id)
        if job_id not in self.jobs:
            raise RenderJobNotFoundError(job_id)
        records = self.jobs[job_id]
        record = records.pop(0) if len(records) > 1 else records[0]
        return EngineJobSnapshot(id=job_id, **record)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the local environment and .env file."""
    return Settings(
        _env_file=None,
        environment="development",
        render_env="stage",
        render_sandbox_api_key="test-key",
        render_production_api_key="",
        render_callback_url=None,
    )


@pytest.fixture
def engine() -> FakeRenderEngine:
    return FakeRenderEngine()


@pytest.fixture
def service(settings: Settings, engine: FakeRenderEngine) -> VideoRenderService:
    return VideoRenderService(settings, engine)

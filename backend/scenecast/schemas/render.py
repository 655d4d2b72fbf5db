from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

OutputFormat = Literal["mp4", "gif", "webm"]
ResolutionTier = Literal["sd", "hd", "4k"]
OutputQuality = Literal["low", "medium", "high"]


class OutputSpec(BaseModel):
    """Concrete rendering parameters resolved from caller tokens."""

    model_config = ConfigDict(frozen=True)

    format: OutputFormat = "mp4"
    resolution: ResolutionTier = "hd"
    aspect_ratio: str = "16:9"
    width: int = 1920
    height: int = 1080
    fps: int = 30
    quality: OutputQuality = "high"


class RenderJobStatus(str, Enum):
    QUEUED = "queued"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RenderJobStatus.DONE, RenderJobStatus.FAILED)


class RenderJob(BaseModel):
    """Snapshot of a job as reported by the render engine."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: RenderJobStatus
    engine_status: str
    url: str | None = None
    poster: str | None = None
    thumbnail: str | None = None
    error: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SubmittedRender(BaseModel):
    job_id: str
    status: RenderJobStatus = RenderJobStatus.QUEUED
    message: str | None = None


class RenderStatusResponse(BaseModel):
    id: str
    status: RenderJobStatus
    url: str | None = None
    poster: str | None = None
    thumbnail: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    error: str | None = None

    @classmethod
    def from_job(cls, job: RenderJob) -> "RenderStatusResponse":
        return cls(
            id=job.id,
            status=job.status,
            url=job.url,
            poster=job.poster,
            thumbnail=job.thumbnail,
            created=job.created_at,
            updated=job.updated_at,
            error=job.error,
        )


class EngineFeatures(BaseModel):
    video_rendering: bool = True
    templates: bool = True
    voice_integration: bool = True
    music_library: bool = True


class EngineStatusResponse(BaseModel):
    configured: bool
    environment: str
    base_url: str
    templates_available: int
    features: EngineFeatures
    error: str | None = None


class EngineJobSnapshot(BaseModel):
    """Raw job record as returned by the engine's status endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    status: str
    url: str | None = None
    poster: str | None = None
    thumbnail: str | None = None
    error: str | None = None
    created: datetime | None = None
    updated: datetime | None = None

"""Request -> timeline -> render job orchestration.

Each submit_* call compiles the whole request before touching the network,
so validation failures never leave a half-submitted render behind.
"""

import asyncio
import logging
from dataclasses import dataclass

from scenecast.config import Settings
from scenecast.constants.presets import VIDEO_TEMPLATES, find_template
from scenecast.exceptions import RenderEngineError, RenderSubmissionError, TemplateNotFoundError
from scenecast.schemas.render import (
    EngineFeatures,
    EngineStatusResponse,
    OutputSpec,
    RenderStatusResponse,
    SubmittedRender,
)
from scenecast.schemas.envelope import ErrorLocation
from scenecast.schemas.timeline import Timeline
from scenecast.schemas.video import (
    IntroOutroPackRequest,
    IntroOutroPackSubmittedResponse,
    IntroOutroRequest,
    IntroOutroSubmittedResponse,
    PackEntry,
    RawRenderRequest,
    RenderSubmittedResponse,
    ScenesRequest,
    ScenesSubmittedResponse,
    SingleTitleRequest,
    SingleTitleSubmittedResponse,
    TemplateSubmittedResponse,
    TemplateSummary,
    TemplateVideoRequest,
    VideoRequest,
)
from scenecast.services.output_resolver import resolve_output
from scenecast.services.render_engine import RenderEngineClient
from scenecast.services.render_job_client import RenderJobClient
from scenecast.services.render_job_tracker import RenderJobTracker
from scenecast.services.scene_normalizer import NormalizedVideo, normalize_request
from scenecast.services.timeline_compiler import compile_timeline
from scenecast.services.track_composer import compose_tracks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledVideo:
    normalized: NormalizedVideo
    timeline: Timeline
    output: OutputSpec

    @property
    def duration_seconds(self) -> float:
        return self.timeline.duration_seconds


class VideoRenderService:
    """Compiles video requests and drives render jobs on the engine."""

    def __init__(self, settings: Settings, engine: RenderEngineClient):
        self.settings = settings
        self.client = RenderJobClient(engine, callback_url=settings.render_callback_url)
        self.tracker = RenderJobTracker(engine)

    # =========================================================================
    # Compilation (pure)
    # =========================================================================

    def compile(self, request: VideoRequest) -> CompiledVideo:
        normalized = normalize_request(request)
        timeline = compile_timeline(
            normalized.scenes, normalized.layout, background=normalized.background
        )
        timeline = compose_tracks(timeline, normalized.audio, normalized.layout)
        output = resolve_output(
            normalized.aspect_ratio,
            normalized.resolution,
            normalized.format,
            fps=self.settings.render_fps,
            default_quality=self.settings.render_quality,
        )
        return CompiledVideo(normalized=normalized, timeline=timeline, output=output)

    async def _submit(self, compiled: CompiledVideo) -> SubmittedRender:
        return await self.client.submit(compiled.timeline, compiled.output)

    # =========================================================================
    # Inbound operations
    # =========================================================================

    async def submit_single_title_video(
        self, request: SingleTitleRequest
    ) -> SingleTitleSubmittedResponse:
        compiled = self.compile(request)
        logger.info(
            f"Quick video: '{compiled.normalized.scenes[0].title}' "
            f"({compiled.output.aspect_ratio}, {compiled.duration_seconds}s)"
        )
        submitted = await self._submit(compiled)
        return SingleTitleSubmittedResponse(
            job_id=submitted.job_id,
            estimated_duration=compiled.duration_seconds,
        )

    async def submit_scenes_video(self, request: ScenesRequest) -> ScenesSubmittedResponse:
        compiled = self.compile(request)
        scene_count = len(compiled.normalized.scenes)
        logger.info(f"Scenes video: {scene_count} scenes ({compiled.output.aspect_ratio})")
        submitted = await self._submit(compiled)
        return ScenesSubmittedResponse(
            job_id=submitted.job_id,
            scene_count=scene_count,
            total_duration=compiled.duration_seconds,
        )

    async def submit_intro_outro(self, request: IntroOutroRequest) -> IntroOutroSubmittedResponse:
        compiled = self.compile(request)
        logger.info(
            f"Intro/outro: creating {request.kind} video "
            f"({compiled.duration_seconds}s, {compiled.output.aspect_ratio})"
        )
        submitted = await self._submit(compiled)
        return IntroOutroSubmittedResponse(
            job_id=submitted.job_id,
            message=f"{request.kind.capitalize()} video render started",
            kind=request.kind,
            duration=compiled.duration_seconds,
            aspect_ratio=compiled.output.aspect_ratio,
        )

    async def get_render_status(self, job_id: str) -> RenderStatusResponse:
        job = await self.tracker.poll(job_id)
        return RenderStatusResponse.from_job(job)

    # =========================================================================
    # Templates and packs
    # =========================================================================

    async def submit_template_video(self, request: TemplateVideoRequest) -> TemplateSubmittedResponse:
        template = find_template(request.template_id)
        if template is None:
            raise TemplateNotFoundError(request.template_id)

        custom = request.customizations
        single = SingleTitleRequest(
            # Templates render their own name when no title is supplied
            title=custom.title or template.name,
            background_color=custom.background_color or template.background,
            background_image=custom.background_image,
            text_style=custom.text_style or "future",
            voice_url=request.voice_url,
            music_url=request.music_url,
            music_volume=request.music_volume,
            duration=template.duration,
            aspect_ratio=template.aspect_ratio,
            format="mp4",
            resolution="hd",
        )
        compiled = self.compile(single)
        logger.info(f"Template video: {template.name} ({template.aspect_ratio})")
        submitted = await self._submit(compiled)
        return TemplateSubmittedResponse(
            job_id=submitted.job_id,
            template=TemplateSummary(
                id=template.id,
                name=template.name,
                duration=template.duration,
                aspect_ratio=template.aspect_ratio,
            ),
        )

    async def submit_intro_outro_pack(
        self, request: IntroOutroPackRequest
    ) -> IntroOutroPackSubmittedResponse:
        """Submit a matching intro and outro concurrently."""
        shared = dict(
            background_image=request.background_image,
            background_color=request.background_color,
            text_style=request.text_style,
            logo_url=request.logo_url,
            music_url=request.music_url,
            music_volume=request.music_volume,
            voice_volume=request.voice_volume,
            aspect_ratio=request.aspect_ratio,
            format=request.format,
            resolution=request.resolution,
        )
        intro = self.compile(
            IntroOutroRequest(
                kind="intro",
                title=request.title,
                channel_name=request.channel_name,
                voice_url=request.intro_voice_url,
                duration=request.intro_duration,
                effect="zoomIn",
                **shared,
            )
        )
        outro = self.compile(
            IntroOutroRequest(
                kind="outro",
                title=request.channel_name or request.title,
                tagline=request.outro_tagline,
                voice_url=request.outro_voice_url,
                duration=request.outro_duration,
                effect="zoomOut",
                transition="fade",
                **shared,
            )
        )

        logger.info(
            f"Intro/outro pack: intro ({intro.duration_seconds}s) + outro ({outro.duration_seconds}s)"
        )
        intro_job, outro_job = await asyncio.gather(
            self._submit(intro), self._submit(outro), return_exceptions=True
        )
        _raise_pack_failure(intro_job, outro_job)

        return IntroOutroPackSubmittedResponse(
            intro=PackEntry(job_id=intro_job.job_id, duration=intro.duration_seconds),
            outro=PackEntry(job_id=outro_job.job_id, duration=outro.duration_seconds),
            total_duration=intro.duration_seconds + outro.duration_seconds,
        )

    async def submit_raw(self, request: RawRenderRequest) -> RenderSubmittedResponse:
        submitted = await self.client.submit_payload(
            request.timeline, request.output, request.callback
        )
        return RenderSubmittedResponse(
            job_id=submitted.job_id,
            message=submitted.message or "Render started",
        )

    # =========================================================================
    # Engine status
    # =========================================================================

    def engine_status(self) -> EngineStatusResponse:
        configured = bool(self.settings.render_api_key)
        return EngineStatusResponse(
            configured=configured,
            environment=self.settings.render_env,
            base_url=self.settings.render_base_url,
            templates_available=len(VIDEO_TEMPLATES),
            features=EngineFeatures(),
            error=None if configured else "Render engine API key not configured",
        )


def _raise_pack_failure(
    intro_job: SubmittedRender | BaseException, outro_job: SubmittedRender | BaseException
) -> None:
    """Re-raise a pack submission failure, naming the half that was accepted.

    The accepted job keeps rendering on the engine, so its id is carried in
    the error location for the caller to poll or discard.
    """
    halves = (("Intro", intro_job), ("Outro", outro_job))
    failed = [(kind, result) for kind, result in halves if isinstance(result, BaseException)]
    if not failed:
        return

    kind, error = failed[0]
    if len(failed) == 2 or not isinstance(error, RenderEngineError):
        raise error

    accepted_kind, accepted = next(
        (other, result) for other, result in halves if other != kind
    )
    logger.warning(
        f"Intro/outro pack: {kind.lower()} failed to start, "
        f"{accepted_kind.lower()} job {accepted.job_id} was accepted"
    )
    raise RenderSubmissionError(
        f"{kind} render failed to start; {accepted_kind.lower()} job {accepted.job_id} was accepted",
        upstream_status=error.upstream_status,
        upstream_message=error.upstream_message,
        location=ErrorLocation(job_id=accepted.job_id),
    ) from error

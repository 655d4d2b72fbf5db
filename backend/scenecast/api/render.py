import logging

from fastapi import APIRouter, status

from scenecast.api.deps import VideoService
from scenecast.constants.presets import (
    ASPECT_RATIOS,
    COLOR_PRESETS,
    EFFECTS,
    FILTERS,
    FORMATS,
    RESOLUTIONS,
    TEMPLATE_CATEGORIES,
    TEXT_STYLES,
    TRANSITIONS,
    filter_templates,
    find_template,
)
from scenecast.exceptions import TemplateNotFoundError
from scenecast.schemas.catalog import (
    PresetsResponse,
    TemplateDetailResponse,
    TemplateListResponse,
)
from scenecast.schemas.render import EngineStatusResponse, RenderStatusResponse
from scenecast.schemas.video import (
    IntroOutroPackRequest,
    IntroOutroPackSubmittedResponse,
    IntroOutroRequest,
    IntroOutroSubmittedResponse,
    RawRenderRequest,
    RenderSubmittedResponse,
    ScenesRequest,
    ScenesSubmittedResponse,
    SingleTitleRequest,
    SingleTitleSubmittedResponse,
    TemplateSubmittedResponse,
    TemplateVideoRequest,
)

router = APIRouter()
logger = logging.getLogger(__name__)


# =============================================================================
# Catalog
# =============================================================================


@router.get("/engine-status", response_model=EngineStatusResponse)
async def get_engine_status(service: VideoService) -> EngineStatusResponse:
    return service.engine_status()


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(
    category: str | None = None,
    aspect_ratio: str | None = None,
) -> TemplateListResponse:
    templates = filter_templates(category=category, aspect_ratio=aspect_ratio)
    return TemplateListResponse(
        templates=templates,
        categories=TEMPLATE_CATEGORIES,
        aspect_ratios=list(ASPECT_RATIOS),
        text_styles=TEXT_STYLES,
        color_presets=COLOR_PRESETS,
        total=len(templates),
    )


@router.get("/templates/{template_id}", response_model=TemplateDetailResponse)
async def get_template(template_id: str) -> TemplateDetailResponse:
    template = find_template(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return TemplateDetailResponse(
        template=template,
        text_styles=TEXT_STYLES,
        color_presets=COLOR_PRESETS,
    )


@router.get("/presets", response_model=PresetsResponse)
async def get_presets() -> PresetsResponse:
    return PresetsResponse(
        text_styles=TEXT_STYLES,
        color_presets=COLOR_PRESETS,
        transitions=TRANSITIONS,
        effects=EFFECTS,
        filters=FILTERS,
        aspect_ratios=ASPECT_RATIOS,
        formats=FORMATS,
        resolutions=RESOLUTIONS,
    )


# =============================================================================
# Render submission
# =============================================================================


@router.post("", response_model=RenderSubmittedResponse, status_code=status.HTTP_201_CREATED)
async def submit_render(
    request: RawRenderRequest,
    service: VideoService,
) -> RenderSubmittedResponse:
    """Submit a pre-built timeline/output payload."""
    return await service.submit_raw(request)


@router.post(
    "/quick-video",
    response_model=SingleTitleSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_quick_video(
    request: SingleTitleRequest,
    service: VideoService,
) -> SingleTitleSubmittedResponse:
    """Render a single title card with optional voice and music."""
    return await service.submit_single_title_video(request)


@router.post(
    "/scenes-video",
    response_model=ScenesSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_scenes_video(
    request: ScenesRequest,
    service: VideoService,
) -> ScenesSubmittedResponse:
    """Render an ordered list of scenes played back to back."""
    return await service.submit_scenes_video(request)


@router.post(
    "/intro-outro",
    response_model=IntroOutroSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_intro_outro(
    request: IntroOutroRequest,
    service: VideoService,
) -> IntroOutroSubmittedResponse:
    return await service.submit_intro_outro(request)


@router.post(
    "/intro-outro-pack",
    response_model=IntroOutroPackSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_intro_outro_pack(
    request: IntroOutroPackRequest,
    service: VideoService,
) -> IntroOutroPackSubmittedResponse:
    return await service.submit_intro_outro_pack(request)


@router.post(
    "/template-video",
    response_model=TemplateSubmittedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_template_video(
    request: TemplateVideoRequest,
    service: VideoService,
) -> TemplateSubmittedResponse:
    return await service.submit_template_video(request)


# =============================================================================
# Job status
# =============================================================================


@router.get("/jobs/{job_id}", response_model=RenderStatusResponse)
async def get_render_status(job_id: str, service: VideoService) -> RenderStatusResponse:
    """Current state of a render job, read through from the engine."""
    return await service.get_render_status(job_id)

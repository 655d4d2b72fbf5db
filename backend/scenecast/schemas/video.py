"""Request and response schemas for the video render endpoints."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from scenecast.schemas.timeline import ClipPosition, EffectType, TransitionType

IntroOutroKind = Literal["intro", "outro"]

DEFAULT_BACKGROUND_COLOR = "#1a1a2e"
DEFAULT_TEXT_STYLE = "future"


# =============================================================================
# Canonical scene
# =============================================================================


class Scene(BaseModel):
    """One visual beat with defaults resolved. Durations are milliseconds."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    subtitle: str | None = None
    background_image: str | None = None
    background_color: str = DEFAULT_BACKGROUND_COLOR
    duration_ms: int
    text_style: str = DEFAULT_TEXT_STYLE
    title_position: ClipPosition = "center"
    effect: EffectType = "zoomIn"
    transition_in: TransitionType = "fade"
    transition_out: TransitionType = "fade"
    # Intro/outro only
    logo: str | None = None
    tagline: str | None = None


# =============================================================================
# Request variants
# =============================================================================


class SceneInput(BaseModel):
    """A caller-supplied scene. Omitted fields fall back to defaults."""

    # JSON Infinity/NaN are rejected before any millisecond arithmetic
    model_config = ConfigDict(allow_inf_nan=False)

    title: str | None = None
    subtitle: str | None = None
    background_image: str | None = None
    background_color: str | None = None
    duration: float | None = None  # seconds
    text_style: str | None = None
    title_position: ClipPosition | None = None
    effect: EffectType | None = None


class SingleTitleRequest(BaseModel):
    """Title card over an optional background image."""

    model_config = ConfigDict(allow_inf_nan=False)

    variant: Literal["single_title"] = "single_title"
    title: str | None = None
    subtitle: str | None = None
    background_color: str = DEFAULT_BACKGROUND_COLOR
    background_image: str | None = None
    text_style: str = DEFAULT_TEXT_STYLE
    voice_url: str | None = None
    music_url: str | None = None
    music_volume: float = 0.3
    voice_volume: float = 1.0
    duration: float = 15
    aspect_ratio: str = "16:9"
    format: str = "mp4"
    resolution: str = "1080"


class ScenesRequest(BaseModel):
    """Ordered list of scenes played back to back."""

    model_config = ConfigDict(allow_inf_nan=False)

    variant: Literal["scenes"] = "scenes"
    scenes: list[SceneInput] = Field(default_factory=list)
    music_url: str | None = None
    music_volume: float = 0.3
    voice_url: str | None = None
    voice_volume: float = 1.0
    aspect_ratio: str = "16:9"
    format: str = "mp4"
    resolution: str = "1080"
    transition_type: TransitionType = "fade"


class IntroOutroRequest(BaseModel):
    """Short branded card opening or closing a video."""

    model_config = ConfigDict(allow_inf_nan=False)

    variant: Literal["intro_outro"] = "intro_outro"
    kind: IntroOutroKind = "intro"
    title: str | None = None
    subtitle: str | None = None
    channel_name: str | None = None
    tagline: str | None = None
    logo_url: str | None = None
    background_image: str | None = None
    background_color: str = DEFAULT_BACKGROUND_COLOR
    text_style: str = DEFAULT_TEXT_STYLE
    music_url: str | None = None
    music_volume: float = 0.6
    voice_url: str | None = None
    voice_volume: float = 1.0
    duration: float = 5
    fade_in: float = 0.5
    fade_out: float = 1.0
    aspect_ratio: str = "16:9"
    format: str = "mp4"
    resolution: str = "1080"
    effect: EffectType = "zoomIn"
    transition: TransitionType = "slideUp"  # title entrance


VideoRequest = Annotated[
    SingleTitleRequest | ScenesRequest | IntroOutroRequest, Field(discriminator="variant")
]


class TemplateCustomizations(BaseModel):
    title: str | None = None
    text_style: str | None = None
    background_image: str | None = None
    background_color: str | None = None


class TemplateVideoRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    template_id: str
    customizations: TemplateCustomizations = Field(default_factory=TemplateCustomizations)
    voice_url: str | None = None
    music_url: str | None = None
    music_volume: float = 0.3


class IntroOutroPackRequest(BaseModel):
    """Matching intro and outro sharing one look."""

    model_config = ConfigDict(allow_inf_nan=False)

    title: str | None = None
    channel_name: str | None = None
    outro_tagline: str | None = "Thanks for watching! Subscribe for more."
    background_image: str | None = None
    background_color: str = DEFAULT_BACKGROUND_COLOR
    text_style: str = DEFAULT_TEXT_STYLE
    logo_url: str | None = None
    music_url: str | None = None
    music_volume: float = 0.6
    intro_voice_url: str | None = None
    outro_voice_url: str | None = None
    voice_volume: float = 1.0
    intro_duration: float = 5
    outro_duration: float = 10
    aspect_ratio: str = "16:9"
    format: str = "mp4"
    resolution: str = "1080"


class RawRenderRequest(BaseModel):
    """Pre-built engine payload forwarded as-is."""

    timeline: dict[str, Any] | None = None
    output: dict[str, Any] | None = None
    callback: str | None = None


# =============================================================================
# Responses
# =============================================================================


class RenderSubmittedResponse(BaseModel):
    job_id: str
    status: Literal["queued"] = "queued"
    message: str = "Video render started"


class SingleTitleSubmittedResponse(RenderSubmittedResponse):
    estimated_duration: float


class ScenesSubmittedResponse(RenderSubmittedResponse):
    scene_count: int
    total_duration: float


class IntroOutroSubmittedResponse(RenderSubmittedResponse):
    kind: IntroOutroKind
    duration: float
    aspect_ratio: str


class TemplateSummary(BaseModel):
    id: str
    name: str
    duration: float
    aspect_ratio: str


class TemplateSubmittedResponse(RenderSubmittedResponse):
    template: TemplateSummary


class PackEntry(BaseModel):
    job_id: str
    duration: float
    status: Literal["queued"] = "queued"


class IntroOutroPackSubmittedResponse(BaseModel):
    intro: PackEntry
    outro: PackEntry
    total_duration: float
    message: str = "Intro and outro renders started"

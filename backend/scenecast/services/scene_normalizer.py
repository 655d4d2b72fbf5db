"""Validate caller requests and resolve defaults into canonical scenes.

One normalize function per request variant. All validation happens here,
before anything is compiled or sent to the render engine.
"""

from dataclasses import dataclass
from typing import Literal

from scenecast.constants.presets import TEXT_STYLES
from scenecast.exceptions import (
    InvalidDurationError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
)
from scenecast.schemas.video import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_TEXT_STYLE,
    IntroOutroKind,
    IntroOutroRequest,
    Scene,
    ScenesRequest,
    SingleTitleRequest,
    VideoRequest,
)
from scenecast.services.timeline_compiler import (
    SCENES_LAYOUT,
    SINGLE_TITLE_LAYOUT,
    ClipLayout,
    intro_outro_layout,
    to_ms,
)
from scenecast.services.track_composer import AudioMix, soundtrack_effect_for

DEFAULT_SINGLE_TITLE_DURATION_S = 15
DEFAULT_SCENE_DURATION_S = 5
DEFAULT_INTRO_OUTRO_DURATION_S = 5
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_RESOLUTION = "hd"
DEFAULT_FORMAT = "mp4"

VideoVariant = Literal["single_title", "scenes", "intro_outro"]


@dataclass(frozen=True)
class NormalizedVideo:
    """Everything the compiler and output resolver need for one request."""

    variant: VideoVariant
    scenes: tuple[Scene, ...]
    layout: ClipLayout
    audio: AudioMix
    background: str
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    resolution: str = DEFAULT_RESOLUTION
    format: str = DEFAULT_FORMAT
    kind: IntroOutroKind | None = None

    @property
    def duration_ms(self) -> int:
        return sum(scene.duration_ms for scene in self.scenes)


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _text_style(value: str | None) -> str:
    """Engine title style; friendly preset names ("bold", "modern") are accepted."""
    style = _or_default(value, DEFAULT_TEXT_STYLE)
    return TEXT_STYLES.get(style, style)


def _or_default(value: str | None, default: str) -> str:
    return _text(value) or default


def _duration_ms(
    seconds: float | None,
    default_s: float,
    *,
    scene_index: int | None = None,
    field: str = "duration",
) -> int:
    duration_ms = to_ms(default_s if seconds is None else seconds)
    if duration_ms <= 0:
        raise InvalidDurationError(duration_ms=duration_ms, scene_index=scene_index, field=field)
    return duration_ms


def _volume(value: float, field: str) -> float:
    if value < 0:
        raise InvalidFieldValueError(field=field, value=value)
    return value


def _audio(
    *,
    voice_url: str | None,
    voice_volume: float,
    music_url: str | None,
    music_volume: float,
    kind: IntroOutroKind | None = None,
) -> AudioMix:
    return AudioMix(
        voice_url=_text(voice_url),
        voice_volume=_volume(voice_volume, "voice_volume"),
        music_url=_text(music_url),
        music_volume=_volume(music_volume, "music_volume"),
        soundtrack_effect=soundtrack_effect_for(kind),
    )


def normalize_single_title(request: SingleTitleRequest) -> NormalizedVideo:
    title = _text(request.title)
    if title is None:
        raise MissingRequiredFieldError("title", "Title is required")

    background_color = _or_default(request.background_color, DEFAULT_BACKGROUND_COLOR)
    scene = Scene(
        title=title,
        subtitle=_text(request.subtitle),
        background_image=_text(request.background_image),
        background_color=background_color,
        duration_ms=_duration_ms(request.duration, DEFAULT_SINGLE_TITLE_DURATION_S),
        text_style=_text_style(request.text_style),
    )
    return NormalizedVideo(
        variant="single_title",
        scenes=(scene,),
        layout=SINGLE_TITLE_LAYOUT,
        audio=_audio(
            voice_url=request.voice_url,
            voice_volume=request.voice_volume,
            music_url=request.music_url,
            music_volume=request.music_volume,
        ),
        background=background_color,
        aspect_ratio=_or_default(request.aspect_ratio, DEFAULT_ASPECT_RATIO),
        resolution=_or_default(request.resolution, DEFAULT_RESOLUTION),
        format=_or_default(request.format, DEFAULT_FORMAT),
    )


def normalize_scenes(request: ScenesRequest) -> NormalizedVideo:
    if not request.scenes:
        raise MissingRequiredFieldError("scenes", "At least one scene is required")

    scenes = tuple(
        Scene(
            title=_text(item.title),
            subtitle=_text(item.subtitle),
            background_image=_text(item.background_image),
            background_color=_or_default(item.background_color, DEFAULT_BACKGROUND_COLOR),
            duration_ms=_duration_ms(item.duration, DEFAULT_SCENE_DURATION_S, scene_index=index),
            text_style=_text_style(item.text_style),
            title_position=item.title_position or "center",
            effect=item.effect or "zoomIn",
            transition_in=request.transition_type,
            transition_out=request.transition_type,
        )
        for index, item in enumerate(request.scenes)
    )
    return NormalizedVideo(
        variant="scenes",
        scenes=scenes,
        layout=SCENES_LAYOUT,
        audio=_audio(
            voice_url=request.voice_url,
            voice_volume=request.voice_volume,
            music_url=request.music_url,
            music_volume=request.music_volume,
        ),
        background=scenes[0].background_color,
        aspect_ratio=_or_default(request.aspect_ratio, DEFAULT_ASPECT_RATIO),
        resolution=_or_default(request.resolution, DEFAULT_RESOLUTION),
        format=_or_default(request.format, DEFAULT_FORMAT),
    )


def normalize_intro_outro(request: IntroOutroRequest) -> NormalizedVideo:
    duration_ms = _duration_ms(request.duration, DEFAULT_INTRO_OUTRO_DURATION_S)
    fade_in_ms = to_ms(request.fade_in)
    fade_out_ms = to_ms(request.fade_out)
    if fade_in_ms < 0:
        raise InvalidFieldValueError(field="fade_in", value=request.fade_in)
    if fade_out_ms < 0:
        raise InvalidFieldValueError(field="fade_out", value=request.fade_out)
    if fade_in_ms + fade_out_ms > duration_ms:
        raise InvalidDurationError(
            f"fade_in + fade_out ({fade_in_ms + fade_out_ms}ms) exceeds duration ({duration_ms}ms)"
        )

    background_color = _or_default(request.background_color, DEFAULT_BACKGROUND_COLOR)
    scene = Scene(
        title=_text(request.title),
        subtitle=_text(request.subtitle) or _text(request.channel_name),
        background_image=_text(request.background_image),
        background_color=background_color,
        duration_ms=duration_ms,
        text_style=_text_style(request.text_style),
        effect=request.effect,
        logo=_text(request.logo_url),
        # Taglines ("Subscribe for more!") only close a video
        tagline=_text(request.tagline) if request.kind == "outro" else None,
    )
    return NormalizedVideo(
        variant="intro_outro",
        scenes=(scene,),
        layout=intro_outro_layout(fade_in_ms, fade_out_ms, request.transition),
        audio=_audio(
            voice_url=request.voice_url,
            voice_volume=request.voice_volume,
            music_url=request.music_url,
            music_volume=request.music_volume,
            kind=request.kind,
        ),
        background=background_color,
        aspect_ratio=_or_default(request.aspect_ratio, DEFAULT_ASPECT_RATIO),
        resolution=_or_default(request.resolution, DEFAULT_RESOLUTION),
        format=_or_default(request.format, DEFAULT_FORMAT),
        kind=request.kind,
    )


def normalize_request(request: VideoRequest) -> NormalizedVideo:
    """Dispatch to the normalizer for the request's variant."""
    if isinstance(request, SingleTitleRequest):
        return normalize_single_title(request)
    if isinstance(request, ScenesRequest):
        return normalize_scenes(request)
    if isinstance(request, IntroOutroRequest):
        return normalize_intro_outro(request)
    raise InvalidFieldValueError(f"Unsupported request type: {type(request).__name__}")

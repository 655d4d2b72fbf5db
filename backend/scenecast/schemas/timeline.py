"""Compiled render timeline.

All times are integer milliseconds. Conversion to the engine's seconds-based
wire format happens only when the payload is built for submission.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

TransitionType = Literal[
    "none",
    "fade",
    "reveal",
    "wipeLeft",
    "wipeRight",
    "slideLeft",
    "slideRight",
    "slideUp",
    "slideDown",
    "zoom",
]
EffectType = Literal["zoomIn", "zoomOut", "slideLeft", "slideRight", "slideUp", "slideDown"]
ClipPosition = Literal[
    "center", "top", "topRight", "right", "bottomRight", "bottom", "bottomLeft", "left", "topLeft"
]
ClipFit = Literal["cover", "contain", "crop", "none"]
SoundtrackEffect = Literal["fadeIn", "fadeOut", "fadeInFadeOut"]
TrackKind = Literal["title", "subtitle", "tagline", "overlay", "background", "voice"]


class ImageAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    src: str


class ColorAsset(BaseModel):
    """Solid colour block, sent to the engine as an empty HTML asset."""

    model_config = ConfigDict(frozen=True)

    type: Literal["html"] = "html"
    background: str


class TitleAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["title"] = "title"
    text: str
    style: str = "future"
    size: Literal["xx-small", "x-small", "small", "medium", "large", "x-large", "xx-large"] = (
        "medium"
    )


class AudioAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["audio"] = "audio"
    src: str
    volume: float = Field(default=1.0, ge=0.0)


ClipAsset = Annotated[
    ImageAsset | ColorAsset | TitleAsset | AudioAsset, Field(discriminator="type")
]


class Transition(BaseModel):
    model_config = ConfigDict(frozen=True)

    in_: TransitionType = "none"
    out: TransitionType = "none"


class Clip(BaseModel):
    """A single timed element placed on a track."""

    model_config = ConfigDict(frozen=True)

    asset: ClipAsset
    start_ms: int = Field(ge=0)
    length_ms: int = Field(gt=0)
    fit: ClipFit | None = None
    scale: float | None = None
    position: ClipPosition | None = None
    effect: EffectType | None = None
    transition: Transition | None = None

    @property
    def end_ms(self) -> int:
        return self.start_ms + self.length_ms


class Track(BaseModel):
    """Ordered, non-overlapping clips of one kind."""

    model_config = ConfigDict(frozen=True)

    kind: TrackKind
    clips: tuple[Clip, ...] = ()

    @property
    def end_ms(self) -> int:
        return max((clip.end_ms for clip in self.clips), default=0)


class Soundtrack(BaseModel):
    """Background music spanning the whole timeline."""

    model_config = ConfigDict(frozen=True)

    src: str
    effect: SoundtrackEffect = "fadeInFadeOut"
    volume: float = Field(default=0.3, ge=0.0)


class Timeline(BaseModel):
    """Compiled multi-track timeline.

    Tracks are ordered top-most layer first, which is the engine's
    stacking convention.
    """

    model_config = ConfigDict(frozen=True)

    background: str = "#1a1a2e"
    tracks: tuple[Track, ...] = ()
    soundtrack: Soundtrack | None = None
    duration_ms: int = Field(ge=0)

    @property
    def duration_seconds(self) -> float:
        return self.duration_ms / 1000

    def track(self, kind: TrackKind) -> Track | None:
        """Return the first track of the given kind, if any."""
        for track in self.tracks:
            if track.kind == kind:
                return track
        return None

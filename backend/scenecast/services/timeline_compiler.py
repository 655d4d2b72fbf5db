"""Compile ordered scenes into a multi-track render timeline.

This is a deterministic conversion. Scenes are laid end to end on an integer
millisecond cursor, so the total duration is exactly the sum of the scene
durations no matter how many scenes are chained.

Track layout (top-most first, the engine's stacking order):
- title:      scene titles, inset from the scene edges
- subtitle:   scene subtitles, inset with a later onset
- tagline:    outro taglines
- overlay:    logos
- background: one image or colour block per scene, edge to edge
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from scenecast.exceptions import InvalidDurationError, MissingRequiredFieldError
from scenecast.schemas.timeline import (
    Clip,
    ColorAsset,
    ImageAsset,
    TitleAsset,
    Track,
    Timeline,
    Transition,
    TransitionType,
)
from scenecast.schemas.video import Scene

logger = logging.getLogger(__name__)

BOUNDARY_TRANSITION: TransitionType = "fade"


def to_ms(seconds: float) -> int:
    """Convert caller-supplied seconds to integer milliseconds."""
    return int(round(float(seconds) * 1000))


@dataclass(frozen=True)
class Inset:
    """Leading/trailing margin applied inside an enclosing window."""

    lead_ms: int = 0
    tail_ms: int = 0

    def window(
        self, start_ms: int, length_ms: int, fallback: tuple[int, int] | None = None
    ) -> tuple[int, int]:
        """Return (start_ms, length_ms) of the inset window.

        When the margins would leave nothing, returns ``fallback`` if given,
        otherwise the whole enclosing window.
        """
        inner_start = start_ms + self.lead_ms
        inner_end = start_ms + length_ms - self.tail_ms
        if inner_end <= inner_start:
            return fallback or (start_ms, length_ms)
        return inner_start, inner_end - inner_start


@dataclass(frozen=True)
class ClipLayout:
    """Per-request-kind placement of text and voice relative to scene edges."""

    title: Inset
    subtitle: Inset
    voice: Inset
    title_transition_in: TransitionType = "fade"
    title_transition_out: TransitionType = "fade"
    logo_scale: float = 0.3


SINGLE_TITLE_LAYOUT = ClipLayout(
    title=Inset(500, 500),
    subtitle=Inset(1500, 500),
    voice=Inset(500, 500),
)

SCENES_LAYOUT = ClipLayout(
    title=Inset(300, 300),
    subtitle=Inset(600, 400),
    voice=Inset(300, 300),
)


def intro_outro_layout(
    fade_in_ms: int, fade_out_ms: int, title_transition: TransitionType = "slideUp"
) -> ClipLayout:
    """Text and voice sit between the fade-in and the fade-out."""
    return ClipLayout(
        title=Inset(fade_in_ms, fade_out_ms),
        subtitle=Inset(fade_in_ms + 300, fade_out_ms),
        voice=Inset(fade_in_ms, fade_out_ms),
        title_transition_in=title_transition,
    )


def scene_transition(index: int, count: int, scene: Scene) -> Transition:
    """Background transition for a scene, applying the boundary rule.

    The first scene always fades in and the last scene always fades out;
    interior edges keep the configured transition.
    """
    return Transition(
        in_=BOUNDARY_TRANSITION if index == 0 else scene.transition_in,
        out=BOUNDARY_TRANSITION if index == count - 1 else scene.transition_out,
    )


def compile_timeline(
    scenes: Sequence[Scene],
    layout: ClipLayout = SCENES_LAYOUT,
    *,
    background: str | None = None,
) -> Timeline:
    """Compile ordered scenes into a Timeline.

    Args:
        scenes: Normalized scenes in playback order
        layout: Text placement for the request kind
        background: Timeline background colour (defaults to the first scene's)

    Returns:
        Timeline with visual tracks only and duration_ms equal to the sum
        of the scene durations

    Raises:
        MissingRequiredFieldError: If scenes is empty
        InvalidDurationError: If any scene duration is not positive
    """
    if not scenes:
        raise MissingRequiredFieldError("scenes", "At least one scene is required")

    titles: list[Clip] = []
    subtitles: list[Clip] = []
    taglines: list[Clip] = []
    overlays: list[Clip] = []
    backgrounds: list[Clip] = []

    count = len(scenes)
    cursor_ms = 0

    for index, scene in enumerate(scenes):
        duration_ms = scene.duration_ms
        if duration_ms <= 0:
            raise InvalidDurationError(duration_ms=duration_ms, scene_index=index)

        backgrounds.append(_background_clip(scene, cursor_ms, index, count))

        title_window = layout.title.window(cursor_ms, duration_ms)

        if scene.title:
            start, length = title_window
            titles.append(
                Clip(
                    asset=TitleAsset(text=scene.title, style=scene.text_style, size="medium"),
                    start_ms=start,
                    length_ms=length,
                    position=scene.title_position,
                    transition=Transition(
                        in_=layout.title_transition_in, out=layout.title_transition_out
                    ),
                )
            )

        if scene.subtitle:
            # never ahead of the title it belongs to
            start, length = layout.subtitle.window(cursor_ms, duration_ms, title_window)
            subtitles.append(
                Clip(
                    asset=TitleAsset(text=scene.subtitle, style="subtitle", size="small"),
                    start_ms=start,
                    length_ms=length,
                    position="bottom",
                    transition=Transition(in_="fade", out="fade"),
                )
            )

        if scene.logo:
            start, length = title_window
            overlays.append(
                Clip(
                    asset=ImageAsset(src=scene.logo),
                    start_ms=start,
                    length_ms=length,
                    fit="contain",
                    scale=layout.logo_scale,
                    position="top" if scene.title else "center",
                    transition=Transition(in_="fade", out="fade"),
                )
            )

        if scene.tagline:
            # 40% in, held for half the scene
            taglines.append(
                Clip(
                    asset=TitleAsset(text=scene.tagline, style="chunk", size="small"),
                    start_ms=cursor_ms + duration_ms * 2 // 5,
                    length_ms=max(duration_ms // 2, 1),
                    position="bottom",
                    transition=Transition(in_="slideUp", out="fade"),
                )
            )

        cursor_ms += duration_ms

    tracks = [
        Track(kind=kind, clips=tuple(clips))
        for kind, clips in (
            ("title", titles),
            ("subtitle", subtitles),
            ("tagline", taglines),
            ("overlay", overlays),
            ("background", backgrounds),
        )
        if clips
    ]

    logger.debug(f"Compiled {count} scene(s) into {len(tracks)} track(s), {cursor_ms}ms")

    return Timeline(
        background=background or scenes[0].background_color,
        tracks=tuple(tracks),
        duration_ms=cursor_ms,
    )


def _background_clip(scene: Scene, start_ms: int, index: int, count: int) -> Clip:
    transition = scene_transition(index, count, scene)
    if scene.background_image:
        return Clip(
            asset=ImageAsset(src=scene.background_image),
            start_ms=start_ms,
            length_ms=scene.duration_ms,
            fit="cover",
            effect=scene.effect,
            transition=transition,
        )
    return Clip(
        asset=ColorAsset(background=scene.background_color),
        start_ms=start_ms,
        length_ms=scene.duration_ms,
        transition=transition,
    )

"""Layer voice-over and background music onto a compiled timeline.

Music and voice are mixed independently by the engine. There is no ducking
of the music under the voice.
"""

from dataclasses import dataclass

from scenecast.schemas.timeline import AudioAsset, Clip, Soundtrack, SoundtrackEffect, Timeline, Track
from scenecast.schemas.video import IntroOutroKind
from scenecast.services.timeline_compiler import ClipLayout


@dataclass(frozen=True)
class AudioMix:
    """Audio layers requested for a video."""

    voice_url: str | None = None
    voice_volume: float = 1.0
    music_url: str | None = None
    music_volume: float = 0.3
    soundtrack_effect: SoundtrackEffect = "fadeInFadeOut"


def soundtrack_effect_for(kind: IntroOutroKind | None) -> SoundtrackEffect:
    """Music fades in on intros, out on outros, and both ways otherwise."""
    if kind == "intro":
        return "fadeIn"
    if kind == "outro":
        return "fadeOut"
    return "fadeInFadeOut"


def compose_tracks(timeline: Timeline, audio: AudioMix, layout: ClipLayout) -> Timeline:
    """Return a copy of the timeline with soundtrack and voice attached.

    Visual tracks are passed through untouched. The voice clip is inset by
    the layout's voice margins so narration never starts at 0 nor runs into
    the end of the timeline.
    """
    soundtrack = timeline.soundtrack
    if audio.music_url:
        soundtrack = Soundtrack(
            src=audio.music_url,
            effect=audio.soundtrack_effect,
            volume=audio.music_volume,
        )

    tracks = timeline.tracks
    if audio.voice_url:
        start_ms, length_ms = layout.voice.window(0, timeline.duration_ms)
        voice = Track(
            kind="voice",
            clips=(
                Clip(
                    asset=AudioAsset(src=audio.voice_url, volume=audio.voice_volume),
                    start_ms=start_ms,
                    length_ms=length_ms,
                ),
            ),
        )
        tracks = (*tracks, voice)

    return timeline.model_copy(update={"soundtrack": soundtrack, "tracks": tracks})

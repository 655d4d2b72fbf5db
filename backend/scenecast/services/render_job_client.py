"""Serialize compiled timelines and submit them to the render engine.

The engine works in seconds and camelCase keys; compiled timelines use
integer milliseconds. Conversion happens here and nowhere else.
"""

import logging
from typing import Any

from scenecast.exceptions import MissingRequiredFieldError
from scenecast.schemas.render import OutputSpec, SubmittedRender
from scenecast.schemas.timeline import Clip, Timeline, Track
from scenecast.services.render_engine import RenderEngineClient

logger = logging.getLogger(__name__)


def ms_to_seconds(value_ms: int) -> float:
    return value_ms / 1000


def clip_to_payload(clip: Clip) -> dict[str, Any]:
    asset = clip.asset
    if asset.type == "html":
        asset_payload: dict[str, Any] = {
            "type": "html",
            "html": "<p></p>",
            "background": asset.background,
        }
    else:
        asset_payload = asset.model_dump()

    payload: dict[str, Any] = {
        "asset": asset_payload,
        "start": ms_to_seconds(clip.start_ms),
        "length": ms_to_seconds(clip.length_ms),
    }
    if clip.fit is not None:
        payload["fit"] = clip.fit
    if clip.scale is not None:
        payload["scale"] = clip.scale
    if clip.position is not None:
        payload["position"] = clip.position
    if clip.effect is not None:
        payload["effect"] = clip.effect
    if clip.transition is not None:
        transition = {}
        if clip.transition.in_ != "none":
            transition["in"] = clip.transition.in_
        if clip.transition.out != "none":
            transition["out"] = clip.transition.out
        if transition:
            payload["transition"] = transition
    return payload


def track_to_payload(track: Track) -> dict[str, Any]:
    return {"clips": [clip_to_payload(clip) for clip in track.clips]}


def timeline_to_payload(timeline: Timeline) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "background": timeline.background,
        "tracks": [track_to_payload(track) for track in timeline.tracks],
    }
    if timeline.soundtrack is not None:
        payload["soundtrack"] = {
            "src": timeline.soundtrack.src,
            "effect": timeline.soundtrack.effect,
            "volume": timeline.soundtrack.volume,
        }
    return payload


def output_to_payload(output: OutputSpec) -> dict[str, Any]:
    # The engine rejects "size" alongside "resolution", so dimensions are
    # conveyed through aspectRatio only.
    return {
        "format": output.format,
        "resolution": output.resolution,
        "aspectRatio": output.aspect_ratio,
        "fps": output.fps,
        "quality": output.quality,
    }


def build_render_payload(
    timeline: Timeline, output: OutputSpec, callback: str | None = None
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "timeline": timeline_to_payload(timeline),
        "output": output_to_payload(output),
    }
    if callback:
        payload["callback"] = callback
    return payload


class RenderJobClient:
    """Submits render payloads. Holds no job state."""

    def __init__(self, engine: RenderEngineClient, callback_url: str | None = None):
        self.engine = engine
        self.callback_url = callback_url

    async def submit(
        self, timeline: Timeline, output: OutputSpec, callback: str | None = None
    ) -> SubmittedRender:
        payload = build_render_payload(timeline, output, callback or self.callback_url)
        logger.info(
            f"Submitting render: {len(timeline.tracks)} track(s), "
            f"{timeline.duration_seconds}s, {output.aspect_ratio} {output.resolution} {output.format}"
        )
        return await self.engine.submit(payload)

    async def submit_payload(
        self,
        timeline: dict[str, Any] | None,
        output: dict[str, Any] | None,
        callback: str | None = None,
    ) -> SubmittedRender:
        """Forward a caller-built payload unchanged."""
        if not timeline or not output:
            field = "output" if timeline else "timeline"
            raise MissingRequiredFieldError(field, "Timeline and output are required")
        payload: dict[str, Any] = {"timeline": timeline, "output": output}
        if callback or self.callback_url:
            payload["callback"] = callback or self.callback_url
        return await self.engine.submit(payload)

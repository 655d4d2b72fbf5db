"""Tests for timeline -> engine payload serialization."""

import pytest

from scenecast.exceptions import MissingRequiredFieldError
from scenecast.schemas.render import OutputSpec
from scenecast.schemas.timeline import Clip, ImageAsset, Timeline, Track, Transition
from scenecast.services.render_job_client import (
    RenderJobClient,
    build_render_payload,
    clip_to_payload,
)


class TestPayload:
    def test_milliseconds_become_seconds(self):
        clip = Clip(asset=ImageAsset(src="https://x/a.jpg"), start_ms=1250, length_ms=3333)
        payload = clip_to_payload(clip)

        assert payload["start"] == 1.25
        assert payload["length"] == 3.333
        assert "transition" not in payload

    def test_none_transitions_are_omitted(self):
        clip = Clip(
            asset=ImageAsset(src="https://x/a.jpg"),
            start_ms=0,
            length_ms=1000,
            transition=Transition(in_="fade", out="none"),
        )
        assert clip_to_payload(clip)["transition"] == {"in": "fade"}

    def test_output_uses_engine_keys(self):
        timeline = Timeline(
            tracks=(Track(kind="background", clips=(Clip(asset=ImageAsset(src="s"), start_ms=0, length_ms=10),)),),
            duration_ms=10,
        )
        payload = build_render_payload(timeline, OutputSpec(aspect_ratio="9:16", width=1080, height=1920))

        assert payload["output"] == {
            "format": "mp4",
            "resolution": "hd",
            "aspectRatio": "9:16",
            "fps": 30,
            "quality": "high",
        }
        assert payload["timeline"]["background"] == "#1a1a2e"
        assert "soundtrack" not in payload["timeline"]


class TestSubmitPayload:
    @pytest.mark.asyncio
    async def test_missing_output(self, engine):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            await RenderJobClient(engine).submit_payload({"tracks": []}, None)

        assert exc_info.value.location.field == "output"
        assert engine.payloads == []

    @pytest.mark.asyncio
    async def test_default_callback(self, engine):
        client = RenderJobClient(engine, callback_url="https://hooks.example.com/cb")
        await client.submit_payload({"tracks": []}, {"format": "mp4"})

        assert engine.payloads[0]["callback"] == "https://hooks.example.com/cb"

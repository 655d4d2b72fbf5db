"""Tests for request validation and default resolution."""

import pytest
from pydantic import ValidationError as SchemaValidationError

from scenecast.exceptions import (
    InvalidDurationError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
)
from scenecast.schemas.video import (
    DEFAULT_BACKGROUND_COLOR,
    IntroOutroRequest,
    SceneInput,
    ScenesRequest,
    SingleTitleRequest,
)
from scenecast.services.scene_normalizer import (
    normalize_intro_outro,
    normalize_request,
    normalize_scenes,
    normalize_single_title,
)
from scenecast.services.timeline_compiler import SCENES_LAYOUT, SINGLE_TITLE_LAYOUT


class TestSingleTitle:
    def test_defaults(self):
        video = normalize_single_title(SingleTitleRequest(title="Hello World"))
        scene = video.scenes[0]

        assert video.variant == "single_title"
        assert video.layout is SINGLE_TITLE_LAYOUT
        assert scene.title == "Hello World"
        assert scene.duration_ms == 15000
        assert scene.background_color == DEFAULT_BACKGROUND_COLOR
        assert scene.text_style == "future"
        assert video.audio.music_volume == 0.3
        assert video.audio.soundtrack_effect == "fadeInFadeOut"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_title_is_required(self, title):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            normalize_single_title(SingleTitleRequest(title=title))

        assert exc_info.value.location.field == "title"

    @pytest.mark.parametrize("duration", [0, -1])
    def test_non_positive_duration(self, duration):
        with pytest.raises(InvalidDurationError):
            normalize_single_title(SingleTitleRequest(title="Hi", duration=duration))

    def test_negative_volume(self):
        with pytest.raises(InvalidFieldValueError) as exc_info:
            normalize_single_title(SingleTitleRequest(title="Hi", music_volume=-0.1))

        assert exc_info.value.location.field == "music_volume"

    def test_friendly_text_style_is_mapped(self):
        video = normalize_single_title(SingleTitleRequest(title="Hi", text_style="bold"))
        assert video.scenes[0].text_style == "blockbuster"

    def test_blank_urls_are_dropped(self):
        video = normalize_single_title(
            SingleTitleRequest(title="Hi", voice_url=" ", music_url="", background_image="")
        )

        assert video.audio.voice_url is None
        assert video.audio.music_url is None
        assert video.scenes[0].background_image is None


class TestScenes:
    def test_empty_scene_list(self):
        with pytest.raises(MissingRequiredFieldError):
            normalize_scenes(ScenesRequest(scenes=[]))

    def test_per_scene_defaults(self):
        video = normalize_scenes(
            ScenesRequest(
                scenes=[SceneInput(title="A"), SceneInput(duration=2.5, effect="zoomOut")],
                transition_type="wipeLeft",
            )
        )

        assert video.layout is SCENES_LAYOUT
        assert [s.duration_ms for s in video.scenes] == [5000, 2500]
        assert video.scenes[1].effect == "zoomOut"
        assert all(s.transition_in == "wipeLeft" for s in video.scenes)
        assert video.duration_ms == 7500

    def test_bad_scene_duration_reports_index(self):
        with pytest.raises(InvalidDurationError) as exc_info:
            normalize_scenes(
                ScenesRequest(scenes=[SceneInput(duration=1), SceneInput(duration=0)])
            )

        assert exc_info.value.location.scene_index == 1

    def test_timeline_background_follows_first_scene(self):
        video = normalize_scenes(
            ScenesRequest(
                scenes=[SceneInput(background_color="#111111"), SceneInput(background_color="#222222")]
            )
        )
        assert video.background == "#111111"


class TestIntroOutro:
    def test_intro_defaults(self):
        video = normalize_intro_outro(IntroOutroRequest(title="Welcome", channel_name="My Channel"))
        scene = video.scenes[0]

        assert video.kind == "intro"
        assert scene.duration_ms == 5000
        assert scene.subtitle == "My Channel"
        assert video.audio.music_volume == 0.6
        assert video.audio.soundtrack_effect == "fadeIn"
        assert video.layout.title.lead_ms == 500
        assert video.layout.title.tail_ms == 1000
        assert video.layout.subtitle.lead_ms == 800
        assert video.layout.title_transition_in == "slideUp"

    def test_tagline_only_on_outro(self):
        intro = normalize_intro_outro(IntroOutroRequest(kind="intro", tagline="Subscribe"))
        outro = normalize_intro_outro(IntroOutroRequest(kind="outro", tagline="Subscribe"))

        assert intro.scenes[0].tagline is None
        assert outro.scenes[0].tagline == "Subscribe"
        assert outro.audio.soundtrack_effect == "fadeOut"

    def test_fades_longer_than_duration(self):
        with pytest.raises(InvalidDurationError):
            normalize_intro_outro(IntroOutroRequest(duration=1, fade_in=0.6, fade_out=0.6))

    def test_fades_equal_to_duration_are_allowed(self):
        video = normalize_intro_outro(IntroOutroRequest(duration=2, fade_in=1, fade_out=1))
        assert video.duration_ms == 2000

    def test_negative_fade(self):
        with pytest.raises(InvalidFieldValueError):
            normalize_intro_outro(IntroOutroRequest(fade_in=-1))


class TestDispatch:
    def test_dispatches_on_request_type(self):
        assert normalize_request(SingleTitleRequest(title="x")).variant == "single_title"
        assert normalize_request(ScenesRequest(scenes=[SceneInput()])).variant == "scenes"
        assert normalize_request(IntroOutroRequest()).variant == "intro_outro"


class TestNonFiniteNumbers:
    """Infinity and NaN never reach the millisecond conversion."""

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_single_title_duration(self, value):
        with pytest.raises(SchemaValidationError):
            SingleTitleRequest(title="x", duration=value)

    def test_scene_duration(self):
        with pytest.raises(SchemaValidationError):
            ScenesRequest(scenes=[SceneInput(duration=float("inf"))])

    def test_music_volume(self):
        with pytest.raises(SchemaValidationError):
            IntroOutroRequest(music_volume=float("nan"))

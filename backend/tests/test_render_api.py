"""
Tests for the /api/render endpoints.

These tests verify:
- Submission endpoints return job ids and compiled durations
- Catalog endpoints (templates, presets, engine status)
- Errors use the envelope format (request_id, error, meta)

The render engine dependency is overridden with the in-memory fake.

Run with: pytest backend/tests/test_render_api.py -v
"""

import uuid

import pytest
from fastapi.testclient import TestClient

from scenecast.api.deps import get_video_service
from scenecast.config import get_settings
from scenecast.exceptions import RenderSubmissionError
from scenecast.main import app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def client(service):
    """FastAPI test client wired to the fake engine."""
    app.dependency_overrides[get_video_service] = lambda: service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def _assert_error_envelope(data: dict, code: str) -> None:
    assert "request_id" in data
    uuid.UUID(data["request_id"])
    assert data["error"]["code"] == code
    assert "message" in data["error"]
    assert data["meta"]["api_version"] == "1.0"
    assert "processing_time_ms" in data["meta"]


# =============================================================================
# Submission
# =============================================================================


class TestSubmission:
    def test_quick_video(self, client, engine):
        response = client.post(
            "/api/render/quick-video",
            json={"title": "Hello World", "duration": 15, "aspect_ratio": "16:9"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["job_id"] == "job-1"
        assert data["status"] == "queued"
        assert data["estimated_duration"] == 15
        assert len(engine.payloads) == 1

    def test_scenes_video(self, client):
        response = client.post(
            "/api/render/scenes-video",
            json={
                "scenes": [{"title": "A", "duration": 3}, {"title": "B", "duration": 4}],
                "transition_type": "wipeLeft",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["scene_count"] == 2
        assert data["total_duration"] == 7

    def test_intro_outro(self, client):
        response = client.post(
            "/api/render/intro-outro",
            json={"kind": "outro", "title": "Thanks", "aspect_ratio": "1:1"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "outro"
        assert data["duration"] == 5
        assert data["aspect_ratio"] == "1:1"

    def test_intro_outro_pack(self, client, engine):
        response = client.post("/api/render/intro-outro-pack", json={"channel_name": "My Channel"})

        assert response.status_code == 201
        data = response.json()
        assert data["total_duration"] == 15
        assert {data["intro"]["job_id"], data["outro"]["job_id"]} == {"job-1", "job-2"}

    def test_template_video(self, client):
        response = client.post(
            "/api/render/template-video", json={"template_id": "instagram-post"}
        )

        assert response.status_code == 201
        assert response.json()["template"]["aspect_ratio"] == "1:1"

    def test_raw_render(self, client, engine):
        response = client.post(
            "/api/render",
            json={"timeline": {"tracks": []}, "output": {"format": "mp4"}},
        )

        assert response.status_code == 201
        assert engine.payloads[0] == {"timeline": {"tracks": []}, "output": {"format": "mp4"}}


# =============================================================================
# Job status
# =============================================================================


class TestJobStatus:
    def test_lifecycle(self, client, engine):
        job_id = client.post("/api/render/quick-video", json={"title": "Hi"}).json()["job_id"]
        engine.script(
            job_id,
            {"status": "fetching"},
            {"status": "done", "url": "https://cdn.example.com/hi.mp4", "error": None},
        )

        first = client.get(f"/api/render/jobs/{job_id}").json()
        second = client.get(f"/api/render/jobs/{job_id}").json()

        assert first["status"] == "rendering"
        assert second["status"] == "done"
        assert second["url"] == "https://cdn.example.com/hi.mp4"
        assert second["id"] == job_id

    def test_unknown_job(self, client):
        response = client.get("/api/render/jobs/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        _assert_error_envelope(data, "RENDER_JOB_NOT_FOUND")
        assert data["error"]["location"]["job_id"] == "does-not-exist"


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    def test_missing_title(self, client, engine):
        response = client.post("/api/render/quick-video", json={"title": ""})

        assert response.status_code == 400
        _assert_error_envelope(response.json(), "MISSING_REQUIRED_FIELD")
        assert engine.payloads == []

    def test_bad_scene_duration(self, client):
        response = client.post(
            "/api/render/scenes-video", json={"scenes": [{"duration": 2}, {"duration": 0}]}
        )

        assert response.status_code == 400
        data = response.json()
        _assert_error_envelope(data, "INVALID_DURATION")
        assert data["error"]["location"]["scene_index"] == 1

    def test_schema_violation(self, client):
        response = client.post("/api/render/scenes-video", json={"scenes": "not-a-list"})

        assert response.status_code == 422
        _assert_error_envelope(response.json(), "VALIDATION_ERROR")

    def test_unknown_template(self, client):
        response = client.post("/api/render/template-video", json={"template_id": "nope"})

        assert response.status_code == 404
        _assert_error_envelope(response.json(), "TEMPLATE_NOT_FOUND")

    def test_raw_without_timeline(self, client):
        response = client.post("/api/render", json={"output": {"format": "mp4"}})

        assert response.status_code == 400
        _assert_error_envelope(response.json(), "MISSING_REQUIRED_FIELD")

    def test_engine_rejection_exposes_upstream_outside_production(self, client, engine):
        async def reject(payload):
            raise RenderSubmissionError(upstream_status=400, upstream_message="Invalid asset src")

        engine.submit = reject
        response = client.post("/api/render/quick-video", json={"title": "Hi"})

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "RENDER_SUBMISSION_FAILED"
        assert error["upstream_status"] == 400
        assert error["upstream_message"] == "Invalid asset src"

    def test_engine_rejection_hides_upstream_in_production(self, client, engine, settings):
        async def reject(payload):
            raise RenderSubmissionError(upstream_status=400, upstream_message="Invalid asset src")

        engine.submit = reject
        production = settings.model_copy(update={"environment": "production"})
        app.dependency_overrides[get_settings] = lambda: production
        response = client.post("/api/render/quick-video", json={"title": "Hi"})

        assert response.status_code == 502
        data = response.json()
        _assert_error_envelope(data, "RENDER_SUBMISSION_FAILED")
        assert "upstream_status" not in data["error"]
        assert "upstream_message" not in data["error"]

    @pytest.mark.parametrize(
        "body",
        [
            '{"title": "Hello", "duration": Infinity}',
            '{"title": "Hello", "duration": NaN}',
            '{"title": "Hello", "music_volume": NaN}',
        ],
    )
    def test_non_finite_numbers(self, client, engine, body):
        response = client.post(
            "/api/render/quick-video",
            content=body,
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 422
        _assert_error_envelope(response.json(), "VALIDATION_ERROR")
        assert engine.payloads == []

    def test_non_finite_scene_duration(self, client):
        response = client.post(
            "/api/render/scenes-video",
            content='{"scenes": [{"title": "A", "duration": -Infinity}]}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 422
        _assert_error_envelope(response.json(), "VALIDATION_ERROR")


# =============================================================================
# Catalog
# =============================================================================


class TestCatalog:
    def test_templates(self, client):
        data = client.get("/api/render/templates").json()

        assert data["total"] == 12
        assert "social" in data["categories"]
        assert data["text_styles"]["bold"] == "blockbuster"

    def test_templates_filtered(self, client):
        data = client.get(
            "/api/render/templates", params={"category": "social", "aspect_ratio": "9:16"}
        ).json()

        assert data["total"] == 3
        assert all(t["aspect_ratio"] == "9:16" for t in data["templates"])

    def test_template_detail(self, client):
        response = client.get("/api/render/templates/youtube-intro")

        assert response.status_code == 200
        assert response.json()["template"]["duration"] == 5

    def test_presets(self, client):
        data = client.get("/api/render/presets").json()

        assert data["aspect_ratios"]["9:16"] == {
            "name": "Portrait (TikTok/Reels)",
            "width": 1080,
            "height": 1920,
        }
        assert "wipeLeft" in data["transitions"]
        assert data["resolutions"] == ["sd", "hd", "4k"]

    def test_engine_status(self, client):
        data = client.get("/api/render/engine-status").json()

        assert data["configured"] is True
        assert data["environment"] == "stage"
        assert data["features"]["video_rendering"] is True


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_version(self, client):
        assert "version" in client.get("/api/version").json()

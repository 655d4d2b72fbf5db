"""HTTP client for the external render engine (Shotstack Edit API)."""

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from scenecast.config import Settings
from scenecast.exceptions import (
    ConfigurationError,
    RenderJobNotFoundError,
    RenderStatusError,
    RenderSubmissionError,
)
from scenecast.schemas.render import EngineJobSnapshot, SubmittedRender

logger = logging.getLogger(__name__)


class RenderEngineClient(Protocol):
    """The two calls the render engine supports."""

    async def submit(self, payload: dict[str, Any]) -> SubmittedRender: ...

    async def get_status(self, job_id: str) -> EngineJobSnapshot: ...


def _upstream_message(response: httpx.Response) -> str:
    """Best-effort error message from an engine error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = response.text.strip()
    return text[:500] if text else f"Render engine API error: {response.status_code}"


class ShotstackRenderEngine:
    """RenderEngineClient backed by httpx.

    Stateless: every call opens its own client with the configured timeout,
    so any number of jobs can be submitted or polled concurrently.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings
        self.transport = transport

    def _api_key(self) -> str:
        api_key = self.settings.render_api_key
        if not api_key:
            raise ConfigurationError(
                f"Render engine API key not configured for environment '{self.settings.render_env}'"
            )
        return api_key

    def _client(self) -> httpx.AsyncClient:
        """Create an async HTTP client with auth headers."""
        return httpx.AsyncClient(
            base_url=self.settings.render_base_url,
            headers={"x-api-key": self._api_key()},
            timeout=self.settings.render_request_timeout_s,
            transport=self.transport,
        )

    async def submit(self, payload: dict[str, Any]) -> SubmittedRender:
        """POST /render. Returns the engine-assigned job id."""
        client = self._client()
        try:
            async with client:
                response = await client.post("/render", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Render submission transport error: {e!r}")
            raise RenderSubmissionError(upstream_message=str(e) or type(e).__name__) from e

        if response.status_code >= 400:
            message = _upstream_message(response)
            logger.error(f"Render engine rejected submission: {response.status_code} {message}")
            raise RenderSubmissionError(
                upstream_status=response.status_code, upstream_message=message
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RenderSubmissionError(
                upstream_status=response.status_code,
                upstream_message="Render engine returned a non-JSON response",
            ) from e

        result = body.get("response") if isinstance(body, dict) else None
        job_id = result.get("id") if isinstance(result, dict) else None
        if not job_id:
            raise RenderSubmissionError(
                upstream_status=response.status_code,
                upstream_message="Render engine response did not include a job id",
            )

        logger.info(f"Render started - ID: {job_id}")
        return SubmittedRender(job_id=str(job_id), message=result.get("message"))

    async def get_status(self, job_id: str) -> EngineJobSnapshot:
        """GET /render/{id}."""
        client = self._client()
        try:
            async with client:
                response = await client.get(f"/render/{job_id}")
        except httpx.HTTPError as e:
            logger.error(f"Render status transport error for {job_id}: {e!r}")
            raise RenderStatusError(upstream_message=str(e) or type(e).__name__) from e

        if response.status_code == 404:
            raise RenderJobNotFoundError(job_id, upstream_message=_upstream_message(response))
        if response.status_code >= 400:
            message = _upstream_message(response)
            logger.error(f"Render status check failed for {job_id}: {response.status_code} {message}")
            raise RenderStatusError(
                f"Failed to check render status: {response.status_code}",
                upstream_status=response.status_code,
                upstream_message=message,
            )

        try:
            body = response.json()
            result = body["response"]
            if not result.get("error"):
                # The engine reports "" for jobs without an error
                result = {**result, "error": None}
            return EngineJobSnapshot.model_validate(result)
        except (ValueError, KeyError, TypeError, AttributeError, PydanticValidationError) as e:
            raise RenderStatusError(
                upstream_status=response.status_code,
                upstream_message=f"Unexpected render status response: {e}",
            ) from e

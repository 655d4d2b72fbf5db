"""Custom exceptions for the scenecast backend.

These exceptions carry machine-readable error codes and map onto the
envelope error responses produced by the API exception handlers.
"""

from typing import Any

from scenecast.constants.error_codes import get_error_spec
from scenecast.schemas.envelope import ErrorInfo, ErrorLocation, SuggestedAction


class SceneCastError(Exception):
    """Base exception for all scenecast application errors."""

    code: str = "INTERNAL_ERROR"
    status_code: int = 500
    message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        location: ErrorLocation | None = None,
        suggested_fix: str | None = None,
    ):
        self.message = message or self.__class__.message
        if code:
            self.code = code
        if status_code:
            self.status_code = status_code
        self.location = location
        self.suggested_fix = suggested_fix
        super().__init__(self.message)

    def to_error_info(self, *, expose_upstream: bool = False) -> ErrorInfo:
        """Convert exception to ErrorInfo for API response."""
        spec = get_error_spec(self.code)
        retryable = spec.get("retryable", False)

        suggested_actions: list[SuggestedAction] = []
        if "suggested_action" in spec:
            action = SuggestedAction(
                action=spec["suggested_action"],
                endpoint=spec.get("suggested_endpoint"),
                parameters=spec.get("parameters", {}),
            )
            suggested_actions.append(action)

        # Use suggested_fix from spec, or explicit override from exception
        suggested_fix = self.suggested_fix or spec.get("suggested_fix")

        return ErrorInfo(
            code=self.code,
            message=self.message,
            location=self.location,
            retryable=retryable,
            suggested_fix=suggested_fix,
            suggested_actions=suggested_actions,
        )


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(SceneCastError):
    """Bad or missing caller input. Raised before any network call."""

    code = "VALIDATION_ERROR"
    status_code = 400
    message = "Invalid request"


class MissingRequiredFieldError(ValidationError):
    """Required field is missing."""

    code = "MISSING_REQUIRED_FIELD"
    message = "Required field is missing"

    def __init__(self, field: str | None = None, message: str | None = None):
        msg = message or (f"Required field is missing: {field}" if field else self.message)
        location = ErrorLocation(field=field) if field else None
        super().__init__(msg, location=location)


class InvalidFieldValueError(ValidationError):
    """Field value is invalid."""

    code = "INVALID_FIELD_VALUE"
    message = "Invalid field value"

    def __init__(
        self, message: str | None = None, *, field: str | None = None, value: Any = None
    ):
        msg = message or self.message
        if message is None and field and value is not None:
            msg = f"Invalid value for field '{field}': {value}"
        location = ErrorLocation(field=field) if field else None
        super().__init__(msg, location=location)


class InvalidDurationError(ValidationError):
    """Duration is non-positive or too short for its fades."""

    code = "INVALID_DURATION"
    message = "Invalid duration"

    def __init__(
        self,
        message: str | None = None,
        *,
        duration_ms: int | None = None,
        scene_index: int | None = None,
        field: str | None = "duration",
    ):
        msg = message or self.message
        if message is None and duration_ms is not None:
            msg = f"Duration must be greater than 0 (got {duration_ms}ms)"
        location = ErrorLocation(field=field, scene_index=scene_index)
        super().__init__(msg, location=location)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class TemplateNotFoundError(SceneCastError):
    """Video template not found."""

    code = "TEMPLATE_NOT_FOUND"
    status_code = 404
    message = "Template not found"

    def __init__(self, template_id: str | None = None):
        message = f"Template not found: {template_id}" if template_id else self.message
        super().__init__(message)


# =============================================================================
# Configuration Errors (500)
# =============================================================================


class ConfigurationError(SceneCastError):
    """Render engine credential absent for the active environment."""

    code = "RENDER_ENGINE_NOT_CONFIGURED"
    status_code = 500
    message = "Render engine API not configured"


# =============================================================================
# Render Engine Errors (502/404)
# =============================================================================


class RenderEngineError(SceneCastError):
    """Base class for failures reported by or while talking to the engine."""

    status_code = 502

    def __init__(
        self,
        message: str | None = None,
        *,
        upstream_status: int | None = None,
        upstream_message: str | None = None,
        location: ErrorLocation | None = None,
    ):
        self.upstream_status = upstream_status
        self.upstream_message = upstream_message
        super().__init__(message, location=location)

    def to_error_info(self, *, expose_upstream: bool = False) -> ErrorInfo:
        info = super().to_error_info(expose_upstream=expose_upstream)
        if expose_upstream:
            info.upstream_status = self.upstream_status
            info.upstream_message = self.upstream_message
        return info


class RenderSubmissionError(RenderEngineError):
    """The engine rejected the compiled timeline or could not be reached."""

    code = "RENDER_SUBMISSION_FAILED"
    message = "Failed to start video render"


class RenderStatusError(RenderEngineError):
    """Polling a render job failed."""

    code = "RENDER_STATUS_FAILED"
    message = "Failed to check render status"


class RenderJobNotFoundError(RenderStatusError):
    """The engine does not know the job id."""

    code = "RENDER_JOB_NOT_FOUND"
    status_code = 404
    message = "Render job not found"

    def __init__(self, job_id: str | None = None, *, upstream_message: str | None = None):
        message = f"Render job not found: {job_id}" if job_id else self.message
        location = ErrorLocation(job_id=job_id) if job_id else None
        super().__init__(
            message, upstream_status=404, upstream_message=upstream_message, location=location
        )


# =============================================================================
# System Errors (500)
# =============================================================================


class UnexpectedError(SceneCastError):
    """Catch-all surfaced with a generic message."""

    code = "INTERNAL_ERROR"
    status_code = 500
    message = "Internal server error"

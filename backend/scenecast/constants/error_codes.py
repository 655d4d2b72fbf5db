"""Error codes dictionary for the render API.

This is the single source of truth for all error codes, their retryability,
and suggested recovery actions. Used by exception handlers to generate
machine-readable error responses.
"""

from typing import Any, TypedDict


class ErrorCodeSpec(TypedDict, total=False):
    """Specification for an error code."""

    retryable: bool
    suggested_action: str
    suggested_endpoint: str
    suggested_fix: str
    parameters: dict[str, Any]


# Error codes dictionary - single source of truth
ERROR_CODES: dict[str, ErrorCodeSpec] = {
    # ==========================================================================
    # Validation errors (not retryable, fix input)
    # ==========================================================================
    "VALIDATION_ERROR": {
        "retryable": False,
    },
    "MISSING_REQUIRED_FIELD": {
        "retryable": False,
        "suggested_fix": "Provide the missing field and resubmit the request",
    },
    "INVALID_FIELD_VALUE": {
        "retryable": False,
    },
    "INVALID_DURATION": {
        "retryable": False,
        "suggested_fix": "Durations must be positive and longer than the combined fade in/out",
    },
    "BAD_REQUEST": {
        "retryable": False,
    },
    # ==========================================================================
    # Resource errors
    # ==========================================================================
    "TEMPLATE_NOT_FOUND": {
        "retryable": False,
        "suggested_action": "list_templates",
        "suggested_endpoint": "GET /api/render/templates",
    },
    "RENDER_JOB_NOT_FOUND": {
        "retryable": False,
        "suggested_fix": "Check the job id returned when the render was submitted",
    },
    "NOT_FOUND": {
        "retryable": False,
    },
    # ==========================================================================
    # Configuration errors
    # ==========================================================================
    "RENDER_ENGINE_NOT_CONFIGURED": {
        "retryable": False,
        "suggested_fix": "Set RENDER_SANDBOX_API_KEY or RENDER_PRODUCTION_API_KEY for the active RENDER_ENV",
    },
    # ==========================================================================
    # Render engine errors
    # ==========================================================================
    "RENDER_SUBMISSION_FAILED": {
        "retryable": False,
    },
    "RENDER_STATUS_FAILED": {
        "retryable": True,
        "suggested_action": "retry_with_backoff",
        "parameters": {"delay_ms": 2000, "max_retries": 3},
    },
    # ==========================================================================
    # System errors
    # ==========================================================================
    "RATE_LIMITED": {
        "retryable": True,
        "suggested_action": "retry_with_backoff",
        "parameters": {"delay_ms": 1000, "max_retries": 3},
    },
    "INTERNAL_ERROR": {
        "retryable": True,
        "suggested_action": "retry_with_backoff",
        "parameters": {"delay_ms": 2000, "max_retries": 2},
    },
}


def get_error_spec(code: str) -> ErrorCodeSpec:
    """Get error specification by code.

    Args:
        code: The error code

    Returns:
        ErrorCodeSpec with retryable flag and suggested actions
    """
    return ERROR_CODES.get(code, {"retryable": False})


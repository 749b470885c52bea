"""Exception classes for the Recipe Vision API.

APIError subclasses carry the HTTP status and the stable ``error`` string
returned to clients. InferenceError is raised by the provider client and is
converted to an UpstreamDependencyError by the route that called it.
"""

from typing import Any


class APIError(Exception):
    """Base exception for errors rendered as ``{"error", "details"}`` JSON."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Response body; ``details`` is omitted when there is none."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class RequestValidationFailed(APIError):
    """Missing or malformed client input, detected before any provider call."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=400, details=details)


class UpstreamDependencyError(APIError):
    """Inference provider failed, timed out or returned an unusable response."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class InferenceError(Exception):
    """Provider call failed. The message is human-readable and safe to surface."""

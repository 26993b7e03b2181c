"""
Errors surfaced to API clients.

Every error carries the HTTP status it maps to. `detail` holds upstream
context and is only shown to clients in development mode.
"""

from typing import Optional


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ApiError):
    status_code = 400


class NotFound(ApiError):
    status_code = 404


class RateLimited(ApiError):
    status_code = 429

    def __init__(self, message: str, retry_after: int = 60, detail: Optional[str] = None):
        super().__init__(message, detail=detail)
        self.retry_after = retry_after


class UpstreamUnavailable(ApiError):
    status_code = 503


class Internal(ApiError):
    status_code = 500


class UpstreamError(Internal):
    """Non-transient upstream failure, collapsed to a 500 for clients."""

"""
Exceptions raised by the shared layer.

Every error carries the HTTP status code and the user-facing message that the
responder turns into a ``{"status": ..., "message": ...}`` envelope.
"""

from typing import Dict, List, Optional


class PelodataError(Exception):
    """Base class for errors that map directly to an API response."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingIdentity(PelodataError):
    status_code = 400

    def __init__(self, message: str = "UserID header is required"):
        super().__init__(message)


class MalformedBody(PelodataError):
    status_code = 400

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)


class ValidationFailed(PelodataError):
    status_code = 400


class DuplicateExists(PelodataError):
    status_code = 400


class NotFound(PelodataError):
    status_code = 400


class Unauthorized(PelodataError):
    status_code = 401


class StorageUnavailable(PelodataError):
    status_code = 500


class StorageWriteFailed(PelodataError):
    status_code = 500


class ConfigurationError(PelodataError):
    status_code = 500


class UpstreamError(PelodataError):
    """Non-2xx answer (or no answer at all) from the Peloton API."""

    def __init__(self, message: str, status_code: int = 500,
                 body: Optional[str] = None,
                 headers: Optional[Dict[str, List[str]]] = None):
        super().__init__(message, status_code)
        self.body = body
        self.headers = headers or {}

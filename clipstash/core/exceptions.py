from __future__ import annotations

"""Centralized, structured exception hierarchy for clipstash.

Every error carries a machine-readable `code` for programmatic handling and a
human-readable `message` for logging and user feedback. The hierarchy maps
cleanly to HTTP status codes in the API layer:

- `ValidationError` / `ClipError`: rejected input, before any storage I/O.
- `NotFoundError`: absent or lazily-expired clip.
- `PermissionError`: the clip exists but the supplied password is wrong.
- `DatabaseError`: storage or transaction failure, never shown in detail.
- `ApiKeyError`: missing, malformed or unknown API key.
"""

from typing import Final

__all__: Final = [
    "ClipstashError",
    "ValidationError",
    "ClipError",
    "NotFoundError",
    "PermissionError",
    "DatabaseError",
    "ApiKeyError",
    "ApiKeyDecodeError",
    "ApiKeyNotFoundError",
]


class ClipstashError(Exception):
    """Base exception class for all custom errors in the clipstash application.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors (map to 400 Bad Request)
# ---------------------------------------------------------------------------


class ValidationError(ClipstashError):
    """Raised for general data validation failures."""

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)


class ClipError(ValidationError):
    """Raised when a clip field fails validation.

    The `code` names the failure kind so callers can tell an empty body from a
    malformed date without parsing the message.
    """

    EMPTY_CONTENT: Final = "EmptyContent"
    INVALID_DATE: Final = "InvalidDate"
    INVALID_SHORTCODE: Final = "InvalidShortCode"
    INVALID_HITS: Final = "InvalidHits"
    INVALID_PASSWORD: Final = "InvalidPassword"

    def __init__(self, message: str, code: str = "InvalidClip"):
        super().__init__(message, code)

    @classmethod
    def empty_content(cls) -> "ClipError":
        return cls("empty content", cls.EMPTY_CONTENT)

    @classmethod
    def invalid_date(cls, detail: str) -> "ClipError":
        return cls(f"invalid date: {detail}", cls.INVALID_DATE)


# ---------------------------------------------------------------------------
# Lookup / access errors
# ---------------------------------------------------------------------------


class NotFoundError(ClipstashError):
    """Raised when a clip does not exist or has expired.

    Expired clips that the sweeper has not yet removed raise this exact error
    so the two cases cannot be told apart. Maps to `404 Not Found`.
    """

    def __init__(self, message: str = "entity not found", code: str = "not_found"):
        super().__init__(message, code)


class PermissionError(ClipstashError):  # noqa: A001 - deliberate domain name
    """Raised when a password-protected clip is accessed with a wrong password.

    The message is meant for the end user and never contains the stored
    password. Maps to `401 Unauthorized`.
    """

    def __init__(self, message: str, code: str = "permission_denied"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Persistence errors (map to 500 Internal Server Error)
# ---------------------------------------------------------------------------


class DatabaseError(ClipstashError):
    """Raised for low-level database interaction errors.

    Wraps the underlying driver error. Details are logged server side and the
    API only ever returns a generic message.
    """

    def __init__(self, message: str, code: str = "database_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# API key errors (map to 400 Bad Request)
# ---------------------------------------------------------------------------


class ApiKeyError(ClipstashError):
    """Base class for API key failures."""

    def __init__(self, message: str, code: str = "api_key_error"):
        super().__init__(message, code)


class ApiKeyDecodeError(ApiKeyError):
    """Raised when an API key is missing or is not valid base64."""

    def __init__(self, message: str = "Invalid API key", code: str = "api_key_decode_error"):
        super().__init__(message, code)


class ApiKeyNotFoundError(ApiKeyError):
    """Raised when a well-formed API key is not known to the service."""

    def __init__(self, message: str = "API key not found", code: str = "api_key_not_found"):
        super().__init__(message, code)

"""Error taxonomy for the client.

Components raise these internally and convert them into result models and
notices at the boundary of their public operations.
"""

from enum import Enum


class FailureReason(str, Enum):
    """Machine-readable reason attached to every failed operation."""

    UNAUTHENTICATED = "unauthenticated"
    SESSION_EXPIRED = "session_expired"
    EMPTY_QUESTION = "empty_question"
    NO_DOCUMENTS = "no_documents"
    ALREADY_ANSWERING = "already_answering"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    INVALID_MODEL = "invalid_model"
    INVALID_PREFERENCE = "invalid_preference"
    INVALID_CREDENTIALS = "invalid_credentials"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"
    STALE_SESSION = "stale_session"


class VersePointError(Exception):
    """Base class for all client errors."""

    reason: FailureReason = FailureReason.API_ERROR

    def __init__(self, message: str, reason: FailureReason | None = None) -> None:
        super().__init__(message)
        self.message = message
        if reason is not None:
            self.reason = reason


class InputValidationError(VersePointError):
    """Raised for bad user input: no state change, no network call."""

    reason = FailureReason.INVALID_PREFERENCE


class AuthenticationError(VersePointError):
    """Raised when there is no token or the backend rejected it."""

    reason = FailureReason.UNAUTHENTICATED


class ConcurrencyError(VersePointError):
    """Raised when a single-flight operation is already in progress."""

    reason = FailureReason.ALREADY_ANSWERING


class StaleSessionError(VersePointError):
    """Raised when a result arrives for a session that is no longer current."""

    reason = FailureReason.STALE_SESSION


class ApiError(VersePointError):
    """Normalized backend failure.

    Attributes:
        status: HTTP status code, or None when the backend was unreachable.
        message: Backend-supplied message when available.
    """

    reason = FailureReason.API_ERROR

    def __init__(self, status: int | None, message: str) -> None:
        super().__init__(message)
        self.status = status

    @property
    def is_auth_failure(self) -> bool:
        """Whether the backend rejected the session token."""
        return self.status in (401, 403)

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status})"


class NetworkError(ApiError):
    """Raised when the backend could not be reached at all."""

    reason = FailureReason.NETWORK_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(None, message)

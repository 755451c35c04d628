# edudesk/core/errors.py
from typing import Any, Optional


class ConsoleError(Exception):
    """Base for every failure the console turns into a display string.

    ``message`` is the human readable text to show, or ``None`` when the
    caller should fall back to its own generic wording.
    """

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__(message or self.__class__.__name__)


class NetworkError(ConsoleError):
    """No response was received from the backend."""


class ApiError(ConsoleError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str] = None, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_body(cls, status_code: int, body: Any) -> "ApiError":
        return cls(status_code, server_message(body), body)


class ResponseFormatError(ConsoleError):
    """A 2xx response whose body could not be decoded into the expected shape."""


class SessionError(ConsoleError):
    default_message = "No user data found. Please log in again."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class MissingSessionError(SessionError):
    pass


class InvalidSessionError(SessionError):
    default_message = "Your session is invalid. Please log in again."

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class FormValidationError(ConsoleError):
    """Client-side fast-fail before a draft is submitted."""


class UnknownActionError(ConsoleError):
    def __init__(self, action: str, page: str):
        self.action = action
        self.page = page
        super().__init__(f"Unknown action '{action}' for page '{page}'")


def server_message(body: Any) -> Optional[str]:
    """Pick the server supplied message out of an error body, if any."""
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, str) and message.strip():
        return message
    # FastAPI style backends report {"detail": "..."}
    detail = body.get("detail")
    if isinstance(detail, str) and detail.strip():
        return detail
    return None


def display_message(exc: BaseException, fallback: str) -> str:
    if isinstance(exc, ConsoleError) and exc.message:
        return exc.message
    return fallback

"""Error taxonomy for task requests and classification of upstream failures."""
from dataclasses import dataclass
from enum import Enum

RATE_LIMIT_MARKERS = ("429", "RATE_LIMIT_EXCEEDED", "Quota exceeded")
AUTH_MARKERS = ("API_KEY", "401", "403")

RATE_LIMIT_RETRY_AFTER = 60


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    SERVICE_UNAVAILABLE = "service_unavailable"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    GENERIC = "generic"


STATUS_CODES = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.GENERIC: 500,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}


@dataclass(frozen=True)
class ClassifiedError:
    kind: ErrorKind
    error: str
    message: str
    details: str | None = None
    retry_after: int | None = None

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_payload(self) -> dict:
        payload = {
            "error": self.error,
            "message": self.message,
            "category": self.kind.value,
        }
        if self.details:
            payload["details"] = self.details
        if self.retry_after is not None:
            payload["retryAfter"] = self.retry_after
        return payload


class TaskError(Exception):
    """Raised by the gateway; rendered as the JSON error payload."""

    def __init__(self, classified: ClassifiedError):
        super().__init__(classified.message)
        self.classified = classified

    @property
    def status_code(self) -> int:
        return self.classified.status_code


def invalid_input(message: str) -> TaskError:
    return TaskError(ClassifiedError(ErrorKind.INVALID_INPUT, error=message, message=message))


def service_unavailable() -> TaskError:
    return TaskError(
        ClassifiedError(
            ErrorKind.SERVICE_UNAVAILABLE,
            error="GEMINI_API_KEY is not set",
            message=(
                "Please set your API key as an environment variable before using AI "
                "features. In development, create a .env file and add: "
                "GEMINI_API_KEY=<your key>"
            ),
        )
    )


def _message_of(failure) -> str:
    if failure is None:
        return ""
    if isinstance(failure, str):
        return failure
    return str(failure) or ""


def classify_error(failure) -> ClassifiedError:
    """Map an upstream failure onto rate-limited, unauthorized or generic.

    Accepts an exception, a bare message string or None. An HTTP status exposed
    by the upstream client (``status_code``) is honoured first; otherwise the
    message is scanned for known markers. The rate-limit check runs before the
    auth check since a throttling message can also mention 403.
    """
    message = _message_of(failure)
    status = getattr(failure, "status_code", None)

    if status == 429 or any(marker in message for marker in RATE_LIMIT_MARKERS):
        return ClassifiedError(
            ErrorKind.RATE_LIMITED,
            error="Rate limit exceeded",
            message=(
                "The AI service has reached its request limit. "
                "Please wait a minute before trying again."
            ),
            details="Consider switching to a lighter model or enabling billing for the API project.",
            retry_after=RATE_LIMIT_RETRY_AFTER,
        )

    if status in (401, 403) or any(marker in message for marker in AUTH_MARKERS):
        return ClassifiedError(
            ErrorKind.UNAUTHORIZED,
            error="Authentication failed",
            message="Invalid or expired API key. Please check GEMINI_API_KEY in your .env file.",
        )

    return ClassifiedError(
        ErrorKind.GENERIC,
        error="AI service error",
        message=message or "An unexpected error occurred while processing your request.",
    )

"""Error types and classification for the Fortnite data archive.

Failures come in two tiers. Per-resource failures (unreachable API, error
status, undecodable body) are recoverable: the API client reports them
through ``ErrorHandlingService.handle_error`` and the run carries on with the
next resource. Everything else (file system errors, invalid configuration,
bugs) is fatal and reaches the entry point, which reports it through the same
service before exiting.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """What kind of failure occurred."""
    NETWORK = "network"
    FILE_SYSTEM = "file_system"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class UserFriendlyError:
    """Message, hints and details shown for one failure."""
    message: str
    category: ErrorCategory
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = False


def _details(*lines: str | None) -> str | None:
    return "\n".join(line for line in lines if line) or None


def _describe(error: Exception | None) -> str | None:
    return f"{type(error).__name__}: {error}" if error else None


class AppError(Exception):
    """Base class for archive errors; fatal unless a subclass says otherwise."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable

    def to_user_friendly(self) -> UserFriendlyError:
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class NetworkError(AppError):
    """A request that failed in transport or came back with an error status."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            suggested_actions=self._get_suggested_actions(status_code),
            technical_details=_details(
                f"Status: {status_code}" if status_code else None,
                f"URL: {url}" if url else None,
                f"Payload: {payload}" if payload is not None else None,
                _describe(original_error),
            ),
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code
        self.payload = payload

    @staticmethod
    def _get_suggested_actions(status_code: int | None) -> list[str]:
        if status_code is None:
            return ["Check your internet connection", "Try again in a few moments"]
        if status_code in (401, 403):
            return ["Set FORTNITE_API_KEY to a valid FortniteAPI.io key"]
        if status_code == 404:
            return ["The resource may not exist for this season or version"]
        if status_code == 429:
            return ["Increase FORTNITE_REQUEST_DELAY", "Wait a few minutes before the next run"]
        if status_code >= 500:
            return ["The API is experiencing issues", "Try again later"]
        return []


class ValidationError(AppError):
    """A 2xx response whose body could not be decoded as JSON."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            suggested_actions=["The API may be under maintenance; run again later"],
            technical_details=_details(f"URL: {url}" if url else None, _describe(original_error)),
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url


class FileSystemError(AppError):
    """The archive tree could not be created, written or scanned."""

    def __init__(
        self,
        message: str,
        original_error: OSError | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.FILE_SYSTEM,
            suggested_actions=self._get_suggested_actions(original_error),
            technical_details=_details(f"Path: {path}" if path else None, _describe(original_error)),
        )
        self.original_error = original_error
        self.path = path

    @staticmethod
    def _get_suggested_actions(original_error: OSError | None) -> list[str]:
        if isinstance(original_error, PermissionError):
            return [
                "Check permissions on the archive directory",
                "Point FORTNITE_ARCHIVE_DIR at a writable location",
            ]
        if "no space" in str(original_error).lower():
            return ["Free up disk space"]
        return ["Check the archive directory and its permissions"]


class ConfigurationError(AppError):
    """Invalid settings read from the environment."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        errors = errors or []
        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            suggested_actions=["Check the FORTNITE_* environment variables"] + errors,
            technical_details=_details(*errors),
        )
        self.errors = errors


HTTP_ERROR_MESSAGES = {
    400: "The request was invalid.",
    401: "Authentication required. Please check FORTNITE_API_KEY.",
    403: "Access denied. The API key was rejected.",
    404: "The requested resource was not found.",
    429: "Too many requests. Please wait before trying again.",
    500: "The API encountered an error. Please try again later.",
    502: "The API is temporarily unavailable. Please try again later.",
    503: "The API is temporarily unavailable. Please try again later.",
    504: "The API took too long to respond. Please try again.",
}


class ErrorHandlingService:
    """Classifies raw exceptions into archive errors and logs them.

    Recoverable failures are logged as warnings, fatal ones as errors.
    """

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Classify and log an error.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Extra details; ``url``, ``payload`` and ``path`` are used
                in the technical details

        Returns:
            User-friendly error representation
        """
        context = context or {}
        app_error = self._convert_to_app_error(error, context)

        log_method = log.warning if app_error.recoverable else log.error
        log_method(
            "Error occurred",
            error_message=app_error.message,
            category=app_error.category.value,
            operation=operation,
            component=component,
            technical_details=app_error.technical_details,
            recoverable=app_error.recoverable,
            context=context,
        )
        return app_error.to_user_friendly()

    def _convert_to_app_error(self, error: Exception, context: dict[str, Any]) -> AppError:
        if isinstance(error, AppError):
            return error

        url = context.get("url")

        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            return NetworkError(
                message=HTTP_ERROR_MESSAGES.get(status_code, f"HTTP error {status_code} occurred."),
                original_error=error,
                url=url,
                status_code=status_code,
                payload=context.get("payload"),
            )
        if isinstance(error, httpx.TimeoutException):
            message = "The request timed out. The API may be slow or unavailable."
        elif isinstance(error, httpx.ConnectError):
            message = "Unable to connect to the API. Please check your internet connection."
        elif isinstance(error, httpx.RequestError):
            message = "A network error occurred. Please check your connection."
        else:
            message = None
        if message:
            return NetworkError(message=message, original_error=error, url=url)

        # A body that is not UTF-8 fails before JSON parsing even starts
        if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
            return ValidationError(
                message="The API returned a response that could not be decoded as JSON.",
                original_error=error,
                url=url,
            )

        if isinstance(error, OSError):
            message = (
                "Permission denied. You don't have access to this file or directory."
                if isinstance(error, PermissionError)
                else f"A file system error occurred: {error}"
            )
            return FileSystemError(message=message, original_error=error, path=context.get("path"))

        return AppError(
            message="An unexpected error occurred.",
            technical_details=_describe(error),
        )

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Format an error for the terminal, with up to three suggestions."""
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:
                parts.append(f"  • {action}")

        return "\n".join(parts)


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service

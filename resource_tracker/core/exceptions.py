"""
resource_tracker/core/exceptions.py - Exception hierarchy

Exception hierarchy:
    TrackerError (base)
    ├── ConfigError (invalid or missing configuration)
    ├── PreconditionError (fatal, aborts the run before any report is written)
    │   ├── MissingToolError
    │   └── RegionEnumerationError
    ├── APICallError (one AWS call failed)
    └── PublishError (writing report files failed)

Per-call AWS failures during collection are not raised; they travel as
CallResult values (see core/aws/calls.py). APICallError is used where a
caller needs a hard failure.

Usage:
    from resource_tracker.core.exceptions import PreconditionError, format_error_for_user

    try:
        result = run_report(config)
    except PreconditionError as e:
        print_error(format_error_for_user(e))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .aws.calls import CallError

# =============================================================================
# Base
# =============================================================================


class TrackerError(Exception):
    """Base class for every resource_tracker exception

    Attributes:
        message: Error message
        cause: Underlying exception (for chaining)
        details: Extra structured context
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(TrackerError):
    """Invalid or missing configuration value"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(f"Config error [{key}]: {message}", cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# Fatal preconditions
# =============================================================================


class PreconditionError(TrackerError):
    """A fatal precondition failed; nothing useful can be reported"""


class MissingToolError(PreconditionError):
    """A required executable is not on PATH"""

    def __init__(self, command: str):
        super().__init__(f"'{command}' not found in PATH")
        self.command = command
        self.details["command"] = command


class RegionEnumerationError(PreconditionError):
    """Region list could not be fetched or came back empty"""

    def __init__(
        self,
        message: str,
        call_error: CallError | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.call_error = call_error
        if call_error is not None:
            self.details.update(call_error.to_dict())


# =============================================================================
# AWS calls
# =============================================================================


class APICallError(TrackerError):
    """An AWS API call failed

    Wraps botocore ClientError/BotoCoreError with the service and operation
    that failed.
    """

    def __init__(
        self,
        service: str,
        operation: str,
        error_code: str | None = None,
        error_message: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"{service}.{operation}"
        if error_code:
            message = f"{message} failed ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        super().__init__(message, cause)
        self.service = service
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        self.details.update(
            {
                "service": service,
                "operation": operation,
                "error_code": error_code,
            }
        )


# =============================================================================
# Output
# =============================================================================


class PublishError(TrackerError):
    """A report file could not be written or an old one removed"""

    def __init__(self, path: Any, message: str, cause: Exception | None = None):
        super().__init__(f"Cannot write {path}: {message}", cause)
        self.path = str(path)
        self.details["path"] = self.path


# =============================================================================
# Helpers
# =============================================================================

ACCESS_DENIED_CODES = frozenset(
    {
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedAccess",
        "UnauthorizedOperation",
        "AuthFailure",
    }
)

THROTTLING_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "TooManyRequestsException",
        "RateExceeded",
    }
)

NOT_FOUND_CODES = frozenset(
    {
        "ResourceNotFoundException",
        "NotFoundException",
        "NoSuchEntity",
        "NoSuchBucket",
    }
)


def _error_code(error: Exception) -> str | None:
    if isinstance(error, APICallError):
        return error.error_code
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return response.get("Error", {}).get("Code", "")
    return None


def is_access_denied(error: Exception) -> bool:
    """True for permission errors (AccessDenied, UnauthorizedOperation, ...)"""
    return _error_code(error) in ACCESS_DENIED_CODES


def is_throttling(error: Exception) -> bool:
    """True for rate limiting errors"""
    return _error_code(error) in THROTTLING_CODES


def is_not_found(error: Exception) -> bool:
    """True for missing resource errors"""
    return _error_code(error) in NOT_FOUND_CODES


def format_error_for_user(error: Exception) -> str:
    """Short, human-readable message for the console

    Args:
        error: Any exception

    Returns:
        Message suitable for an error line
    """
    if isinstance(error, TrackerError):
        return str(error)

    response = getattr(error, "response", None)
    if isinstance(response, dict):
        error_info = response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDenied": "Permission denied. Check the IAM policy.",
            "ExpiredToken": "Credentials expired. Log in again.",
            "InvalidClientTokenId": "Invalid credentials.",
            "Throttling": "Too many requests. Try again later.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)

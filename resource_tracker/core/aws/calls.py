"""
resource_tracker/core/aws/calls.py - Tagged results for single AWS calls

Every read-only AWS call made during collection goes through call_api(),
which turns botocore failures into a CallResult instead of raising.
Callers branch on CallResult.status:

    OK      call succeeded and returned data
    EMPTY   call succeeded with nothing in it
    FAILED  call failed; CallResult.error holds the details

Example:
    result = call_api(
        "lambda",
        "list_functions",
        lambda: client.list_functions()["Functions"],
        region="eu-west-1",
    )
    if result.status is CallStatus.FAILED:
        print(result.error)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    HTTPClientError,
    NoCredentialsError,
    ReadTimeoutError,
)
from botocore.exceptions import ConnectionError as BotoConnectionError

from ..exceptions import APICallError, is_access_denied, is_not_found, is_throttling

logger = logging.getLogger(__name__)

T = TypeVar("T")

GLOBAL_REGION = "global"


class ErrorCategory(Enum):
    """Failure classification for a single call"""

    ACCESS_DENIED = "access_denied"
    THROTTLING = "throttling"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    NETWORK = "network"
    EXPIRED_TOKEN = "expired_token"
    NO_CREDENTIALS = "no_credentials"
    UNKNOWN = "unknown"


class CallStatus(Enum):
    """Outcome of a call"""

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


def get_error_code(error: Exception) -> str:
    """Error code from a ClientError, class name otherwise"""
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        code: str = response.get("Error", {}).get("Code", "Unknown")
        return code
    return error.__class__.__name__


def get_error_message(error: Exception) -> str:
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        message: str = response.get("Error", {}).get("Message", "") or str(error)
        return message
    return str(error)


def categorize_error(error: Exception) -> ErrorCategory:
    """Classify an exception raised by a boto3 call

    Args:
        error: ClientError or BotoCoreError

    Returns:
        ErrorCategory
    """
    if is_throttling(error):
        return ErrorCategory.THROTTLING
    if is_access_denied(error):
        return ErrorCategory.ACCESS_DENIED
    if is_not_found(error):
        return ErrorCategory.NOT_FOUND

    if isinstance(error, ClientError):
        code = get_error_code(error)
        if code in ("ExpiredToken", "ExpiredTokenException", "RequestExpired"):
            return ErrorCategory.EXPIRED_TOKEN
        if "Timeout" in code:
            return ErrorCategory.TIMEOUT
        return ErrorCategory.UNKNOWN

    if isinstance(error, NoCredentialsError):
        return ErrorCategory.NO_CREDENTIALS
    if isinstance(error, (ConnectTimeoutError, ReadTimeoutError)):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (EndpointConnectionError, BotoConnectionError, HTTPClientError)):
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


@dataclass
class CallError:
    """Structured failure of one AWS call

    Attributes:
        service: AWS service (e.g. "ec2")
        operation: API operation (e.g. "describe_instances")
        region: Region name, or "global"
        category: ErrorCategory
        error_code: AWS error code or exception class name
        message: Error detail
        timestamp: When the failure was recorded
    """

    service: str
    operation: str
    region: str
    category: ErrorCategory
    error_code: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_exception(cls, service: str, operation: str, region: str, error: Exception) -> "CallError":
        return cls(
            service=service,
            operation=operation,
            region=region,
            category=categorize_error(error),
            error_code=get_error_code(error),
            message=get_error_message(error),
        )

    def __str__(self) -> str:
        return f"[{self.region}] {self.service}.{self.operation}: {self.error_code} - {self.message}"

    def to_dict(self) -> dict[str, str]:
        return {
            "service": self.service,
            "operation": self.operation,
            "region": self.region,
            "category": self.category.value,
            "error_code": self.error_code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_exception(self) -> APICallError:
        return APICallError(
            service=self.service,
            operation=self.operation,
            error_code=self.error_code,
            error_message=self.message,
        )


@dataclass
class CallResult(Generic[T]):
    """Result of one AWS call

    Attributes:
        service: AWS service
        operation: API operation
        region: Region name, or "global"
        success: Whether the call completed
        data: Payload on success
        error: CallError on failure
        duration_ms: Wall time of the call
    """

    service: str
    operation: str
    region: str
    success: bool
    data: T | None = None
    error: CallError | None = None
    duration_ms: float = 0.0

    @property
    def status(self) -> CallStatus:
        if not self.success:
            return CallStatus.FAILED
        if not self.data:
            return CallStatus.EMPTY
        return CallStatus.OK

    def unwrap(self) -> T:
        """Payload, or raise APICallError if the call failed"""
        if not self.success:
            if self.error is None:
                raise APICallError(self.service, self.operation)
            raise self.error.to_exception()
        return self.data  # type: ignore[return-value]

    def __str__(self) -> str:
        return f"[{self.region}] {self.service}.{self.operation} {self.status.name} ({self.duration_ms:.0f}ms)"


def call_api(
    service: str,
    operation: str,
    func: Callable[[], T],
    region: str = GLOBAL_REGION,
) -> CallResult[T]:
    """Run one AWS call and capture the outcome

    Only botocore errors are captured. Anything else is a bug and propagates.

    Args:
        service: AWS service (for logging and the result)
        operation: API operation (for logging and the result)
        func: Zero-argument callable performing the call
        region: Region name, or "global"

    Returns:
        CallResult
    """
    start = time.monotonic()
    try:
        data = func()
    except (ClientError, BotoCoreError) as e:
        duration_ms = (time.monotonic() - start) * 1000
        error = CallError.from_exception(service, operation, region, e)
        logger.warning(f"AWS call failed {error}")
        return CallResult(
            service=service,
            operation=operation,
            region=region,
            success=False,
            error=error,
            duration_ms=duration_ms,
        )

    duration_ms = (time.monotonic() - start) * 1000
    logger.debug(f"[{region}] {service}.{operation} OK ({duration_ms:.0f}ms)")
    return CallResult(
        service=service,
        operation=operation,
        region=region,
        success=True,
        data=data,
        duration_ms=duration_ms,
    )

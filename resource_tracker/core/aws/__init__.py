"""
resource_tracker/core/aws - boto3 client factory and per-call results
"""

from .calls import (
    GLOBAL_REGION,
    CallError,
    CallResult,
    CallStatus,
    ErrorCategory,
    call_api,
    categorize_error,
)
from .client import create_session, get_client

__all__: list[str] = [
    "GLOBAL_REGION",
    "CallError",
    "CallResult",
    "CallStatus",
    "ErrorCategory",
    "call_api",
    "categorize_error",
    "create_session",
    "get_client",
]

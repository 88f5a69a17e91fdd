"""
resource_tracker/core/inventory/services/sts.py - Caller identity for the report header
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...aws.calls import GLOBAL_REGION, call_api
from ...aws.client import get_client
from ...config import settings

if TYPE_CHECKING:
    from boto3 import Session

UNKNOWN_CALLER = "Unknown (no sts permission)"


def get_caller_identity(session: Session, region_name: str = settings.DEFAULT_REGION) -> str:
    """'<arn> (Account: <id>)', or a placeholder if STS is not reachable"""

    def _identity() -> dict[str, str]:
        sts = get_client(session, "sts", region_name=region_name)
        return sts.get_caller_identity()

    result = call_api("sts", "get_caller_identity", _identity, region=GLOBAL_REGION)
    if not result.success or not result.data:
        return UNKNOWN_CALLER

    ident = result.data
    return f"{ident.get('Arn', '-')} (Account: {ident.get('Account', '-')})"

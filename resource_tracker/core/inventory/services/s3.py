"""
resource_tracker/core/inventory/services/s3.py - S3 bucket listing (global)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...aws.calls import GLOBAL_REGION, CallResult, call_api
from ...aws.client import get_client
from ...config import settings
from ..types import S3Bucket

if TYPE_CHECKING:
    from boto3 import Session


def collect_s3_buckets(
    session: Session,
    region_name: str = settings.DEFAULT_REGION,
) -> CallResult[list[S3Bucket]]:
    """List every bucket visible to the caller

    Args:
        session: boto3 Session
        region_name: Endpoint region for the global call

    Returns:
        CallResult with one S3Bucket per bucket
    """

    def _collect() -> list[S3Bucket]:
        s3 = get_client(session, "s3", region_name=region_name)
        response = s3.list_buckets()
        return [S3Bucket.from_api(b) for b in response.get("Buckets", [])]

    return call_api("s3", "list_buckets", _collect, region=GLOBAL_REGION)

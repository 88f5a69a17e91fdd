"""
resource_tracker/core/region.py - Region enumeration

Fetches the enabled regions once per run with EC2.describe_regions().
Every regional collector reuses the same list, so a failure here is fatal.

Usage:
    from resource_tracker.core.region import list_regions

    regions = list_regions(session)  # ["ap-northeast-1", ..., "us-west-2"]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .aws.calls import call_api
from .aws.client import get_client
from .config import settings
from .exceptions import APICallError, RegionEnumerationError

if TYPE_CHECKING:
    from boto3 import Session

logger = logging.getLogger(__name__)


def list_regions(session: Session, region_name: str = settings.DEFAULT_REGION) -> list[str]:
    """Enabled region names, sorted and de-duplicated

    Opt-in regions that are not enabled for the account are not returned,
    matching describe_regions() without AllRegions.

    Args:
        session: boto3 Session
        region_name: Region whose EC2 endpoint answers the call

    Returns:
        Sorted list of region names

    Raises:
        RegionEnumerationError: call failed or returned no regions
    """
    ec2 = get_client(session, "ec2", region_name=region_name)
    result = call_api(
        "ec2",
        "describe_regions",
        lambda: ec2.describe_regions().get("Regions", []),
        region=region_name,
    )

    try:
        regions: list[dict[str, Any]] = result.unwrap() or []
    except APICallError as e:
        raise RegionEnumerationError(
            "Could not list regions. Check AWS credentials/permissions",
            call_error=result.error,
            cause=e,
        ) from e

    names = sorted({r["RegionName"] for r in regions if r.get("RegionName")})
    if not names:
        raise RegionEnumerationError("Could not list regions: describe_regions returned no regions")

    logger.info(f"{len(names)} regions enabled")
    return names

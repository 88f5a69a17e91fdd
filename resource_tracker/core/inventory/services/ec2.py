"""
resource_tracker/core/inventory/services/ec2.py - EC2 instance collection

Instances are kept only when their reservation's OwnerId is in the owner
filter.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

from ...aws.calls import CallResult, CallStatus, call_api
from ...aws.client import get_client
from ..types import EC2Instance

if TYPE_CHECKING:
    from boto3 import Session

logger = logging.getLogger(__name__)


def collect_ec2_instances(
    session: Session,
    region: str,
    owner_ids: Collection[str],
) -> CallResult[list[EC2Instance]]:
    """Collect instances of matching reservations in one region

    Args:
        session: boto3 Session
        region: AWS region
        owner_ids: Reservation owner ids to keep

    Returns:
        CallResult with the instances in API order (EMPTY if none matched)
    """

    def _collect() -> list[EC2Instance]:
        ec2 = get_client(session, "ec2", region_name=region)
        paginator = ec2.get_paginator("describe_instances")

        instances: list[EC2Instance] = []
        for page in paginator.paginate():
            for reservation in page.get("Reservations", []):
                owner_id = reservation.get("OwnerId")
                if owner_id not in owner_ids:
                    continue
                for data in reservation.get("Instances", []):
                    instances.append(EC2Instance.from_api(region, owner_id, data))
        return instances

    result = call_api("ec2", "describe_instances", _collect, region=region)
    if result.status is CallStatus.EMPTY:
        logger.debug(f"[{region}] no reservations for owner filter, skipped")
    return result

"""
resource_tracker/core/inventory/services/iam.py - IAM user listing (global)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...aws.calls import GLOBAL_REGION, CallResult, call_api
from ...aws.client import get_client
from ...config import settings
from ..types import IAMUser

if TYPE_CHECKING:
    from boto3 import Session


def collect_iam_users(
    session: Session,
    region_name: str = settings.DEFAULT_REGION,
) -> CallResult[list[IAMUser]]:
    """List the account's IAM users

    Args:
        session: boto3 Session
        region_name: Endpoint region for the global call

    Returns:
        CallResult with one IAMUser per user
    """

    def _collect() -> list[IAMUser]:
        iam = get_client(session, "iam", region_name=region_name)
        paginator = iam.get_paginator("list_users")

        users: list[IAMUser] = []
        for page in paginator.paginate():
            users.extend(IAMUser.from_api(u) for u in page.get("Users", []))
        return users

    return call_api("iam", "list_users", _collect, region=GLOBAL_REGION)

"""
resource_tracker/core/inventory/services/lambda_.py - Lambda function listing
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...aws.calls import CallResult, call_api
from ...aws.client import get_client
from ..types import LambdaFunction

if TYPE_CHECKING:
    from boto3 import Session


def collect_lambda_functions(session: Session, region: str) -> CallResult[list[LambdaFunction]]:
    """List functions in one region

    Args:
        session: boto3 Session
        region: AWS region

    Returns:
        CallResult with the functions in API order
    """

    def _collect() -> list[LambdaFunction]:
        client = get_client(session, "lambda", region_name=region)
        paginator = client.get_paginator("list_functions")

        functions: list[LambdaFunction] = []
        for page in paginator.paginate():
            for data in page.get("Functions", []):
                functions.append(LambdaFunction.from_api(region, data))
        return functions

    return call_api("lambda", "list_functions", _collect, region=region)

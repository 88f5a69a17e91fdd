"""
tests/conftest.py - Shared pytest fixtures

AWS client mocks and test helpers.

Usage:
    def test_something(fake_session):
        ec2 = make_client({"describe_instances": [page]})
        fake_session.register("ec2", ec2, region="us-east-1")
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

OWNER_A = "111111111111"
OWNER_B = "222222222222"

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Fake credentials; no ambient tracker/profile settings leak in"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in (
        "AWS_PROFILE",
        "AWS_DEFAULT_PROFILE",
        "AWS_REGION",
        "LOG_LEVEL",
        "RESOURCE_TRACKER_CONFIG",
        "RESOURCE_TRACKER_OWNER_IDS",
        "RESOURCE_TRACKER_OUTPUT_DIR",
        "RESOURCE_TRACKER_SHARED_DIR",
        "RESOURCE_TRACKER_WRITE_WORKBOOK",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


# =============================================================================
# Client mocks
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError helper"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


def make_client(
    pages: dict[str, list[dict[str, Any]]] | None = None,
    errors: dict[str, Exception] | None = None,
    **responses: Any,
) -> MagicMock:
    """MagicMock boto3 client

    Args:
        pages: operation -> list of pages returned by get_paginator(op).paginate()
        errors: operation -> exception raised by paginate() or the direct call
        **responses: operation -> return value of the direct call

    Example:
        make_client(pages={"list_users": [{"Users": []}]})
        make_client(list_buckets={"Buckets": []})
        make_client(errors={"list_buckets": create_mock_client_error("AccessDenied")})
    """
    pages = pages or {}
    errors = errors or {}
    client = MagicMock()

    def _get_paginator(operation: str) -> MagicMock:
        paginator = MagicMock()
        if operation in errors:
            paginator.paginate.side_effect = errors[operation]
        else:
            paginator.paginate.return_value = pages.get(operation, [{}])
        return paginator

    client.get_paginator.side_effect = _get_paginator

    for operation, value in responses.items():
        getattr(client, operation).return_value = value
    for operation, error in errors.items():
        getattr(client, operation).side_effect = error

    return client


class FakeSession:
    """boto3.Session stand-in routing (service, region) to registered clients

    A client registered without a region answers for every region of that
    service. Unregistered services fail loudly.
    """

    def __init__(self) -> None:
        self._clients: dict[tuple[str, str | None], MagicMock] = {}
        self.calls: list[tuple[str, str | None]] = []

    def register(self, service: str, client: MagicMock, region: str | None = None) -> FakeSession:
        self._clients[(service, region)] = client
        return self

    def client(self, service_name: str, region_name: str | None = None, **kwargs: Any) -> MagicMock:
        self.calls.append((service_name, region_name))
        if (service_name, region_name) in self._clients:
            return self._clients[(service_name, region_name)]
        if (service_name, None) in self._clients:
            return self._clients[(service_name, None)]
        raise AssertionError(f"unexpected client: {service_name} in {region_name}")


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


# =============================================================================
# API response factories
# =============================================================================


def make_instance(
    instance_id: str = "i-0123456789abcdef0",
    name: str | None = "web-1",
    state: str = "running",
    **overrides: Any,
) -> dict[str, Any]:
    """describe_instances Instances[] entry"""
    data: dict[str, Any] = {
        "InstanceId": instance_id,
        "InstanceType": "t3.micro",
        "State": {"Name": state},
        "PublicDnsName": "ec2-54-0-0-1.compute-1.amazonaws.com",
        "PublicIpAddress": "54.0.0.1",
        "PrivateIpAddress": "10.0.0.1",
        "VpcId": "vpc-1",
        "SubnetId": "subnet-1",
        "Placement": {"AvailabilityZone": "us-east-1a"},
        "SecurityGroups": [{"GroupName": "default", "GroupId": "sg-1"}],
        "BlockDeviceMappings": [{"DeviceName": "/dev/xvda", "Ebs": {"VolumeId": "vol-1"}}],
        "LaunchTime": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    }
    if name is not None:
        data["Tags"] = [{"Key": "Name", "Value": name}]
    data.update(overrides)
    return data


def make_reservation(owner_id: str, *instances: dict[str, Any]) -> dict[str, Any]:
    return {"OwnerId": owner_id, "Instances": list(instances)}


def make_function(name: str = "f1", **overrides: Any) -> dict[str, Any]:
    """list_functions Functions[] entry"""
    data: dict[str, Any] = {
        "FunctionName": name,
        "Runtime": "python3.12",
        "MemorySize": 128,
        "Timeout": 3,
        "LastModified": "2024-01-01T00:00:00.000+0000",
        "Role": "arn:aws:iam::111111111111:role/lambda-exec",
    }
    data.update(overrides)
    return data


def make_regions(*names: str) -> dict[str, Any]:
    return {"Regions": [{"RegionName": n, "Endpoint": f"ec2.{n}.amazonaws.com"} for n in names]}


CALLER_IDENTITY = {
    "UserId": "AIDATEST123",
    "Account": OWNER_A,
    "Arn": f"arn:aws:iam::{OWNER_A}:user/reporter",
}


@pytest.fixture
def account_session(fake_session) -> FakeSession:
    """Two regions, one matching EC2 instance, one bucket, one function, one user

    us-east-1: reservation owned by OWNER_A (kept)
    eu-west-1: reservation owned by OWNER_B (filtered out), function f1
    """
    fake_session.register("sts", make_client(get_caller_identity=CALLER_IDENTITY))
    fake_session.register(
        "ec2",
        make_client(
            describe_regions=make_regions("us-east-1", "eu-west-1"),
            pages={"describe_instances": [{"Reservations": [make_reservation(OWNER_A, make_instance())]}]},
        ),
        region="us-east-1",
    )
    fake_session.register(
        "ec2",
        make_client(
            pages={
                "describe_instances": [
                    {"Reservations": [make_reservation(OWNER_B, make_instance("i-0ther", name="other"))]}
                ]
            }
        ),
        region="eu-west-1",
    )
    fake_session.register("lambda", make_client(pages={"list_functions": [{"Functions": []}]}), region="us-east-1")
    fake_session.register(
        "lambda", make_client(pages={"list_functions": [{"Functions": [make_function("f1")]}]}), region="eu-west-1"
    )
    fake_session.register(
        "s3",
        make_client(
            list_buckets={"Buckets": [{"Name": "logs", "CreationDate": datetime(2023, 5, 1, tzinfo=timezone.utc)}]}
        ),
    )
    fake_session.register(
        "iam",
        make_client(
            pages={
                "list_users": [
                    {
                        "Users": [
                            {
                                "UserName": "alice",
                                "UserId": "AIDAALICE",
                                "Arn": f"arn:aws:iam::{OWNER_A}:user/alice",
                                "CreateDate": datetime(2022, 1, 1, tzinfo=timezone.utc),
                            }
                        ]
                    }
                ]
            }
        ),
    )
    return fake_session


# =============================================================================
# moto
# =============================================================================


@pytest.fixture
def moto_aws():
    """moto-backed AWS (all services)"""
    import moto

    with moto.mock_aws():
        yield

"""
resource_tracker/core/aws/client.py - boto3 session/client factory

Clients get explicit connect/read timeouts and botocore retries switched
off: a failed call is reported once, never reattempted.

Example:
    from resource_tracker.core.aws.client import create_session, get_client

    session = create_session(profile="audit")
    ec2 = get_client(session, "ec2", region_name="eu-west-1")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, cast

import boto3
from botocore.config import Config
from botocore.exceptions import ProfileNotFound

from ..config import settings
from ..exceptions import ConfigError

if TYPE_CHECKING:
    from boto3 import Session

RetryMode = Literal["legacy", "standard", "adaptive"]

# Retries after the initial attempt
DEFAULT_MAX_ATTEMPTS = 0
DEFAULT_RETRY_MODE: RetryMode = "standard"


def create_session(profile: str | None = None, region_name: str | None = None) -> Session:
    """Session over the ambient credential chain

    Args:
        profile: Named profile (None = default chain)
        region_name: Default region for clients created without one

    Raises:
        ConfigError: the named profile does not exist
    """
    try:
        return boto3.Session(profile_name=profile, region_name=region_name)
    except ProfileNotFound as e:
        raise ConfigError("profile", f"profile not found: {profile}", cause=e) from e


def get_client(
    session: Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = settings.API_CONNECT_TIMEOUT,
    read_timeout: int = settings.API_READ_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """boto3 client with timeouts and no retries

    Args:
        session: boto3 Session
        service_name: AWS service name (ec2, s3, iam, ...)
        region_name: Region (None = session default)
        max_attempts: Retries after the first attempt (default: 0)
        retry_mode: botocore retry mode
        connect_timeout: Connect timeout in seconds
        read_timeout: Read timeout in seconds
        **kwargs: Passed through to session.client()

    Returns:
        boto3 client
    """
    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
    )

    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # boto3-stubs wants a Literal service name
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )

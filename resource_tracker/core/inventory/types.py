"""
resource_tracker/core/inventory/types.py - Resource records

One dataclass per resource kind. Each renders to a fixed-width row through
to_row(): absent values become a placeholder, never an empty cell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from ..config import settings

NA = settings.PLACEHOLDER_REQUIRED
DASH = settings.PLACEHOLDER_OPTIONAL


def format_timestamp(ts: Any) -> str | None:
    """ISO 8601 for datetimes, strings unchanged, None for anything else"""
    if isinstance(ts, datetime):
        return ts.isoformat()
    if isinstance(ts, str):
        return ts
    return None


def cell(value: Any, placeholder: str = DASH) -> str:
    """Render one TSV cell

    None and empty strings become the placeholder. Tabs and line breaks
    are flattened so a value can never split a row.
    """
    if value is None:
        return placeholder
    text = str(value)
    if not text.strip():
        return placeholder
    return " ".join(text.replace("\t", " ").splitlines()).strip() or placeholder


@dataclass
class EC2Instance:
    """EC2 instance row"""

    HEADERS: ClassVar[tuple[str, ...]] = (
        "Region",
        "OwnerId",
        "InstanceId",
        "Name",
        "State",
        "Type",
        "PublicDNS",
        "PublicIP",
        "PrivateIP",
        "VPC",
        "Subnet",
        "AZ",
        "SecurityGroups",
        "EBS_VolumeIds",
        "LaunchTime",
    )

    region: str
    owner_id: str | None = None
    instance_id: str | None = None
    name: str | None = None
    state: str | None = None
    instance_type: str | None = None
    public_dns: str | None = None
    public_ip: str | None = None
    private_ip: str | None = None
    vpc_id: str | None = None
    subnet_id: str | None = None
    availability_zone: str | None = None
    security_groups: list[tuple[str | None, str | None]] = field(default_factory=list)
    volume_ids: list[str] = field(default_factory=list)
    launch_time: str | None = None

    @classmethod
    def from_api(cls, region: str, owner_id: str | None, data: dict[str, Any]) -> "EC2Instance":
        """Build from one describe_instances Instances[] entry"""
        name = next((t.get("Value") for t in data.get("Tags") or [] if t.get("Key") == "Name"), None)
        return cls(
            region=region,
            owner_id=owner_id,
            instance_id=data.get("InstanceId"),
            name=name,
            state=(data.get("State") or {}).get("Name"),
            instance_type=data.get("InstanceType"),
            public_dns=data.get("PublicDnsName"),
            public_ip=data.get("PublicIpAddress"),
            private_ip=data.get("PrivateIpAddress"),
            vpc_id=data.get("VpcId"),
            subnet_id=data.get("SubnetId"),
            availability_zone=(data.get("Placement") or {}).get("AvailabilityZone"),
            security_groups=[(sg.get("GroupName"), sg.get("GroupId")) for sg in data.get("SecurityGroups") or []],
            volume_ids=[
                bd["Ebs"]["VolumeId"]
                for bd in data.get("BlockDeviceMappings") or []
                if (bd.get("Ebs") or {}).get("VolumeId")
            ],
            launch_time=format_timestamp(data.get("LaunchTime")),
        )

    def to_row(self) -> tuple[str, ...]:
        sgs = ",".join(f"{cell(gname)}:{cell(gid)}" for gname, gid in self.security_groups)
        return (
            cell(self.region, NA),
            cell(self.owner_id, NA),
            cell(self.instance_id, NA),
            cell(self.name),
            cell(self.state, NA),
            cell(self.instance_type, NA),
            cell(self.public_dns),
            cell(self.public_ip),
            cell(self.private_ip),
            cell(self.vpc_id),
            cell(self.subnet_id),
            cell(self.availability_zone),
            cell(sgs),
            cell(",".join(self.volume_ids)),
            cell(self.launch_time),
        )


@dataclass
class S3Bucket:
    """S3 bucket row"""

    HEADERS: ClassVar[tuple[str, ...]] = ("BucketName", "CreationDate")

    name: str | None = None
    creation_date: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "S3Bucket":
        return cls(name=data.get("Name"), creation_date=format_timestamp(data.get("CreationDate")))

    def to_row(self) -> tuple[str, ...]:
        return (cell(self.name, NA), cell(self.creation_date))


@dataclass
class LambdaFunction:
    """Lambda function row"""

    HEADERS: ClassVar[tuple[str, ...]] = (
        "Region",
        "FunctionName",
        "Runtime",
        "MemoryMB",
        "TimeoutSec",
        "LastModified",
        "Role",
    )

    region: str
    function_name: str | None = None
    runtime: str | None = None
    memory_mb: int | None = None
    timeout_sec: int | None = None
    last_modified: str | None = None
    role: str | None = None

    @classmethod
    def from_api(cls, region: str, data: dict[str, Any]) -> "LambdaFunction":
        return cls(
            region=region,
            function_name=data.get("FunctionName"),
            runtime=data.get("Runtime"),
            memory_mb=data.get("MemorySize"),
            timeout_sec=data.get("Timeout"),
            last_modified=format_timestamp(data.get("LastModified")),
            role=data.get("Role"),
        )

    def to_row(self) -> tuple[str, ...]:
        return (
            cell(self.region, NA),
            cell(self.function_name, NA),
            cell(self.runtime),
            cell(self.memory_mb),
            cell(self.timeout_sec),
            cell(self.last_modified),
            cell(self.role),
        )


@dataclass
class IAMUser:
    """IAM user row"""

    HEADERS: ClassVar[tuple[str, ...]] = ("UserName", "UserId", "CreateDate", "Arn")

    user_name: str | None = None
    user_id: str | None = None
    create_date: str | None = None
    arn: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "IAMUser":
        return cls(
            user_name=data.get("UserName"),
            user_id=data.get("UserId"),
            create_date=format_timestamp(data.get("CreateDate")),
            arn=data.get("Arn"),
        )

    def to_row(self) -> tuple[str, ...]:
        return (
            cell(self.user_name, NA),
            cell(self.user_id),
            cell(self.create_date),
            cell(self.arn),
        )

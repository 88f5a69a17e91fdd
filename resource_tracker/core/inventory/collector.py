"""
resource_tracker/core/inventory/collector.py - Section collector

Runs the four collectors in fixed order (EC2, S3, Lambda, IAM), one region
at a time, and shapes each into a ReportSection.

Failure policy:
    - regional collectors (EC2, Lambda): a failed region adds no rows
    - global collectors (S3, IAM): a failed call becomes one ERROR row
    Either way the CallError is kept in SectionResult.errors.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..aws.calls import CallError, CallResult, CallStatus
from ..config import settings
from ..report.model import ERROR_CELL, ReportSection
from .services import (
    collect_ec2_instances,
    collect_iam_users,
    collect_lambda_functions,
    collect_s3_buckets,
)
from .types import EC2Instance, IAMUser, LambdaFunction, S3Bucket

if TYPE_CHECKING:
    from boto3 import Session

S3_ERROR_MESSAGE = "Unable to list buckets (need s3:ListAllMyBuckets)"
IAM_ERROR_MESSAGE = "Unable to list users (need iam:ListUsers)"


@dataclass
class SectionResult:
    """A built section and the calls that failed while building it"""

    section: ReportSection
    errors: list[CallError] = field(default_factory=list)

    @property
    def failed_regions(self) -> list[str]:
        return [e.region for e in self.errors]


def _error_row(message: str, result: CallResult) -> tuple[str, ...]:
    code = result.error.error_code if result.error else "Unknown"
    return (ERROR_CELL, f"{message}: {code}")


class InventoryCollector:
    """Builds the report sections for one run

    The region list and owner filter are fixed at construction and reused
    unchanged by every regional collector.

    Example:
        collector = InventoryCollector(session, regions, owner_ids=("123456789012",))
        for result in collector.collect_all():
            print(result.section.title, result.section.row_count)
    """

    def __init__(
        self,
        session: Session,
        regions: Sequence[str],
        owner_ids: Sequence[str],
        global_region: str = settings.DEFAULT_REGION,
    ):
        """Initialize collector

        Args:
            session: boto3 Session
            regions: Enumerated regions, already sorted
            owner_ids: EC2 owner filter
            global_region: Endpoint region for S3/IAM
        """
        self._session = session
        self._regions = tuple(regions)
        self._owner_ids = tuple(owner_ids)
        self._owner_set = frozenset(owner_ids)
        self._global_region = global_region

    @property
    def regions(self) -> tuple[str, ...]:
        return self._regions

    # =========================================================================
    # Regional
    # =========================================================================

    def collect_ec2(self) -> SectionResult:
        """EC2 instances of the owner filter, grouped by region"""
        rows: list[tuple[str, ...]] = []
        errors: list[CallError] = []

        for region in self._regions:
            result = collect_ec2_instances(self._session, region, self._owner_set)
            if result.status is CallStatus.FAILED:
                if result.error:
                    errors.append(result.error)
                continue
            instances: list[EC2Instance] = result.data or []
            rows.extend(i.to_row() for i in instances)

        section = ReportSection(
            title=f"EC2 - Instances (Filtered by OwnerIds: {' '.join(self._owner_ids)})",
            sheet_name="EC2 Instances",
            headers=EC2Instance.HEADERS,
            rows=tuple(rows),
        )
        return SectionResult(section, errors)

    def collect_lambda(self) -> SectionResult:
        """Lambda functions of every region"""
        rows: list[tuple[str, ...]] = []
        errors: list[CallError] = []

        for region in self._regions:
            result = collect_lambda_functions(self._session, region)
            if result.status is CallStatus.FAILED:
                if result.error:
                    errors.append(result.error)
                continue
            functions: list[LambdaFunction] = result.data or []
            rows.extend(f.to_row() for f in functions)

        section = ReportSection(
            title="Lambda - Functions (All Regions)",
            sheet_name="Lambda Functions",
            headers=LambdaFunction.HEADERS,
            rows=tuple(rows),
        )
        return SectionResult(section, errors)

    # =========================================================================
    # Global
    # =========================================================================

    def collect_s3(self) -> SectionResult:
        """All buckets, or one ERROR row"""
        result = collect_s3_buckets(self._session, self._global_region)
        buckets: list[S3Bucket] = result.data or []

        if result.status is CallStatus.FAILED:
            rows: tuple[tuple[str, ...], ...] = (_error_row(S3_ERROR_MESSAGE, result),)
        else:
            rows = tuple(b.to_row() for b in buckets)

        section = ReportSection(
            title="S3 - Buckets (Global)",
            sheet_name="S3 Buckets",
            headers=S3Bucket.HEADERS,
            rows=rows,
        )
        return SectionResult(section, [result.error] if result.error else [])

    def collect_iam(self) -> SectionResult:
        """All IAM users, or one ERROR row"""
        result = collect_iam_users(self._session, self._global_region)
        users: list[IAMUser] = result.data or []

        if result.status is CallStatus.FAILED:
            rows: tuple[tuple[str, ...], ...] = (_error_row(IAM_ERROR_MESSAGE, result),)
        else:
            rows = tuple(u.to_row() for u in users)

        section = ReportSection(
            title="IAM - Users (Global)",
            sheet_name="IAM Users",
            headers=IAMUser.HEADERS,
            rows=rows,
        )
        return SectionResult(section, [result.error] if result.error else [])

    # =========================================================================
    # All
    # =========================================================================

    def collect_all(self) -> list[SectionResult]:
        """EC2, S3, Lambda, IAM - in report order"""
        return [
            self.collect_ec2(),
            self.collect_s3(),
            self.collect_lambda(),
            self.collect_iam(),
        ]

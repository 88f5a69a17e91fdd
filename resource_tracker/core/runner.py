"""
resource_tracker/core/runner.py - One report run, start to finish

    precondition check → session → caller identity → regions
    → EC2 / S3 / Lambda / IAM → Report → publish

Fatal errors (PreconditionError, PublishError) propagate. AWS call failures
inside the collectors do not: they end up in RunResult.errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from .aws.calls import CallError
from .aws.client import create_session
from .config import ReportConfig
from .inventory.collector import InventoryCollector, SectionResult
from .inventory.services import get_caller_identity
from .precheck import require_commands
from .publish import ReportPaths, publish
from .region import list_regions
from .report.model import Report

if TYPE_CHECKING:
    from boto3 import Session

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a successful run (possibly with partial failures)"""

    report: Report
    paths: ReportPaths
    regions: list[str]
    section_results: list[SectionResult] = field(default_factory=list)

    @property
    def errors(self) -> list[CallError]:
        return [e for r in self.section_results for e in r.errors]

    @property
    def has_partial_failures(self) -> bool:
        return bool(self.errors)


def run_report(
    config: ReportConfig,
    session: Session | None = None,
    now: datetime | None = None,
) -> RunResult:
    """Collect, render and publish one report

    Args:
        config: Validated ReportConfig
        session: boto3 Session (None = built from config.profile)
        now: Report timestamp (None = current local time)

    Returns:
        RunResult

    Raises:
        MissingToolError: a required command is not on PATH
        RegionEnumerationError: regions could not be listed
        PublishError: report files could not be written
    """
    require_commands(config.required_commands)

    if session is None:
        session = create_session(config.profile)
    generated_at = (now or datetime.now()).astimezone()

    caller = get_caller_identity(session, config.discovery_region)
    regions = list_regions(session, config.discovery_region)
    logger.info(f"scanning {len(regions)} regions for owners {', '.join(config.owner_ids)}")

    collector = InventoryCollector(
        session,
        regions,
        config.owner_ids,
        global_region=config.discovery_region,
    )
    section_results = collector.collect_all()

    report = Report(
        generated_at=generated_at,
        owner_ids=config.owner_ids,
        caller=caller,
        sections=tuple(r.section for r in section_results),
    )
    paths = publish(report, config)

    result = RunResult(report=report, paths=paths, regions=regions, section_results=section_results)
    if result.has_partial_failures:
        logger.warning(f"report written with {len(result.errors)} failed AWS call(s)")
    return result

"""
resource_tracker/core/publish.py - Report file output

File layout for prefix "aws_resource_report" and timestamp TS:

    <output_dir>/aws_resource_report_TS.txt           raw
    <output_dir>/aws_resource_report_TS_pretty.txt    pretty
    <spreadsheet_dir>/aws_resource_report_TS.xls      spreadsheet (TSV content)
    <spreadsheet_dir>/aws_resource_report_TS.xlsx     workbook (optional)

Earlier runs' files are deleted first. Deletion only matches the exact
names above (prefix, 8-digit date, 6-digit time, known suffix).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from .config import ReportConfig, settings
from .exceptions import PublishError
from .report.model import Report
from .report.render import render_pretty, render_raw, render_spreadsheet

logger = logging.getLogger(__name__)

_TS_PATTERN = r"\d{8}_\d{6}"


@dataclass(frozen=True)
class ReportPaths:
    """Paths of one run's artifacts"""

    raw: Path
    pretty: Path
    spreadsheet: Path
    workbook: Path | None = None

    def all(self) -> list[Path]:
        return [p for p in (self.raw, self.pretty, self.spreadsheet, self.workbook) if p is not None]


def format_timestamp(report: Report) -> str:
    return report.generated_at.strftime(settings.TIMESTAMP_FORMAT)


def build_paths(config: ReportConfig, timestamp: str) -> ReportPaths:
    """Artifact paths for a run timestamp (YYYYmmdd_HHMMSS)"""
    base = f"{config.report_prefix}_{timestamp}"
    return ReportPaths(
        raw=config.output_dir / f"{base}.txt",
        pretty=config.output_dir / f"{base}_pretty.txt",
        spreadsheet=config.spreadsheet_dir / f"{base}.xls",
        workbook=config.spreadsheet_dir / f"{base}.xlsx" if config.write_workbook else None,
    )


def text_report_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}_{_TS_PATTERN}(_pretty)?\.txt$")


def spreadsheet_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}_{_TS_PATTERN}\.(xls|xlsx)$")


def remove_previous_reports(directory: Path, pattern: re.Pattern[str]) -> list[Path]:
    """Delete regular files in directory whose name matches pattern

    Sub-directories and non-matching files are left alone. A missing
    directory is not an error.

    Args:
        directory: Directory to clean (not recursive)
        pattern: Full-name pattern

    Returns:
        Removed paths

    Raises:
        PublishError: a matching file could not be removed
    """
    if not directory.is_dir():
        return []

    removed: list[Path] = []
    for path in sorted(directory.iterdir()):
        if not path.is_file() or not pattern.match(path.name):
            continue
        try:
            path.unlink()
        except OSError as e:
            raise PublishError(path, "cannot remove previous report", cause=e) from e
        removed.append(path)
        logger.debug(f"removed previous report {path}")
    return removed


def _write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise PublishError(path, e.strerror or str(e), cause=e) from e


def publish(report: Report, config: ReportConfig) -> ReportPaths:
    """Remove earlier reports, then write this run's files

    Args:
        report: Report to write
        config: Output directories, prefix, workbook flag

    Returns:
        ReportPaths of the written files

    Raises:
        PublishError: on any filesystem error
    """
    paths = build_paths(config, format_timestamp(report))

    removed = remove_previous_reports(config.output_dir, text_report_pattern(config.report_prefix))
    removed += remove_previous_reports(config.spreadsheet_dir, spreadsheet_pattern(config.report_prefix))
    if removed:
        logger.info(f"removed {len(removed)} previous report file(s)")

    raw = render_raw(report)
    _write_text(paths.raw, raw)
    _write_text(paths.pretty, render_pretty(raw))
    _write_text(paths.spreadsheet, render_spreadsheet(raw))

    if paths.workbook is not None:
        from .report.excel import save_workbook

        try:
            save_workbook(report, paths.workbook)
        except OSError as e:
            raise PublishError(paths.workbook, e.strerror or str(e), cause=e) from e

    for p in paths.all():
        logger.info(f"wrote {p}")
    return paths

"""
resource_tracker/core/report/render.py - Text renderings of a Report

    render_raw(report)          section-headed text, tab-separated rows
    render_pretty(raw)          same lines, tab blocks padded into columns
    render_spreadsheet(raw)     same lines minus rules and blank lines

The derived views only re-format the raw text; they never change cells.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..config import settings
from .model import Report, ReportSection

_RULE_RE = re.compile(rf"^{re.escape(settings.RULE_CHAR)}{{3,}}$")

REPORT_TITLE = "AWS Resource Report"
GENERATED_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


def rule(width: int = settings.RULE_WIDTH) -> str:
    return settings.RULE_CHAR * width


def _section_lines(section: ReportSection) -> list[str]:
    lines = ["", rule(), section.title, rule(), "\t".join(section.headers)]
    lines.extend("\t".join(row) for row in section.rows)
    return lines


def render_raw(report: Report) -> str:
    """Raw text report

    Args:
        report: Report to render

    Returns:
        Text ending with a newline
    """
    lines = [
        REPORT_TITLE,
        f"Generated: {report.generated_at.strftime(GENERATED_FORMAT)}",
        f"EC2 OwnerIds filter: {report.owner_filter_label}",
        f"Caller: {report.caller}",
    ]
    for section in report.sections:
        lines.extend(_section_lines(section))
    return "\n".join(lines) + "\n"


def _align_block(block: list[list[str]], gap: int) -> list[str]:
    widths: list[int] = []
    for cells in block:
        for i, value in enumerate(cells):
            if i == len(widths):
                widths.append(len(value))
            else:
                widths[i] = max(widths[i], len(value))

    sep = " " * gap
    return [sep.join(value.ljust(widths[i]) for i, value in enumerate(cells)).rstrip() for cells in block]


def render_pretty(raw: str, gap: int = settings.PRETTY_COLUMN_GAP) -> str:
    """Column-aligned view of a raw report

    Lines without a tab pass through. Each run of consecutive tab-separated
    lines is aligned on its own, using the widest cell per column in that run.

    Args:
        raw: Output of render_raw()
        gap: Spaces between columns

    Returns:
        Aligned text ending with a newline
    """
    out: list[str] = []
    block: list[list[str]] = []

    for line in raw.splitlines():
        if "\t" in line:
            block.append(line.split("\t"))
            continue
        if block:
            out.extend(_align_block(block, gap))
            block = []
        out.append(line)

    if block:
        out.extend(_align_block(block, gap))
    return "\n".join(out) + "\n"


def is_decoration(line: str) -> bool:
    """True for separator-only lines (three or more rule characters)"""
    return bool(_RULE_RE.match(line.strip()))


def spreadsheet_lines(raw: str) -> Iterable[str]:
    for line in raw.splitlines():
        if not line.strip() or is_decoration(line):
            continue
        yield line


def render_spreadsheet(raw: str) -> str:
    """Tab-separated view without rules or blank lines

    Args:
        raw: Output of render_raw()

    Returns:
        TSV text ending with a newline
    """
    return "\n".join(spreadsheet_lines(raw)) + "\n"

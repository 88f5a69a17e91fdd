"""
resource_tracker/core/report/excel.py - Excel workbook of a Report

One "Summary" sheet with the header block, then one sheet per section with
a styled header row, frozen panes and an auto filter.
"""

from __future__ import annotations

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .model import ERROR_CELL, Report, ReportSection
from .render import GENERATED_FORMAT, REPORT_TITLE

logger = logging.getLogger(__name__)

# =============================================================================
# Styles
# =============================================================================

COLOR_HEADER_BG = "4472C4"  # header background (blue)
COLOR_HEADER_FG = "FFFFFF"  # header text (white)
COLOR_ERROR = "FFCCCC"  # error row (light red)

MIN_COLUMN_WIDTH = 8
MAX_COLUMN_WIDTH = 60
SHEET_NAME_MAX = 31
_SHEET_NAME_INVALID = set("[]:*?/\\")


def get_thin_border() -> Border:
    thin_side = Side(style="thin", color="808080")
    return Border(left=thin_side, right=thin_side, top=thin_side, bottom=thin_side)


def get_header_font() -> Font:
    return Font(size=10, bold=True, color=COLOR_HEADER_FG)


def get_header_fill() -> PatternFill:
    return PatternFill(start_color=COLOR_HEADER_BG, end_color=COLOR_HEADER_BG, fill_type="solid")


def get_error_fill() -> PatternFill:
    return PatternFill(start_color=COLOR_ERROR, end_color=COLOR_ERROR, fill_type="solid")


ALIGN_LEFT = Alignment(horizontal="left", vertical="center", wrap_text=False)
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=False)

# =============================================================================
# Sheets
# =============================================================================


def safe_sheet_name(name: str) -> str:
    """Excel-legal sheet name (31 chars, no []:*?/\\)"""
    cleaned = "".join(ch for ch in name if ch not in _SHEET_NAME_INVALID).strip()
    return (cleaned or "Sheet")[:SHEET_NAME_MAX]


def calculate_column_width(values: list[str]) -> int:
    longest = max((len(v) for v in values), default=0)
    return max(MIN_COLUMN_WIDTH, min(longest + 2, MAX_COLUMN_WIDTH))


def _write_section(ws: Worksheet, section: ReportSection) -> None:
    border = get_thin_border()

    ws.append(list(section.headers))
    for col_idx in range(1, len(section.headers) + 1):
        c = ws.cell(row=1, column=col_idx)
        c.font = get_header_font()
        c.fill = get_header_fill()
        c.alignment = ALIGN_CENTER
        c.border = border

    error_fill = get_error_fill()
    for row in section.rows:
        ws.append(list(row))
        is_error = bool(row) and row[0] == ERROR_CELL
        for col_idx in range(1, len(row) + 1):
            c = ws.cell(row=ws.max_row, column=col_idx)
            c.alignment = ALIGN_LEFT
            c.border = border
            if is_error:
                c.fill = error_fill

    width = max([len(section.headers)] + [len(r) for r in section.rows])
    for col_idx in range(width):
        values = [section.headers[col_idx]] if col_idx < len(section.headers) else []
        values.extend(r[col_idx] for r in section.rows if col_idx < len(r))
        ws.column_dimensions[get_column_letter(col_idx + 1)].width = calculate_column_width(values)

    ws.freeze_panes = "A2"
    if section.headers:
        ws.auto_filter.ref = f"A1:{get_column_letter(len(section.headers))}{ws.max_row}"


def build_workbook(report: Report) -> Workbook:
    """Workbook with a Summary sheet and one sheet per section"""
    wb = Workbook()

    summary = wb.active
    summary.title = "Summary"
    summary.append([REPORT_TITLE])
    summary["A1"].font = Font(size=12, bold=True)
    summary.append(["Generated", report.generated_at.strftime(GENERATED_FORMAT)])
    summary.append(["EC2 OwnerIds filter", report.owner_filter_label])
    summary.append(["Caller", report.caller])
    summary.append([])
    summary.append(["Section", "Rows"])
    for section in report.sections:
        summary.append([section.title, section.row_count])
    summary.column_dimensions["A"].width = calculate_column_width([s.title for s in report.sections])
    summary.column_dimensions["B"].width = calculate_column_width([report.caller])

    used: set[str] = {"Summary"}
    for section in report.sections:
        name = safe_sheet_name(section.sheet_name)
        suffix = 2
        while name in used:
            name = safe_sheet_name(f"{section.sheet_name[: SHEET_NAME_MAX - 3]} {suffix}")
            suffix += 1
        used.add(name)
        _write_section(wb.create_sheet(title=name), section)

    return wb


def save_workbook(report: Report, path: Path) -> Path:
    """Build and save the workbook

    Args:
        report: Report to export
        path: Target .xlsx file (parent must exist)

    Returns:
        The saved path
    """
    wb = build_workbook(report)
    wb.save(path)
    logger.info(f"workbook saved: {path}")
    return path

"""
resource_tracker/core/report - Report model and renderings

Usage:
    from resource_tracker.core.report import render_raw, render_pretty, render_spreadsheet

    raw = render_raw(report)
    pretty = render_pretty(raw)
    tsv = render_spreadsheet(raw)

Note:
    The Excel export (excel.py) is imported on use so openpyxl only loads
    when a workbook is written.
"""

from .model import ERROR_CELL, Report, ReportSection
from .render import render_pretty, render_raw, render_spreadsheet

__all__: list[str] = [
    "ERROR_CELL",
    "Report",
    "ReportSection",
    "render_raw",
    "render_pretty",
    "render_spreadsheet",
]

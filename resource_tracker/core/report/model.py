"""
resource_tracker/core/report/model.py - Report and section values

Built once per run and never mutated afterwards; every rendering reads
the same Report.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ERROR_CELL = "ERROR"


@dataclass(frozen=True)
class ReportSection:
    """One titled table of the report

    Attributes:
        title: Heading line in the text reports
        sheet_name: Short name for the workbook sheet
        headers: Column names
        rows: Data rows (tuples of strings)
    """

    title: str
    sheet_name: str
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def error_rows(self) -> tuple[tuple[str, ...], ...]:
        return tuple(r for r in self.rows if r and r[0] == ERROR_CELL)


@dataclass(frozen=True)
class Report:
    """A complete inventory report

    Attributes:
        generated_at: Run start time (timezone-aware, local)
        owner_ids: EC2 owner filter, in configured order
        caller: Caller identity line for the header
        sections: EC2, S3, Lambda, IAM (in that order)
    """

    generated_at: datetime
    owner_ids: tuple[str, ...]
    caller: str
    sections: tuple[ReportSection, ...]

    @property
    def owner_filter_label(self) -> str:
        return " ".join(self.owner_ids)

    def section(self, sheet_name: str) -> ReportSection:
        """Section by sheet name (KeyError if absent)"""
        for s in self.sections:
            if s.sheet_name == sheet_name:
                return s
        raise KeyError(sheet_name)

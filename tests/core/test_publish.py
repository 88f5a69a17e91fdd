"""
tests/core/test_publish.py - Report file output and cleanup
"""

from datetime import datetime, timezone

import pytest

from resource_tracker.core.config import ReportConfig
from resource_tracker.core.exceptions import PublishError
from resource_tracker.core.publish import (
    build_paths,
    publish,
    remove_previous_reports,
    spreadsheet_pattern,
    text_report_pattern,
)
from resource_tracker.core.report import Report, ReportSection, render_raw


def make_report(ts: datetime = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)) -> Report:
    return Report(
        generated_at=ts,
        owner_ids=("111111111111",),
        caller="Unknown (no sts permission)",
        sections=(
            ReportSection(
                title="S3 - Buckets (Global)",
                sheet_name="S3 Buckets",
                headers=("BucketName", "CreationDate"),
                rows=(("logs", "-"),),
            ),
        ),
    )


@pytest.fixture
def config(tmp_path):
    return ReportConfig(
        owner_ids=("111111111111",),
        output_dir=tmp_path / "out",
        shared_output_dir=tmp_path / "share",
    )


# =============================================================================
# Paths and patterns
# =============================================================================


class TestPaths:
    """build_paths / patterns"""

    def test_build_paths(self, config, tmp_path):
        paths = build_paths(config, "20240305_140709")

        assert paths.raw == tmp_path / "out" / "aws_resource_report_20240305_140709.txt"
        assert paths.pretty == tmp_path / "out" / "aws_resource_report_20240305_140709_pretty.txt"
        assert paths.spreadsheet == tmp_path / "share" / "aws_resource_report_20240305_140709.xls"
        assert paths.workbook == tmp_path / "share" / "aws_resource_report_20240305_140709.xlsx"

    def test_no_workbook(self, tmp_path):
        config = ReportConfig(owner_ids=("111111111111",), output_dir=tmp_path, write_workbook=False)

        paths = build_paths(config, "20240305_140709")

        assert paths.workbook is None
        assert paths.spreadsheet.parent == tmp_path
        assert len(paths.all()) == 3

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("aws_resource_report_20240305_140709.txt", True),
            ("aws_resource_report_20240305_140709_pretty.txt", True),
            ("aws_resource_report_20240305_140709.xls", False),
            ("aws_resource_report_latest.txt", False),
            ("aws_resource_report_2024030_140709.txt", False),
            ("my_aws_resource_report_20240305_140709.txt", False),
            ("aws_resource_report_20240305_140709.txt.bak", False),
        ],
    )
    def test_text_pattern(self, name, expected):
        assert bool(text_report_pattern("aws_resource_report").match(name)) is expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("aws_resource_report_20240305_140709.xls", True),
            ("aws_resource_report_20240305_140709.xlsx", True),
            ("aws_resource_report_20240305_140709.txt", False),
            ("aws_resource_report_20240305_140709.xlsm", False),
        ],
    )
    def test_spreadsheet_pattern(self, name, expected):
        assert bool(spreadsheet_pattern("aws_resource_report").match(name)) is expected


class TestRemovePreviousReports:
    """remove_previous_reports"""

    def test_only_matching_files(self, tmp_path):
        old = tmp_path / "aws_resource_report_20240101_000000.txt"
        old.write_text("old")
        keep = tmp_path / "notes.txt"
        keep.write_text("keep")
        lookalike_dir = tmp_path / "aws_resource_report_20240101_000001.txt"
        lookalike_dir.mkdir()

        removed = remove_previous_reports(tmp_path, text_report_pattern("aws_resource_report"))

        assert removed == [old]
        assert not old.exists()
        assert keep.exists()
        assert lookalike_dir.is_dir()

    def test_missing_directory(self, tmp_path):
        assert remove_previous_reports(tmp_path / "absent", text_report_pattern("x")) == []


# =============================================================================
# publish
# =============================================================================


class TestPublish:
    """publish"""

    def test_writes_all_files(self, config):
        report = make_report()

        paths = publish(report, config)

        raw = render_raw(report)
        assert paths.raw.read_text(encoding="utf-8") == raw
        assert "=" * 120 in raw
        pretty = paths.pretty.read_text(encoding="utf-8")
        assert "\t" not in pretty
        assert "BucketName  CreationDate\nlogs        -\n" in pretty
        sheet = paths.spreadsheet.read_text(encoding="utf-8")
        assert "logs\t-" in sheet
        assert "=" * 120 not in sheet
        assert paths.workbook.exists()

    def test_spreadsheet_in_output_dir_without_shared_dir(self, tmp_path):
        config = ReportConfig(owner_ids=("111111111111",), output_dir=tmp_path, write_workbook=False)

        publish(make_report(), config)

        assert sorted(p.name for p in tmp_path.iterdir()) == [
            "aws_resource_report_20240305_140709.txt",
            "aws_resource_report_20240305_140709.xls",
            "aws_resource_report_20240305_140709_pretty.txt",
        ]

    def test_second_run_replaces_first(self, config, tmp_path):
        """Only the latest run's files remain"""
        publish(make_report(datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)), config)
        (tmp_path / "out" / "README.txt").write_text("unrelated")
        (tmp_path / "share" / "budget.xlsx").write_text("unrelated")

        second = publish(make_report(datetime(2024, 3, 6, 8, 0, 0, tzinfo=timezone.utc)), config)

        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == [
            "README.txt",
            "aws_resource_report_20240306_080000.txt",
            "aws_resource_report_20240306_080000_pretty.txt",
        ]
        assert sorted(p.name for p in (tmp_path / "share").iterdir()) == [
            "aws_resource_report_20240306_080000.xls",
            "aws_resource_report_20240306_080000.xlsx",
            "budget.xlsx",
        ]
        assert all(p.exists() for p in second.all())

    def test_creates_directories(self, tmp_path):
        config = ReportConfig(
            owner_ids=("111111111111",),
            output_dir=tmp_path / "a" / "b",
            shared_output_dir=tmp_path / "c" / "d",
        )

        paths = publish(make_report(), config)

        assert paths.raw.parent.is_dir()
        assert paths.spreadsheet.parent.is_dir()

    def test_unwritable_target(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        config = ReportConfig(owner_ids=("111111111111",), output_dir=blocker, write_workbook=False)

        with pytest.raises(PublishError) as exc_info:
            publish(make_report(), config)

        assert "blocker" in exc_info.value.path

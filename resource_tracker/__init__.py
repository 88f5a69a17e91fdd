"""
resource_tracker - AWS resource inventory reports

Lists EC2 instances (filtered by owner account), S3 buckets, Lambda functions
and IAM users across every enabled region and writes three report files:
raw text, column-aligned text and a tab-separated spreadsheet copy.

Architecture:
    resource_tracker/
    ├── cli/            # Click commands and rich console output
    └── core/
        ├── aws/        # boto3 client factory and per-call result types
        ├── inventory/  # Resource records and collectors
        ├── report/     # Report model, text renderers, Excel workbook
        ├── config.py   # Settings, environment helpers, ReportConfig
        ├── exceptions.py
        ├── precheck.py
        ├── publish.py
        ├── region.py
        └── runner.py

Usage:
    from resource_tracker.core.config import load_config
    from resource_tracker.core.runner import run_report

    result = run_report(load_config(owner_ids=["123456789012"]))
    print(result.paths.raw)
"""

__version__ = "1.0.0"

__all__: list[str] = ["__version__"]

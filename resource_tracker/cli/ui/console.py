"""
resource_tracker/cli/ui/console.py - Rich console utilities

Shared console, logging setup and the run summary tables.
"""

from __future__ import annotations

import logging
import platform
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from resource_tracker.core.config import LogConfig

if TYPE_CHECKING:
    from resource_tracker.core.aws.calls import CallError
    from resource_tracker.core.runner import RunResult

# Limit botocore noise
for _name in ("botocore.httpchecksum", "botocore.credentials", "botocore.loaders", "botocore.session"):
    logging.getLogger(_name).setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """Rich Console instance"""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        highlight=True,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# Global console instances
console = get_console()
err_console = get_console(stderr=True)

PACKAGE_LOGGER = "resource_tracker"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a RichHandler (stderr) to the package logger

    Args:
        level: Log level name (None = LOG_LEVEL env, else WARNING)

    Returns:
        The configured package logger
    """
    log_config = LogConfig.from_env()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel((level or log_config.level).upper())

    # Replace, so repeated CLI invocations in one process do not stack handlers
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt=log_config.date_format))
    logger.addHandler(handler)
    return logger


# =============================================================================
# Standard output styles
# =============================================================================

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"


def print_success(message: str) -> None:
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """Error line (red, stderr)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Warning line (yellow, stderr)"""
    err_console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


# =============================================================================
# Run summary
# =============================================================================


def print_summary(result: RunResult) -> None:
    """Row count per section and the written files

    Args:
        result: RunResult of a finished run
    """
    table = Table(title=f"Report ({len(result.regions)} regions)")
    table.add_column("Section", style="cyan")
    table.add_column("Rows", justify="right", style="green")
    table.add_column("Failed calls", justify="right")
    for section_result in result.section_results:
        failed = len(section_result.errors)
        table.add_row(
            section_result.section.title,
            str(section_result.section.row_count),
            f"[red]{failed}[/red]" if failed else "0",
        )
    console.print(table)

    for path in result.paths.all():
        print_success(f"wrote {path}")


def print_call_errors(errors: list[CallError]) -> None:
    """Failed AWS calls, one row each"""
    if not errors:
        return

    table = Table(title="Failed AWS calls", header_style="bold red")
    table.add_column("Region")
    table.add_column("Call")
    table.add_column("Category")
    table.add_column("Code")
    table.add_column("Message", overflow="fold")
    for e in errors:
        table.add_row(e.region, f"{e.service}.{e.operation}", e.category.value, e.error_code, e.message)
    err_console.print(table)

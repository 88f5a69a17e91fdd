"""
resource_tracker/cli/app.py - Main CLI entry point

Commands:
    resource-tracker report [OPTIONS]     # collect and publish a report
    resource-tracker regions [--profile]  # list enabled regions
    resource-tracker --version

Exit codes:
    0   report written (some AWS calls may have failed, see the summary)
    1   precondition failed (missing tool, region enumeration) or files
        could not be written
    2   invalid configuration

Usage:
    $ resource-tracker report --owner-id 123456789012 --shared-dir /mnt/share
    $ python -m resource_tracker report --config tracker.yaml
"""

from __future__ import annotations

import click

from resource_tracker.core.config import get_version

VERSION = get_version()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

EXIT_FAILED = 1
EXIT_CONFIG = 2


@click.group()
@click.version_option(VERSION, prog_name="resource-tracker")
def cli() -> None:
    """AWS resource tracker - EC2 / S3 / Lambda / IAM report"""


@cli.command("report")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML config file",
)
@click.option("--owner-id", "owner_ids", multiple=True, help="EC2 owner account id (repeatable)")
@click.option("-o", "--output-dir", default=None, type=click.Path(file_okay=False), help="Directory for the text reports")
@click.option(
    "--shared-dir",
    "shared_output_dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory for the spreadsheet copy",
)
@click.option("-p", "--profile", default=None, help="AWS profile")
@click.option("--require", "required_commands", multiple=True, help="Executable that must be on PATH (repeatable)")
@click.option("--no-workbook", is_flag=True, help="Skip the .xlsx workbook")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None, help="Log level")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output")
def report_cmd(
    config_path: str | None,
    owner_ids: tuple[str, ...],
    output_dir: str | None,
    shared_output_dir: str | None,
    profile: str | None,
    required_commands: tuple[str, ...],
    no_workbook: bool,
    log_level: str | None,
    quiet: bool,
) -> None:
    """Collect resources and publish the report files"""
    from resource_tracker.cli.ui import print_call_errors, print_error, print_summary, print_warning, setup_logging
    from resource_tracker.core.config import load_config
    from resource_tracker.core.exceptions import ConfigError, PreconditionError, PublishError, format_error_for_user
    from resource_tracker.core.runner import run_report

    setup_logging(log_level)

    try:
        config = load_config(
            config_path,
            owner_ids=list(owner_ids) or None,
            output_dir=output_dir,
            shared_output_dir=shared_output_dir,
            profile=profile,
            required_commands=list(required_commands) or None,
            write_workbook=False if no_workbook else None,
        )
        result = run_report(config)
    except ConfigError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(EXIT_CONFIG) from e
    except (PreconditionError, PublishError) as e:
        print_error(format_error_for_user(e))
        raise SystemExit(EXIT_FAILED) from e

    if quiet:
        for path in result.paths.all():
            click.echo(str(path))
    else:
        print_summary(result)

    if result.has_partial_failures:
        print_warning(f"{len(result.errors)} AWS call(s) failed; their rows are missing from the report")
        if not quiet:
            print_call_errors(result.errors)


@cli.command("regions")
@click.option("-p", "--profile", default=None, help="AWS profile")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None, help="Log level")
def regions_cmd(profile: str | None, log_level: str | None) -> None:
    """List the enabled regions, one per line"""
    from resource_tracker.cli.ui import print_error, setup_logging
    from resource_tracker.core.aws.client import create_session
    from resource_tracker.core.config import get_default_profile, get_default_region
    from resource_tracker.core.exceptions import ConfigError, PreconditionError, format_error_for_user
    from resource_tracker.core.region import list_regions

    setup_logging(log_level)

    try:
        session = create_session(profile or get_default_profile())
        regions = list_regions(session, get_default_region())
    except ConfigError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(EXIT_CONFIG) from e
    except PreconditionError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(EXIT_FAILED) from e

    for region in regions:
        click.echo(region)


def main() -> None:
    """Console script entry point"""
    cli()


if __name__ == "__main__":
    main()

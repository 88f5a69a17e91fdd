"""
resource_tracker/core/config.py - Central configuration

Constants, environment helpers and the per-run ReportConfig.

Resolution order for ReportConfig (later wins):
    1. Defaults
    2. YAML file (--config, or RESOURCE_TRACKER_CONFIG)
    3. Environment variables (RESOURCE_TRACKER_*)
    4. Explicit overrides (CLI flags)

Usage:
    from resource_tracker.core.config import load_config, settings

    config = load_config("tracker.yaml", owner_ids=["123456789012"])
    print(config.shared_output_dir, settings.DEFAULT_REGION)
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigError

# =============================================================================
# Constants
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """Application-wide constants (immutable)"""

    # Region used for describe_regions and the global services (S3, IAM, STS)
    DEFAULT_REGION: str = "us-east-1"

    # botocore client settings
    API_CONNECT_TIMEOUT: int = 10  # seconds
    API_READ_TIMEOUT: int = 30  # seconds

    # Report layout
    RULE_WIDTH: int = 120
    RULE_CHAR: str = "="
    PRETTY_COLUMN_GAP: int = 2
    PLACEHOLDER_OPTIONAL: str = "-"
    PLACEHOLDER_REQUIRED: str = "NA"
    REPORT_PREFIX: str = "aws_resource_report"
    TIMESTAMP_FORMAT: str = "%Y%m%d_%H%M%S"


settings = Settings()

# Environment variable names
ENV_CONFIG = "RESOURCE_TRACKER_CONFIG"
ENV_OWNER_IDS = "RESOURCE_TRACKER_OWNER_IDS"
ENV_OUTPUT_DIR = "RESOURCE_TRACKER_OUTPUT_DIR"
ENV_SHARED_DIR = "RESOURCE_TRACKER_SHARED_DIR"
ENV_WRITE_WORKBOOK = "RESOURCE_TRACKER_WRITE_WORKBOOK"

_ACCOUNT_ID_RE = re.compile(r"^\d{12}$")
_PREFIX_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def get_version() -> str:
    """Package version string"""
    from resource_tracker import __version__

    return __version__


# =============================================================================
# Environment helpers
# =============================================================================


_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def parse_bool(value: str) -> bool | None:
    """true/1/yes/on or false/0/no/off (case-insensitive), else None"""
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def get_env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable

    Accepts the values parse_bool understands. Anything else falls back
    to the default.
    """
    value = os.environ.get(name)
    if value is None:
        return default

    parsed = parse_bool(value)
    return default if parsed is None else parsed


def get_env_list(name: str) -> list[str] | None:
    """Read a comma/space separated environment variable

    Returns:
        List of non-empty items, or None if the variable is unset
    """
    value = os.environ.get(name)
    if value is None:
        return None
    return [item for item in re.split(r"[,\s]+", value) if item]


def get_default_profile() -> str | None:
    """Profile from AWS_PROFILE / AWS_DEFAULT_PROFILE, if set"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE")


def get_default_region() -> str:
    """Region from AWS_REGION / AWS_DEFAULT_REGION, else settings.DEFAULT_REGION"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


# =============================================================================
# Logging
# =============================================================================


@dataclass
class LogConfig:
    """Logging configuration"""

    level: str = "WARNING"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Build from LOG_LEVEL"""
        return cls(level=os.environ.get("LOG_LEVEL", cls.level).upper())


# =============================================================================
# Report configuration
# =============================================================================


def _dedupe(items: Any) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(str(item).strip(), None)
    return tuple(k for k in seen if k)


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        parsed = parse_bool(value)
        if parsed is not None:
            return parsed
    raise ConfigError(key, f"expected true or false, got {value!r}")


@dataclass
class ReportConfig:
    """Settings for one report run

    Attributes:
        owner_ids: EC2 owner account ids; reservations owned by any other
            account are left out of the EC2 section
        output_dir: Directory for the raw and pretty reports
        shared_output_dir: Directory for the spreadsheet copy (and workbook).
            None means output_dir.
        required_commands: Executables that must be on PATH before the run
        profile: Named profile of the ambient AWS config (None = default chain)
        discovery_region: Region used for describe_regions and global services
            (default: AWS_REGION / AWS_DEFAULT_REGION, else us-east-1)
        write_workbook: Also write an .xlsx workbook next to the spreadsheet
        report_prefix: File name prefix shared by every report artifact
    """

    owner_ids: tuple[str, ...]
    output_dir: Path = field(default_factory=Path.cwd)
    shared_output_dir: Path | None = None
    required_commands: tuple[str, ...] = ()
    profile: str | None = None
    discovery_region: str = field(default_factory=get_default_region)
    write_workbook: bool = True
    report_prefix: str = settings.REPORT_PREFIX

    def __post_init__(self) -> None:
        if isinstance(self.owner_ids, str):
            self.owner_ids = (self.owner_ids,)
        self.owner_ids = _dedupe(self.owner_ids)
        if isinstance(self.required_commands, str):
            self.required_commands = (self.required_commands,)
        self.required_commands = _dedupe(self.required_commands)
        self.write_workbook = _as_bool("write_workbook", self.write_workbook)
        self.output_dir = Path(self.output_dir).expanduser()
        if self.shared_output_dir is not None:
            self.shared_output_dir = Path(self.shared_output_dir).expanduser()

        if not self.owner_ids:
            raise ConfigError("owner_ids", "at least one EC2 owner account id is required")
        bad = [oid for oid in self.owner_ids if not _ACCOUNT_ID_RE.match(oid)]
        if bad:
            raise ConfigError("owner_ids", f"not a 12-digit account id: {', '.join(bad)}")
        if not _PREFIX_RE.match(self.report_prefix):
            raise ConfigError("report_prefix", f"invalid characters in {self.report_prefix!r}")

    @property
    def spreadsheet_dir(self) -> Path:
        """Where the spreadsheet copy goes"""
        return self.shared_output_dir or self.output_dir


_CONFIG_KEYS = {f.name for f in fields(ReportConfig)}


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError("config", f"cannot read {path}", cause=e) from e
    except yaml.YAMLError as e:
        raise ConfigError("config", f"malformed YAML in {path}", cause=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config", f"{path} must contain a mapping")

    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError("config", f"unknown key(s) in {path}: {', '.join(unknown)}")
    return data


def _read_env() -> dict[str, Any]:
    values: dict[str, Any] = {}

    owner_ids = get_env_list(ENV_OWNER_IDS)
    if owner_ids is not None:
        values["owner_ids"] = owner_ids
    if os.environ.get(ENV_OUTPUT_DIR):
        values["output_dir"] = os.environ[ENV_OUTPUT_DIR]
    if os.environ.get(ENV_SHARED_DIR):
        values["shared_output_dir"] = os.environ[ENV_SHARED_DIR]
    if os.environ.get(ENV_WRITE_WORKBOOK) is not None:
        values["write_workbook"] = get_env_bool(ENV_WRITE_WORKBOOK, default=True)

    profile = get_default_profile()
    if profile:
        values["profile"] = profile
    return values


def load_config(path: str | Path | None = None, **overrides: Any) -> ReportConfig:
    """Build a ReportConfig from file, environment and explicit overrides

    Args:
        path: YAML file (None = RESOURCE_TRACKER_CONFIG, if set)
        **overrides: ReportConfig fields; None values are ignored

    Returns:
        Validated ReportConfig

    Raises:
        ConfigError: unreadable/invalid file, unknown keys, invalid values
    """
    values: dict[str, Any] = {}

    path = path or os.environ.get(ENV_CONFIG)
    if path:
        values.update(_read_yaml(Path(path)))

    values.update(_read_env())

    unknown = sorted(set(overrides) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError("overrides", f"unknown option(s): {', '.join(unknown)}")
    values.update({k: v for k, v in overrides.items() if v is not None})

    if "owner_ids" not in values:
        raise ConfigError("owner_ids", "no owner ids configured (file, environment or --owner-id)")

    try:
        return ReportConfig(**values)
    except TypeError as e:
        raise ConfigError("config", str(e), cause=e) from e

"""
resource_tracker/core/precheck.py - Required tool check

Runs before any network call. The first missing executable aborts the run.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable

from .exceptions import MissingToolError

logger = logging.getLogger(__name__)


def require_commands(commands: Iterable[str]) -> None:
    """Verify every command resolves on PATH

    Args:
        commands: Executable names, checked in order

    Raises:
        MissingToolError: on the first command that is not found
    """
    for command in commands:
        path = shutil.which(command)
        if path is None:
            raise MissingToolError(command)
        logger.debug(f"found {command}: {path}")

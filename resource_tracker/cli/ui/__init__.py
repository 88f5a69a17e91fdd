"""
resource_tracker/cli/ui - Console output
"""

from .console import (
    console,
    err_console,
    print_call_errors,
    print_error,
    print_success,
    print_summary,
    print_warning,
    setup_logging,
)

__all__: list[str] = [
    "console",
    "err_console",
    "setup_logging",
    "print_success",
    "print_error",
    "print_warning",
    "print_summary",
    "print_call_errors",
]

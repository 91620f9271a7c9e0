"""
Command-line helpers for firm_research.

Provides logging setup and standard argument patterns shared by the
console scripts.
"""

from firm_research.cli.args import add_execute_argument
from firm_research.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)

__all__ = [
    "add_execute_argument",
    "print_dry_run_header",
    "print_execute_header",
    "setup_logging",
]

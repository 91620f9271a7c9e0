"""
Argument parsing utilities for firm_research CLI.

Provides standard argument patterns used across commands.
"""

from pathlib import Path


def add_execute_argument(parser):
    """
    Add standard --execute argument to an ArgumentParser.

    Args:
        parser: argparse.ArgumentParser instance
    """
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually run the research and write reports (default is dry-run)",
    )


def add_hint_arguments(parser):
    """
    Add the optional research hints (--contact-name, --city, --region, --country, --company).

    Args:
        parser: argparse.ArgumentParser instance
    """
    group = parser.add_argument_group("hints", "Trusted above anything scraped from the site")
    group.add_argument("--contact-name", help="Contact person at the firm")
    group.add_argument("--city", help="Firm city")
    group.add_argument("--region", help="State, province or region code")
    group.add_argument("--country", help="Country code (default: US when --city is given)")
    group.add_argument("--company", help="Firm name as it should appear in the report")


def add_reports_dir_argument(parser, default: Path | None = None):
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=default,
        help="Directory for <firm>-research.json files (default: REPORTS_DIR setting)",
    )

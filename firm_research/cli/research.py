"""
Research one firm website, or a CSV of leads.

Usage:
    research-firm https://roth-jackson.com                      # Dry-run (plan only)
    research-firm https://roth-jackson.com --city McLean --region VA --execute
    research-firm --input leads.csv --execute                   # Batch with progress bar

CSV columns: website, contact_name, city, region, country, company
"""

import argparse
import csv
import sys
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from firm_research.cache import get_cache
from firm_research.cli.args import (
    add_execute_argument,
    add_hint_arguments,
    add_reports_dir_argument,
)
from firm_research.cli.logging import (
    print_dry_run_header,
    print_execute_header,
    setup_logging,
)
from firm_research.config import get_settings
from firm_research.exceptions import SiteUnreachableError
from firm_research.models import ResearchHints
from firm_research.pipeline import research_firm
from firm_research.quality import is_report_ready
from firm_research.serialization import write_record

CSV_COLUMNS = ("website", "contact_name", "city", "region", "country", "company")


@dataclass
class Lead:
    website: str
    hints: ResearchHints = field(default_factory=ResearchHints)


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def lead_from_row(row: dict) -> Lead | None:
    """Build a lead from one CSV row; rows without a website are skipped."""
    website = _clean(row.get("website"))
    if not website:
        return None
    return Lead(
        website=website,
        hints=ResearchHints(
            contact_name=_clean(row.get("contact_name")),
            city=_clean(row.get("city")),
            region=_clean(row.get("region")),
            country=_clean(row.get("country")),
            organization_name=_clean(row.get("company")),
        ),
    )


def read_leads(path: Path) -> list[Lead]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        return [lead for lead in (lead_from_row(row) for row in reader) if lead]


def lead_from_args(args: argparse.Namespace) -> Lead:
    return Lead(
        website=args.website,
        hints=ResearchHints(
            contact_name=args.contact_name,
            city=args.city,
            region=args.region,
            country=args.country,
            organization_name=args.company,
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build confidence-scored research records for law firm websites"
    )
    parser.add_argument("website", nargs="?", help="Firm website URL")
    parser.add_argument(
        "--input",
        type=Path,
        help=f"CSV of leads (columns: {', '.join(CSV_COLUMNS)})",
    )
    add_hint_arguments(parser)
    add_reports_dir_argument(parser)
    add_execute_argument(parser)
    return parser


def research_lead(lead: Lead, reports_dir: Path, settings, cache, logger) -> Path | None:
    """Research one lead and write its record. Returns None when the site is unreachable."""
    try:
        record = research_firm(lead.website, lead.hints, settings=settings, cache=cache)
    except SiteUnreachableError as e:
        logger.error(f"✗ {e}")
        return None

    path = write_record(record, reports_dir)
    quality = record.data_quality
    status = "ready" if is_report_ready(quality) else "needs review"
    logger.info(
        f"✓ {record.subject_name}: overall confidence {quality.confidence['overall']}/10 "
        f"({status}), {len(quality.warnings)} warnings -> {path}"
    )
    return path


def main(argv: list[str] | None = None) -> int:
    """Run the research command. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.website and not args.input:
        parser.error("a WEBSITE or --input CSV is required")

    logger = setup_logging("research_firm", execute=args.execute)
    settings = get_settings()
    reports_dir = args.reports_dir or settings.reports_dir

    leads = read_leads(args.input) if args.input else [lead_from_args(args)]
    if not leads:
        logger.warning("No leads with a website to research")
        return 0

    if not args.execute:
        print_dry_run_header("Firm Research", logger)
        for lead in leads:
            hint = lead.hints.location_hint()
            where = f" near {hint.city}, {hint.region or hint.country}" if hint else ""
            logger.info(f"  Would research {lead.website}{where}")
        logger.info(f"Reports would be written to {reports_dir}")
        logger.info("Run with --execute to research")
        return 0

    print_execute_header("Firm Research", logger)
    cache = get_cache(settings.cache_dir)
    written = 0
    try:
        if len(leads) == 1:
            written += research_lead(leads[0], reports_dir, settings, cache, logger) is not None
        else:
            for lead in tqdm(leads, desc="Researching firms", unit="firm"):
                written += research_lead(lead, reports_dir, settings, cache, logger) is not None
    finally:
        cache.close()

    failed = len(leads) - written
    logger.info(f"Wrote {written} research records ({failed} unreachable)")
    return 1 if written == 0 else 0


if __name__ == "__main__":
    sys.exit(main())

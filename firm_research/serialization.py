"""
Research record output.

Records are written as one JSON document per firm, named after the firm
(or its domain when no name was found).
"""

import json
import logging
import re
from pathlib import Path

from firm_research.constants import DEFAULT_FIRM_NAME
from firm_research.discovery.urls import bare_host
from firm_research.extraction.text import fold_accents
from firm_research.models import ResearchRecord

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    """Lower-case ASCII slug: "Roth & Jackson, P.C." -> "roth-jackson-p-c"."""
    folded = fold_accents(value or "").lower()
    return re.sub(r"[^a-z0-9]+", "-", folded).strip("-")


def record_slug(record: ResearchRecord) -> str:
    """File-name slug for a record: the firm name, else the website host."""
    if record.subject_name and record.subject_name != DEFAULT_FIRM_NAME:
        slug = slugify(record.subject_name)
        if slug:
            return slug
    return slugify(bare_host(record.website)) or "firm"


def write_record(record: ResearchRecord, reports_dir: Path) -> Path:
    """
    Write a record as `<slug>-research.json`.

    Returns:
        Path of the written file
    """
    reports_dir = Path(reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)
    path = reports_dir / f"{record_slug(record)}-research.json"
    path.write_text(json.dumps(record.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote {path}")
    return path

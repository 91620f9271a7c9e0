"""
Confidence aggregation.

Runs last. Collects the per-field confidence each stage recorded into the
record's DataQuality block and computes the overall score. Warnings and
missing fields are left as the stages accumulated them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal

from firm_research.constants import REPORT_READY_THRESHOLD
from firm_research.models import CONFIDENCE_FIELDS, DataQuality, ResearchRecord

logger = logging.getLogger(__name__)


def overall_confidence(values: Iterable[int]) -> int:
    """Mean of the field confidences, rounded half up (7.5 -> 8)."""
    values = list(values)
    if not values:
        return 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def aggregate(
    record: ResearchRecord,
    field_confidence: Mapping[str, int] | None = None,
) -> DataQuality:
    """
    Finalize the record's data quality block.

    Args:
        record: Research record whose stages have all run
        field_confidence: Optional per-field overrides applied before the
            overall score is computed

    Returns:
        The record's DataQuality, with `overall` recomputed
    """
    quality = record.data_quality
    for name, value in (field_confidence or {}).items():
        quality.set_confidence(name, value)

    # Location confidence always follows the canonical location's source
    quality.set_confidence("location", record.location.confidence)
    if not record.location.is_resolved:
        quality.add_missing("location")

    quality.confidence["overall"] = overall_confidence(
        quality.confidence[name] for name in CONFIDENCE_FIELDS
    )
    logger.info(
        f"Data quality for {record.website}: overall {quality.confidence['overall']}, "
        f"{len(quality.warnings)} warnings, missing {quality.missing_fields or 'nothing'}"
    )
    return quality


def is_report_ready(quality: DataQuality, threshold: int = REPORT_READY_THRESHOLD) -> bool:
    """True when overall confidence meets the threshold and a location is known."""
    if quality.confidence.get("location", 0) == 0:
        return False
    return quality.confidence.get("overall", 0) >= threshold

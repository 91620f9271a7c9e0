"""
Fact Extraction Engine.

Applies the extractors that fit a page's role to its text and adds the
results to the research record. The extractors themselves are pure
functions of text; the engine only decides which ones run and records
warnings when a page yields nothing.
"""

from __future__ import annotations

import logging

from firm_research.constants import MAX_AWARD_CREDENTIALS, MAX_BAR_CREDENTIALS
from firm_research.discovery.categorizer import PageRole
from firm_research.extraction.credentials import (
    extract_awards,
    extract_bar_admissions,
    extract_education,
)
from firm_research.extraction.firm_facts import (
    find_founding_year,
    find_team_size,
    years_in_business,
)
from firm_research.extraction.practice_areas import (
    detect_practice_areas,
    practice_area_confidence,
)
from firm_research.extraction.roster import extract_roster_with_stats, roster_confidence
from firm_research.models import ResearchRecord

logger = logging.getLogger(__name__)


class FactExtractionEngine:
    """Routes page text to the extractors for its role."""

    def __init__(self, current_year: int | None = None):
        self.current_year = current_year

    def apply(self, record: ResearchRecord, role: PageRole | None, text: str) -> None:
        """
        Extract facts from one page.

        Args:
            record: Record to add facts to
            role: Page role, or None for the homepage
            text: Visible page text
        """
        text = text or ""
        if role is None or role is PageRole.SERVICES:
            self._practice_areas(record, text)
        elif role is PageRole.ABOUT:
            self._about(record, text)
        elif role is PageRole.TEAM:
            self._team(record, text)

    def _practice_areas(self, record: ResearchRecord, text: str) -> None:
        added = [
            area
            for area in detect_practice_areas(text, record.subject_name)
            if record.add_practice_area(area)
        ]
        logger.debug(f"Practice areas added: {added}")

    def _about(self, record: ResearchRecord, text: str) -> None:
        history = record.firm_history
        quality = record.data_quality

        if history.founded_year is None:
            history.founded_year = find_founding_year(text, self.current_year)
            history.years_in_business = years_in_business(history.founded_year, self.current_year)
        if history.team_size is None:
            history.team_size = find_team_size(text)

        for award in extract_awards(text):
            if award not in history.awards:
                history.awards.append(award)
        for admission in extract_bar_admissions(text):
            if admission not in history.bar_admissions:
                history.bar_admissions.append(admission)

        if history.founded_year:
            record.add_credential(f"Established in {history.founded_year}")
        if history.team_size:
            record.add_credential(f"{history.team_size}+ attorneys")
        for award in history.awards[:MAX_AWARD_CREDENTIALS]:
            record.add_credential(award)
        for admission in history.bar_admissions[:MAX_BAR_CREDENTIALS]:
            record.add_credential(admission)

        if not history.awards:
            quality.add_warning("No awards/recognitions found on About page")
        logger.debug(
            f"About page: founded={history.founded_year}, team_size={history.team_size}, "
            f"awards={len(history.awards)}, bar={len(history.bar_admissions)}"
        )

    def _team(self, record: ResearchRecord, text: str) -> None:
        roster, stats = extract_roster_with_stats(text)
        added = sum(1 for attorney in roster if record.add_attorney(attorney))
        for line in extract_education(text):
            record.add_credential(line)
        logger.debug(f"Team page: {added} attorneys added, strategy hits {stats}")

    def finalize(self, record: ResearchRecord) -> None:
        """Score the extracted fields and record what is missing."""
        quality = record.data_quality

        quality.set_confidence("practiceAreas", practice_area_confidence(len(record.practice_areas)))
        if not record.practice_areas:
            quality.add_warning("No practice areas detected - may indicate poor website content")
            quality.add_missing("practiceAreas")

        quality.set_confidence("attorneys", roster_confidence(len(record.attorneys)))
        if not record.attorneys:
            quality.add_warning("No attorneys found on Team page")
            quality.add_missing("attorneys")

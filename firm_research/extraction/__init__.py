"""
Fact extraction from page text.

Pure, deterministic extractors (practice areas, roster, credentials,
founding/size signals, firm name, location candidates) and the engine that
applies them per page role.
"""

from firm_research.extraction.engine import FactExtractionEngine
from firm_research.extraction.practice_areas import detect_practice_areas
from firm_research.extraction.roster import extract_roster

__all__ = ["FactExtractionEngine", "detect_practice_areas", "extract_roster"]

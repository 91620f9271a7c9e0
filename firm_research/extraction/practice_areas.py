"""
Practice-area detection.

Counts occurrences of a fixed English/Spanish vocabulary in page text.
Keywords named in the firm's own name are flagged forced-first, since a
firm called "Smith Immigration Law" is an immigration practice however
rarely the homepage repeats the word.
"""

from __future__ import annotations

import re

from firm_research.extraction.scoring import CandidateCollector
from firm_research.extraction.text import flexible_phrase, fold_accents

PRACTICE_KEYWORDS: tuple[str, ...] = (
    # Personal injury / Lesiones personales
    "personal injury",
    "lesiones personales",
    "accident",
    "accidente",
    "wrongful death",
    "muerte por negligencia",
    "car accident",
    "accidente de auto",
    "accidente automovilistico",
    "truck accident",
    "accidente de camion",
    "motorcycle accident",
    "accidente de motocicleta",
    "pedestrian accident",
    "accidente peatonal",
    "bicycle accident",
    "accidente de bicicleta",
    "slip and fall",
    "resbalones y caidas",
    "premises liability",
    "dog bite",
    "mordida de perro",
    "medical malpractice",
    "negligencia medica",
    "catastrophic injury",
    "lesion catastrofica",
    # Tax / Fiscal
    "tax law",
    "derecho fiscal",
    "tax planning",
    "international tax",
    "irs",
    # Immigration / Inmigración
    "immigration",
    "inmigracion",
    "citizenship",
    "ciudadania",
    "visa",
    "expatriate",
    # Family / Familia
    "family law",
    "derecho familiar",
    "divorce",
    "divorcio",
    "custody",
    "custodia",
    "child support",
    "manutencion",
    # Criminal / Penal
    "criminal defense",
    "defensa criminal",
    "dui",
    "dwi",
    "expungement",
    # Business / Negocios
    "corporate",
    "business law",
    "derecho empresarial",
    "commercial",
    # Real estate / Bienes raíces
    "real estate",
    "bienes raices",
    "property law",
    "conveyancing",
    # Estate planning / Planificación patrimonial
    "estate planning",
    "planificacion patrimonial",
    "wills",
    "testamentos",
    "trusts",
    "probate",
    # Employment / Laboral
    "employment law",
    "derecho laboral",
    "labor law",
    "discrimination",
    "discriminacion",
    # Intellectual property / Propiedad intelectual
    "intellectual property",
    "propiedad intelectual",
    "trademark",
    "copyright",
    "patent",
    # Other
    "litigation",
    "litigio",
    "trial",
    "appeals",
    "bankruptcy",
    "bancarrota",
    "debt relief",
    "international law",
    "cross-border",
    "global",
)

# Words too common in firm names to say anything about the practice
GENERIC_NAME_WORDS = frozenset(
    {"law", "legal", "and", "of", "the", "de", "del", "la", "el", "por", "y", "office"}
)

_KEYWORD_PATTERNS: dict[str, re.Pattern] = {
    keyword: re.compile(rf"(?<!\w){flexible_phrase(keyword)}(?!\w)", re.IGNORECASE)
    for keyword in PRACTICE_KEYWORDS
}


def count_keyword(keyword: str, folded_text: str) -> int:
    """Whole-word occurrences of a vocabulary keyword in accent-folded text."""
    pattern = _KEYWORD_PATTERNS.get(keyword)
    if pattern is None:
        pattern = re.compile(rf"(?<!\w){flexible_phrase(keyword)}(?!\w)", re.IGNORECASE)
    return len(pattern.findall(folded_text))


def named_in_firm(keyword: str, subject_name: str) -> bool:
    """True if the firm name contains the keyword or one of its distinctive words."""
    name = fold_accents(subject_name or "").lower()
    if not name.strip():
        return False
    if count_keyword(keyword, name):
        return True
    name_words = set(re.findall(r"[\w-]+", name))
    return any(
        word in name_words
        for word in keyword.split()
        if word not in GENERIC_NAME_WORDS and len(word) > 2
    )


def collect_practice_areas(text: str, subject_name: str = "") -> CandidateCollector:
    """Score every vocabulary keyword against the text."""
    folded = fold_accents(text or "")
    folded_name = fold_accents(subject_name or "")
    collector = CandidateCollector()
    for keyword in PRACTICE_KEYWORDS:
        count = count_keyword(keyword, folded)
        # A shared word only promotes keywords the page mentions; the whole
        # keyword in the name promotes it even when the page never repeats it
        named = named_in_firm(keyword, subject_name) and (
            count > 0 or count_keyword(keyword, folded_name) > 0
        )
        collector.add(keyword, count, forced_first=named)
    return collector


def detect_practice_areas(text: str, subject_name: str = "") -> list[str]:
    """
    Practice areas mentioned in the text, most relevant first.

    Args:
        text: Page text
        subject_name: Firm name; keywords it names sort first

    Returns:
        Keywords with at least one occurrence (or named by the firm)
    """
    return collect_practice_areas(text, subject_name).values()


def practice_area_confidence(count: int) -> int:
    """Confidence (0-10) for the number of practice areas found."""
    if count >= 3:
        return 9
    if count >= 1:
        return 6
    return 3

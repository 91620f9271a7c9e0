"""
Firm name resolution.

Sources in precedence order (confidence 0-10):
1. Supplied organization name (10)
2. og:site_name meta tag (9)
3. Page title part that looks like a legal business name, or the last
   non-generic title part (7)
4. Domain label, title-cased ("roth-jackson.com" -> "Roth Jackson") (5)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from firm_research.constants import (
    DEFAULT_FIRM_NAME,
    FIRM_NAME_CONFIDENCE_DOMAIN,
    FIRM_NAME_CONFIDENCE_HINT,
    FIRM_NAME_CONFIDENCE_SITE_NAME,
    FIRM_NAME_CONFIDENCE_TITLE,
    MAX_SITE_NAME_LENGTH,
)
from firm_research.discovery.urls import domain_label
from firm_research.sources.base import make_soup

logger = logging.getLogger(__name__)

TITLE_SEPARATORS = re.compile(r"\s*[|–—·:]\s*|\s+-\s+")
LEGAL_NAME_PATTERN = re.compile(
    r"\b(?:law|legal|attorneys?|lawyers?|professional corporation|p\.?c\.?|llp|pllc|abogados)\b",
    re.IGNORECASE,
)
GENERIC_TITLES = re.compile(r"^(?:home|homepage|welcome|index|main|about|contact|inicio)$", re.I)


@dataclass(frozen=True)
class FirmNameResult:
    name: str
    source: str
    confidence: int


def site_name_from_html(html: str) -> str | None:
    """Content of <meta property="og:site_name">, when short enough to be a name."""
    if not html:
        return None
    tag = make_soup(html).find("meta", attrs={"property": "og:site_name"})
    content = (tag.get("content") or "").strip() if tag else ""
    if content and len(content) < MAX_SITE_NAME_LENGTH:
        return content
    return None


def name_from_title(title: str) -> str | None:
    """Pick the brand part of a page title such as "Car Accidents | Smith Law"."""
    parts = [part.strip() for part in TITLE_SEPARATORS.split(title or "") if part.strip()]
    for part in reversed(parts):
        if LEGAL_NAME_PATTERN.search(part) and len(part) < MAX_SITE_NAME_LENGTH:
            return part
    for part in reversed(parts):
        if not GENERIC_TITLES.match(part) and len(part) < MAX_SITE_NAME_LENGTH:
            return part
    return None


def name_from_domain(website: str) -> str:
    label = domain_label(website)
    words = [word for word in re.split(r"[-_]", label) if word]
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _page_title(html: str) -> str:
    if not html:
        return ""
    title = make_soup(html).find("title")
    return title.get_text(strip=True) if title else ""


def resolve_firm_name(
    html: str,
    website: str,
    hint: str | None = None,
    title: str | None = None,
) -> FirmNameResult:
    """
    Resolve the firm's display name.

    Args:
        html: Homepage HTML (for og:site_name and <title>)
        website: Final homepage URL (for the domain fallback)
        hint: Organization name supplied by the caller
        title: Rendered page title, if already known
    """
    if hint and hint.strip():
        return FirmNameResult(hint.strip(), "hint", FIRM_NAME_CONFIDENCE_HINT)

    site_name = site_name_from_html(html)
    if site_name:
        return FirmNameResult(site_name, "og:site_name", FIRM_NAME_CONFIDENCE_SITE_NAME)

    from_title = name_from_title(title if title is not None else _page_title(html))
    if from_title:
        return FirmNameResult(from_title, "page-title", FIRM_NAME_CONFIDENCE_TITLE)

    from_domain = name_from_domain(website) if website else ""
    if from_domain:
        return FirmNameResult(from_domain, "domain", FIRM_NAME_CONFIDENCE_DOMAIN)

    logger.debug(f"No firm name found for {website}")
    return FirmNameResult(DEFAULT_FIRM_NAME, "default", FIRM_NAME_CONFIDENCE_DOMAIN)

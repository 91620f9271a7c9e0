"""
Page Categorizer.

Assigns discovered URLs to semantic roles by path shape. Each role has an
ordered list of patterns (English and Spanish); the most specific pattern
(whole last path segment) is tried against every URL before looser ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import unquote, urlsplit


class PageRole(Enum):
    """Semantic role of a page on a firm website."""

    ABOUT = "about"
    TEAM = "team"
    CONTACT = "contact"
    SERVICES = "services"
    TESTIMONIALS = "testimonials"


def _last_segment(*names: str) -> re.Pattern:
    return re.compile(rf"/(?:{'|'.join(re.escape(n) for n in names)})/?$")


def _any_segment(*stems: str) -> re.Pattern:
    return re.compile(rf"/[^/]*(?:{'|'.join(re.escape(s) for s in stems)})[^/]*(?:/|$)")


ROLE_PATTERNS: dict[PageRole, list[re.Pattern]] = {
    PageRole.ABOUT: [
        _last_segment(
            "about-us",
            "about",
            "our-firm",
            "the-firm",
            "who-we-are",
            "our-story",
            "firm-overview",
            "nosotros",
            "quienes-somos",
            "sobre-nosotros",
        ),
        _any_segment("about", "nosotros"),
    ],
    PageRole.TEAM: [
        _last_segment(
            "our-team",
            "team",
            "meet-our-team",
            "meet-the-team",
            "attorneys",
            "our-attorneys",
            "lawyers",
            "our-lawyers",
            "staff",
            "people",
            "professionals",
            "nuestro-equipo",
            "nuestroequipo",
            "equipo",
            "abogados",
        ),
        _any_segment("team", "attorneys", "lawyers", "equipo", "abogados"),
    ],
    PageRole.CONTACT: [
        _last_segment(
            "contact",
            "contact-us",
            "contacto",
            "contactenos",
            "contáctenos",
            "locations",
            "offices",
            "our-offices",
            "reach-us",
            "ubicacion",
            "ubicación",
            "oficinas",
        ),
        _any_segment("contact", "contacto", "location", "ubicacion"),
    ],
    PageRole.SERVICES: [
        _last_segment(
            "services",
            "our-services",
            "practice-areas",
            "practice-area",
            "what-we-do",
            "areas-of-practice",
            "servicios",
            "areas-de-practica",
            "practica",
        ),
        _any_segment("practice", "services", "servicios"),
    ],
    PageRole.TESTIMONIALS: [
        _last_segment(
            "testimonials",
            "reviews",
            "client-reviews",
            "results",
            "case-results",
            "success-stories",
            "testimonios",
            "resenas",
            "reseñas",
            "clientes",
        ),
        _any_segment("testimonial", "review", "results", "testimonio"),
    ],
}


@dataclass
class CategorizedPages:
    """Best URL per role, plus the roles nothing matched."""

    pages: dict[PageRole, str] = field(default_factory=dict)
    missing: list[PageRole] = field(default_factory=list)

    def get(self, role: PageRole) -> str | None:
        return self.pages.get(role)

    def missing_warnings(self) -> list[str]:
        return [f"Missing key page: {role.value}" for role in self.missing]


def url_path(url: str) -> str:
    """Lower-cased, percent-decoded path ("/" for the homepage)."""
    return unquote(urlsplit(url).path or "/").lower()


def categorize_pages(urls: list[str]) -> CategorizedPages:
    """Map each role to the first URL matching its most specific pattern."""
    paths = [(url, url_path(url)) for url in urls]
    result = CategorizedPages()
    for role, patterns in ROLE_PATTERNS.items():
        match = next(
            (url for pattern in patterns for url, path in paths if pattern.search(path)),
            None,
        )
        if match is None:
            result.missing.append(role)
        else:
            result.pages[role] = match
    return result

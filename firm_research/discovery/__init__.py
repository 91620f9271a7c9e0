"""Finding and classifying the pages of a firm website."""

from firm_research.discovery.categorizer import CategorizedPages, PageRole, categorize_pages
from firm_research.discovery.pages import DiscoveryResult, PageDiscovery

__all__ = [
    "CategorizedPages",
    "DiscoveryResult",
    "PageDiscovery",
    "PageRole",
    "categorize_pages",
]

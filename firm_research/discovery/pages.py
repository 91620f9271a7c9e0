"""
Page Discovery.

Finds the same-site URLs worth analyzing. Strategies are tried in order and
the first one that yields URLs wins:

1. Sitemap feeds at conventional paths (with and without "www.")
2. Anchors on the rendered homepage
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from firm_research.constants import MAX_SUB_FEEDS
from firm_research.discovery.urls import is_same_site, site_root, strip_fragment
from firm_research.exceptions import SiteUnreachableError
from firm_research.sources.base import LookupFailure, PageRenderer, RenderedPage

logger = logging.getLogger(__name__)

SITEMAP_PATHS = (
    "sitemap_index.xml",
    "sitemap.xml",
    "page-sitemap.xml",
    "wp-sitemap.xml",
)

FeedFetcher = Callable[[str], str | None]


@dataclass
class FeedParse:
    """Contents of one sitemap feed."""

    urls: list[str] = field(default_factory=list)
    sub_feeds: list[str] = field(default_factory=list)

    @property
    def is_index(self) -> bool:
        return bool(self.sub_feeds)


@dataclass
class DiscoveryResult:
    """URLs found on the site and which strategy found them."""

    urls: list[str]
    source: str
    warnings: list[str] = field(default_factory=list)


def sitemap_candidates(base_url: str) -> list[str]:
    """Conventional feed URLs for the host, then for its www/non-www twin."""
    parts = urlsplit(base_url)
    scheme = parts.scheme or "https"
    host = (parts.hostname or "").lower()
    twin = host[4:] if host.startswith("www.") else f"www.{host}"

    candidates: list[str] = []
    for name in (host, twin):
        for path in SITEMAP_PATHS:
            url = f"{scheme}://{name}/{path}"
            if url not in candidates:
                candidates.append(url)
    return candidates


def parse_feed(xml: str | None) -> FeedParse | None:
    """
    Parse a sitemap document.

    Returns None unless the document is a <urlset> or <sitemapindex>.
    """
    if not xml or "<" not in xml:
        return None
    try:
        soup = BeautifulSoup(xml, "xml")
    except Exception as e:
        logger.debug(f"Unparseable sitemap: {e}")
        return None

    index = soup.find("sitemapindex")
    if index is not None:
        return FeedParse(sub_feeds=_locs(index))

    urlset = soup.find("urlset")
    if urlset is not None:
        return FeedParse(urls=_locs(urlset))

    return None


def _locs(root) -> list[str]:
    return [loc.get_text(strip=True) for loc in root.find_all("loc") if loc.get_text(strip=True)]


def _same_site_unique(urls: list[str], base_url: str) -> list[str]:
    seen: set[str] = set()
    kept = []
    for url in urls:
        url = strip_fragment(url.strip())
        if not url or not is_same_site(url, base_url):
            continue
        key = url.rstrip("/").lower()
        if key in seen:
            continue
        seen.add(key)
        kept.append(url)
    return kept


class DiscoveryStrategy(ABC):
    """One way of listing a site's pages."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def discover(self, base_url: str) -> list[str] | None:
        """Return raw URLs, or None if this strategy could not run."""
        ...


class SitemapStrategy(DiscoveryStrategy):
    """Reads the first conventional sitemap feed that parses."""

    def __init__(self, fetch_feed: FeedFetcher, max_sub_feeds: int = MAX_SUB_FEEDS):
        self.fetch_feed = fetch_feed
        self.max_sub_feeds = max_sub_feeds

    @property
    def name(self) -> str:
        return "sitemap"

    def discover(self, base_url: str) -> list[str] | None:
        for feed_url in sitemap_candidates(base_url):
            feed = parse_feed(self.fetch_feed(feed_url))
            if feed is None:
                continue
            logger.debug(f"Sitemap found at {feed_url}")
            if not feed.is_index:
                return feed.urls
            return self._expand(feed)
        return None

    def _expand(self, index: FeedParse) -> list[str]:
        urls: list[str] = []
        for sub_url in index.sub_feeds[: self.max_sub_feeds]:
            sub_feed = parse_feed(self.fetch_feed(sub_url))
            if sub_feed is not None:
                urls.extend(sub_feed.urls)
        return urls


class HomepageLinksStrategy(DiscoveryStrategy):
    """Collects anchors from the rendered homepage."""

    def __init__(self, renderer: PageRenderer | None, homepage: RenderedPage | None = None):
        self.renderer = renderer
        self.homepage = homepage

    @property
    def name(self) -> str:
        return "homepage"

    def discover(self, base_url: str) -> list[str] | None:
        page = self.homepage
        if page is None:
            if self.renderer is None:
                return None
            rendered = self.renderer.render(base_url)
            if isinstance(rendered, LookupFailure):
                logger.debug(f"Homepage fallback failed: {rendered}")
                return None
            page = rendered
        return page.links()


class PageDiscovery:
    """Runs discovery strategies first-success-wins."""

    def __init__(
        self,
        fetch_feed: FeedFetcher,
        renderer: PageRenderer | None = None,
        max_sub_feeds: int = MAX_SUB_FEEDS,
    ):
        self.fetch_feed = fetch_feed
        self.renderer = renderer
        self.max_sub_feeds = max_sub_feeds

    def strategies(self, homepage: RenderedPage | None = None) -> list[DiscoveryStrategy]:
        return [
            SitemapStrategy(self.fetch_feed, self.max_sub_feeds),
            HomepageLinksStrategy(self.renderer, homepage),
        ]

    def discover(self, base_url: str, homepage: RenderedPage | None = None) -> DiscoveryResult:
        """
        List the site's pages.

        Args:
            base_url: Site URL (only its scheme and host are used)
            homepage: Already-rendered homepage to reuse for the link fallback

        Raises:
            SiteUnreachableError: no sitemap parsed and the homepage could not load
        """
        root = site_root(base_url)
        any_ran = False
        for strategy in self.strategies(homepage):
            raw = strategy.discover(root)
            if raw is None:
                continue
            any_ran = True
            urls = _same_site_unique(raw, root)
            if urls:
                logger.info(f"Discovered {len(urls)} pages via {strategy.name}")
                return DiscoveryResult(urls=urls, source=strategy.name)

        if not any_ran:
            raise SiteUnreachableError(root, "no sitemap and homepage could not be loaded")

        return DiscoveryResult(
            urls=[],
            source="none",
            warnings=["No pages discovered (no sitemap and no same-site links on homepage)"],
        )

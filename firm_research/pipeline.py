"""
Research pipeline.

Turns a firm website into a confidence-scored ResearchRecord:

    homepage -> firm name -> page discovery -> categorization
      -> per-page fact extraction -> location resolution
      -> business listing resolution -> confidence aggregation

Every stage tolerates the previous stage's partial failure. The only fatal
outcome is a homepage that cannot be loaded at all (SiteUnreachableError),
in which case no record is produced.

Usage:
    from firm_research import ResearchHints, research_firm

    record = research_firm("https://roth-jackson.com", ResearchHints(city="McLean", region="VA"))
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from functools import partial

import requests

from firm_research.cache import AppCache
from firm_research.config import Settings, get_settings
from firm_research.discovery.categorizer import PageRole, categorize_pages
from firm_research.discovery.pages import PageDiscovery
from firm_research.discovery.urls import normalize_website
from firm_research.entity_resolution.resolver import EntityResolver
from firm_research.exceptions import SiteUnreachableError
from firm_research.extraction.engine import FactExtractionEngine
from firm_research.extraction.firm_name import resolve_firm_name
from firm_research.extraction.locations import (
    extract_location_candidates,
    extract_structured_locations,
    merge_candidates,
)
from firm_research.location.resolver import LocationResolver
from firm_research.models import Location, ResearchHints, ResearchRecord
from firm_research.quality import aggregate
from firm_research.sources.base import (
    Geocoder,
    LookupFailure,
    PageRenderer,
    PlaceSearch,
    RenderedPage,
)
from firm_research.sources.browser import BrowserSession
from firm_research.sources.geocoding import OpenCageGeocoder
from firm_research.sources.places import GooglePlacesClient
from firm_research.sources.sitemap import fetch_feed
from firm_research.sources.text_extraction import TextExtractionClient

logger = logging.getLogger(__name__)

__all__ = ["ResearchPipeline", "SiteUnreachableError", "research_firm"]

# Pages visited after the homepage, in extraction order
ANALYZED_ROLES = (PageRole.SERVICES, PageRole.ABOUT, PageRole.TEAM, PageRole.CONTACT)
LOCATION_ROLES = (PageRole.ABOUT, PageRole.CONTACT)


class ResearchPipeline:
    """
    Runs one research pass per website.

    All external capabilities are passed in, so the pipeline itself holds
    no global state and can be driven entirely by fakes in tests.
    """

    def __init__(
        self,
        renderer: PageRenderer,
        places: PlaceSearch,
        geocoder: Geocoder,
        session: requests.Session,
        settings: Settings | None = None,
        text_extractor: TextExtractionClient | None = None,
    ):
        """
        Args:
            renderer: Page renderer (one browser session for the whole run)
            places: Place-search adapter
            geocoder: Geocoding adapter
            session: HTTP session used for sitemap feeds
            settings: Settings (default: loaded from environment)
            text_extractor: Optional text-extraction client, used as a last
                resort location source
        """
        self.settings = settings or get_settings()
        self.renderer = renderer
        self.text_extractor = text_extractor
        self.discovery = PageDiscovery(
            partial(
                fetch_feed,
                session,
                timeout=self.settings.sitemap_timeout,
                user_agent=self.settings.user_agent,
            ),
            renderer=renderer,
        )
        self.engine = FactExtractionEngine()
        self.location_resolver = LocationResolver(
            geocoder, min_confidence=self.settings.geocode_min_confidence
        )
        self.entity_resolver = EntityResolver(
            places, min_score=self.settings.self_listing_min_score
        )

    def run(self, website: str, hints: ResearchHints | None = None) -> ResearchRecord:
        """
        Research one website.

        Raises:
            ValueError: website is empty
            SiteUnreachableError: the homepage could not be loaded
        """
        hints = hints or ResearchHints()
        url = normalize_website(website)
        logger.info(f"Researching {url}")

        homepage = self.renderer.render(url)
        if isinstance(homepage, LookupFailure):
            raise SiteUnreachableError(url, homepage.reason)

        record = ResearchRecord(website=homepage.final_url or url, contact_name=hints.contact_name)
        quality = record.data_quality
        record.pages["homepage"] = record.website

        firm_name = resolve_firm_name(
            homepage.html, record.website, hint=hints.organization_name, title=homepage.title
        )
        record.subject_name = firm_name.name
        quality.set_confidence("firmName", firm_name.confidence)
        logger.info(f"Firm name: {firm_name.name} (from {firm_name.source})")

        rendered = self._analyze_pages(record, homepage)
        candidates = self._location_candidates(homepage, rendered)

        hint = hints.location_hint()
        if hint is None and not candidates and self.text_extractor is not None:
            extracted = self._extract_location_text(homepage, rendered)
            if extracted is not None:
                candidates.append(extracted)

        resolution = self.location_resolver.resolve(hint, candidates)
        record.location = resolution.location
        record.all_candidates = resolution.all_candidates
        for warning in resolution.warnings:
            quality.add_warning(warning)
        for name in resolution.missing_fields:
            quality.add_missing(name)

        self._resolve_listings(record)
        aggregate(record)
        return record

    def _analyze_pages(
        self, record: ResearchRecord, homepage: RenderedPage
    ) -> dict[PageRole, RenderedPage]:
        """Discover, categorize and extract; returns the pages that rendered."""
        quality = record.data_quality
        discovery = self.discovery.discover(record.website, homepage=homepage)
        for warning in discovery.warnings:
            quality.add_warning(warning)

        categorized = categorize_pages(discovery.urls)
        for warning in categorized.missing_warnings():
            quality.add_warning(warning)
        for role, page_url in categorized.pages.items():
            record.pages[role.value] = page_url

        self.engine.apply(record, None, homepage.text)

        rendered: dict[PageRole, RenderedPage] = {}
        for role in ANALYZED_ROLES:
            page_url = categorized.get(role)
            if page_url is None:
                if role is PageRole.ABOUT:
                    quality.add_warning("No About page found")
                elif role is PageRole.TEAM:
                    quality.add_warning("No Team page found")
                continue

            page = self._render(page_url, homepage)
            if isinstance(page, LookupFailure):
                logger.warning(f"Failed to analyze {role.value} page {page_url}: {page.reason}")
                quality.add_warning(f"Failed to analyze {role.value} page")
                continue
            rendered[role] = page
            self.engine.apply(record, role, page.text)

        self.engine.finalize(record)
        return rendered

    def _render(self, url: str, homepage: RenderedPage) -> RenderedPage | LookupFailure:
        if url.rstrip("/") in (homepage.final_url.rstrip("/"), homepage.requested_url.rstrip("/")):
            return homepage
        return self.renderer.render(url)

    @staticmethod
    def _location_candidates(
        homepage: RenderedPage, rendered: dict[PageRole, RenderedPage]
    ) -> list[Location]:
        pages = [homepage, *(rendered[role] for role in LOCATION_ROLES if role in rendered)]
        structured = [extract_structured_locations(page.html) for page in pages]
        textual = [extract_location_candidates(page.text) for page in pages]
        return merge_candidates(*structured, *textual)

    def _extract_location_text(
        self, homepage: RenderedPage, rendered: dict[PageRole, RenderedPage]
    ) -> Location | None:
        page = rendered.get(PageRole.CONTACT) or homepage
        location = self.text_extractor.extract_location(page.text)
        if location is not None:
            logger.info(f"Text extraction suggested {location.label()}")
        return location

    def _resolve_listings(self, record: ResearchRecord) -> None:
        quality = record.data_quality

        listing = self.entity_resolver.find_self_listing(record.subject_name, record.location)
        record.self_listing = listing.listing
        for warning in listing.warnings:
            quality.add_warning(warning)

        competitors = self.entity_resolver.find_competitors(
            record.subject_name, record.location, record.practice_areas
        )
        for competitor in competitors.competitors:
            record.add_competitor(competitor)
        for warning in competitors.warnings:
            quality.add_warning(warning)


def research_firm(
    website: str,
    hints: ResearchHints | None = None,
    settings: Settings | None = None,
    cache: AppCache | None = None,
) -> ResearchRecord:
    """
    Research one website with real adapters.

    The browser session and HTTP session are opened here and closed on every
    exit path, including SiteUnreachableError.
    """
    settings = settings or get_settings()
    with ExitStack() as stack:
        session = stack.enter_context(requests.Session())
        session.headers["User-Agent"] = settings.user_agent
        browser = stack.enter_context(
            BrowserSession(
                timeout=settings.page_load_timeout,
                user_agent=settings.user_agent,
                headless=settings.headless,
            )
        )
        pipeline = ResearchPipeline(
            renderer=browser,
            places=GooglePlacesClient(
                session, settings.google_places_api_key, settings.places_timeout, cache
            ),
            geocoder=OpenCageGeocoder(
                session, settings.opencage_api_key, settings.geocode_timeout, cache
            ),
            session=session,
            settings=settings,
            text_extractor=TextExtractionClient.from_settings(settings),
        )
        return pipeline.run(website, hints)

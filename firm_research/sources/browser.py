"""
Page rendering through a single Playwright browser session.

One browser and one context are held for the whole research run and reused
for every page visit (homepage, about, team, contact). Each visit opens a
fresh tab which is closed afterwards; the session itself is closed on every
exit path via the context manager.
"""

from __future__ import annotations

import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeout
from playwright.sync_api import sync_playwright

from firm_research.constants import PAGE_LOAD_TIMEOUT, USER_AGENT
from firm_research.sources.base import LookupFailure, PageRenderer, RenderedPage

logger = logging.getLogger(__name__)


class BrowserSession(PageRenderer):
    """
    Playwright-backed page renderer.

    Usage:
        with BrowserSession(timeout=30) as browser:
            page = browser.render("https://example-law.com")
    """

    source_name = "browser"

    def __init__(
        self,
        timeout: float = PAGE_LOAD_TIMEOUT,
        user_agent: str = USER_AGENT,
        headless: bool = True,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.headless = headless
        self._playwright = None
        self._browser = None
        self._context = None

    @property
    def is_open(self) -> bool:
        return self._context is not None

    def start(self) -> BrowserSession:
        """Launch the browser; calling it on an open session is a no-op."""
        if self.is_open:
            return self
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(headless=self.headless)
            self._context = self._browser.new_context(
                user_agent=self.user_agent, ignore_https_errors=True
            )
        except Exception:
            self.close()
            raise
        logger.debug("Browser session started")
        return self

    def render(self, url: str) -> RenderedPage | LookupFailure:
        """
        Load a URL and wait for the network to go idle.

        Certificate errors are tolerated; a non-2xx answer is a failure.
        """
        if not self.is_open:
            return LookupFailure(self.source_name, "browser session is not open")

        page = None
        try:
            page = self._context.new_page()
            response = page.goto(url, wait_until="networkidle", timeout=self.timeout * 1000)
            if response is not None and not response.ok:
                logger.debug(f"Render of {url} answered HTTP {response.status}")
                return LookupFailure(self.source_name, f"HTTP {response.status} loading {url}")
            return RenderedPage(
                requested_url=url,
                final_url=page.url,
                html=page.content(),
                text=page.inner_text("body"),
                title=page.title(),
            )
        except PlaywrightTimeout as e:
            logger.debug(f"Render timed out for {url}: {e}")
            return LookupFailure(self.source_name, f"timed out loading {url}", timed_out=True)
        except PlaywrightError as e:
            logger.debug(f"Render failed for {url}: {e}")
            return LookupFailure(self.source_name, str(e).splitlines()[0] if str(e) else url)
        finally:
            if page is not None:
                try:
                    page.close()
                except PlaywrightError as e:
                    logger.debug(f"Could not close tab for {url}: {e}")

    def close(self) -> None:
        """Release the context, browser and driver. Safe to call twice."""
        for resource in (self._context, self._browser):
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError as e:
                logger.debug(f"Error while closing browser resource: {e}")
        if self._playwright is not None:
            self._playwright.stop()
        self._context = None
        self._browser = None
        self._playwright = None
        logger.debug("Browser session closed")

    def __enter__(self) -> BrowserSession:
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

"""
Unit tests for the Playwright browser session (Playwright itself is mocked).
"""

from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from firm_research.sources.base import LookupFailure
from firm_research.sources.browser import BrowserSession


@pytest.fixture
def playwright():
    with patch("firm_research.sources.browser.sync_playwright") as mock_sync:
        driver = mock_sync.return_value.start.return_value
        context = driver.chromium.launch.return_value.new_context.return_value
        page = context.new_page.return_value
        page.goto.return_value.ok = True
        page.goto.return_value.status = 200
        page.url = "https://www.smithlaw.com/"
        page.content.return_value = "<html><body>Smith Law</body></html>"
        page.inner_text.return_value = "Smith Law"
        page.title.return_value = "Smith Law | Home"
        yield MagicMock(driver=driver, context=context, page=page)


class TestBrowserSession:
    def test_render(self, playwright):
        with BrowserSession(timeout=10) as browser:
            result = browser.render("https://smithlaw.com")

        assert result.final_url == "https://www.smithlaw.com/"
        assert result.text == "Smith Law"
        assert result.title == "Smith Law | Home"
        playwright.page.goto.assert_called_once_with(
            "https://smithlaw.com", wait_until="networkidle", timeout=10000
        )
        playwright.page.close.assert_called_once()

    def test_certificate_errors_ignored(self, playwright):
        with BrowserSession(user_agent="test-agent"):
            pass

        playwright.driver.chromium.launch.return_value.new_context.assert_called_once_with(
            user_agent="test-agent", ignore_https_errors=True
        )

    def test_error_status_is_a_failure(self, playwright):
        playwright.page.goto.return_value.ok = False
        playwright.page.goto.return_value.status = 404

        with BrowserSession() as browser:
            result = browser.render("https://smithlaw.com/missing")

        assert isinstance(result, LookupFailure)
        assert result.reason == "HTTP 404 loading https://smithlaw.com/missing"
        assert not result.timed_out
        playwright.page.content.assert_not_called()
        playwright.page.close.assert_called_once()

    def test_no_response_still_renders(self, playwright):
        playwright.page.goto.return_value = None

        with BrowserSession() as browser:
            result = browser.render("https://smithlaw.com/#team")

        assert result.text == "Smith Law"

    def test_one_context_for_many_pages(self, playwright):
        with BrowserSession() as browser:
            browser.render("https://smithlaw.com")
            browser.render("https://smithlaw.com/about")

        playwright.driver.chromium.launch.assert_called_once()
        assert playwright.context.new_page.call_count == 2

    def test_timeout_is_a_failure(self, playwright):
        playwright.page.goto.side_effect = PlaywrightTimeout("Timeout 30000ms exceeded")

        with BrowserSession() as browser:
            result = browser.render("https://slow.example")

        assert isinstance(result, LookupFailure)
        assert result.timed_out
        playwright.page.close.assert_called_once()

    def test_navigation_error_is_a_failure(self, playwright):
        playwright.page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED\ncall log")

        with BrowserSession() as browser:
            result = browser.render("https://no-such-firm.example")

        assert result.reason == "net::ERR_NAME_NOT_RESOLVED"

    def test_closed_on_exception(self, playwright):
        with pytest.raises(RuntimeError):
            with BrowserSession() as browser:
                raise RuntimeError("boom")

        playwright.context.close.assert_called_once()
        playwright.driver.stop.assert_called_once()
        assert not browser.is_open

    def test_render_before_start(self):
        result = BrowserSession().render("https://smithlaw.com")
        assert isinstance(result, LookupFailure)

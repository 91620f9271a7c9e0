"""
Unit tests for firm_research.discovery.urls.
"""

import pytest

from firm_research.discovery.urls import (
    bare_host,
    domain_label,
    is_same_site,
    normalize_website,
    registrable_domain,
    site_root,
)


class TestNormalizeWebsite:
    def test_adds_scheme(self):
        assert normalize_website("smithlaw.com") == "https://smithlaw.com"

    def test_keeps_http(self):
        assert normalize_website(" http://www.smithlaw.com/ ") == "http://www.smithlaw.com/"

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            normalize_website("  ")


class TestHosts:
    def test_site_root(self):
        assert site_root("https://www.smithlaw.com/about?x=1") == "https://www.smithlaw.com"

    def test_bare_host(self):
        assert bare_host("https://WWW.SmithLaw.com:443/about") == "smithlaw.com"

    def test_same_site_ignores_www(self):
        assert is_same_site("https://smithlaw.com/team", "https://www.smithlaw.com")
        assert not is_same_site("https://facebook.com/smithlaw", "https://smithlaw.com")
        assert not is_same_site("mailto:info@smithlaw.com", "https://smithlaw.com")

    def test_registrable_domain(self):
        assert registrable_domain("https://www.smithlaw.com/about") == "smithlaw.com"
        assert registrable_domain("https://offices.smith-law.co.uk") == "smith-law.co.uk"

    def test_domain_label(self):
        assert domain_label("https://www.roth-jackson.com") == "roth-jackson"

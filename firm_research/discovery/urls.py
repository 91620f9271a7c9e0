"""
URL and domain helpers for a firm's website.

Uses tldextract with the bundled Public Suffix List snapshot (no network
fetch) so that "smith-law.co.uk" and "www.smith-law.co.uk" resolve to the
same registrable domain.
"""

import re
from urllib.parse import urldefrag, urlsplit

import tldextract

_extract = tldextract.TLDExtract(suffix_list_urls=())


def normalize_website(url: str) -> str:
    """
    Normalize user input to an absolute URL.

    Examples:
        "smithlaw.com" -> "https://smithlaw.com"
        " http://www.smithlaw.com/ " -> "http://www.smithlaw.com/"
    """
    url = (url or "").strip()
    if not url:
        raise ValueError("website URL is required")
    if not re.match(r"^https?://", url, re.IGNORECASE):
        url = f"https://{url.lstrip('/')}"
    return url


def site_root(url: str) -> str:
    """Return scheme://host for a URL."""
    parts = urlsplit(url)
    return f"{parts.scheme or 'https'}://{parts.netloc}"


def bare_host(url: str) -> str:
    """Lower-cased host without port or leading "www."."""
    host = (urlsplit(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def is_same_site(url: str, base_url: str) -> bool:
    """True when both URLs are on the same host, ignoring a "www." prefix."""
    if urlsplit(url).scheme not in ("http", "https"):
        return False
    return bool(bare_host(url)) and bare_host(url) == bare_host(base_url)


def strip_fragment(url: str) -> str:
    return urldefrag(url)[0]


def registrable_domain(url: str) -> str | None:
    """
    Registrable domain of a URL.

    Examples:
        "https://www.smithlaw.com/about" -> "smithlaw.com"
        "https://offices.smith-law.co.uk" -> "smith-law.co.uk"
    """
    ext = _extract(bare_host(url) or url)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    return None


def domain_label(url: str) -> str:
    """The registrable name without its suffix ("smith-law" for smith-law.co.uk)."""
    ext = _extract(bare_host(url) or url)
    return ext.domain or bare_host(url).split(".")[0]

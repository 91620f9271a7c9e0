"""
Sitemap feed fetching.

Feeds are plain XML documents, so they are fetched over HTTP rather than
through the browser session. Every failure is logged and returned as None;
discovery simply moves on to the next candidate path.
"""

import logging

import requests

from firm_research.constants import SITEMAP_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


def fetch_feed(
    session: requests.Session,
    url: str,
    timeout: float = SITEMAP_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> str | None:
    """
    Fetch one sitemap feed.

    Args:
        session: HTTP session for requests
        url: Feed URL
        timeout: Request timeout in seconds

    Returns:
        Response body, or None on any error or non-200 status
    """
    try:
        response = session.get(
            url,
            headers={"User-Agent": user_agent, "Accept": "application/xml,text/xml,*/*"},
            timeout=timeout,
        )
        if response.status_code == 200:
            return response.text
        logger.debug(f"Sitemap {url} returned HTTP {response.status_code}")
    except requests.RequestException as e:
        logger.debug(f"Sitemap fetch failed for {url}: {e}")
    return None

"""
Constants for firm_research package.

Centralizes magic numbers and configuration defaults.
"""

# Timeouts (seconds)
PAGE_LOAD_TIMEOUT = 30.0  # Full render of one page (networkidle)
SITEMAP_TIMEOUT = 5.0  # Single sitemap feed fetch
PLACES_TIMEOUT = 10.0  # Place-search request
GEOCODE_TIMEOUT = 10.0  # Geocoding request
TEXT_EXTRACTION_TIMEOUT = 30.0  # Text-extraction (LLM) request

# API rate limits (requests per second)
PLACES_RATE_LIMIT = 5.0  # Google Places: well under the per-second quota
GEOCODE_RATE_LIMIT = 1.0  # OpenCage free tier: 1 req/sec

# Cache TTL (Time To Live) in days
CACHE_TTL_PLACES = 7  # Listings and review counts change often
CACHE_TTL_GEOCODE = 90  # City/region normalization is stable

# Page discovery
MAX_SUB_FEEDS = 5  # Sub-feeds expanded from a sitemap index

# Fact extraction
MAX_ATTORNEYS = 20  # Roster cap
HEADING_TITLE_WINDOW = 200  # characters after a heading name searched for a title
MAX_AWARD_CREDENTIALS = 3  # Award lines copied into credentials
MAX_BAR_CREDENTIALS = 2  # Bar admission lines copied into credentials
MAX_LOCATION_CANDIDATES = 10
MAX_SITE_NAME_LENGTH = 80  # og:site_name longer than this is a tagline, not a name

# Location validation
GEOCODE_MIN_CONFIDENCE = 5  # OpenCage confidence (1-10) needed to accept a result

# Entity resolution
SELF_LISTING_TOP_N = 5  # Place results considered for the firm's own listing
SELF_LISTING_MIN_SCORE = 0.5  # Minimum containment score for a non-exact match
MAX_COMPETITORS = 12
COMPETITOR_ROLE_NOUN = "lawyer"  # Appended to the practice area in competitor queries

# Confidence values (0-10)
FIRM_NAME_CONFIDENCE_HINT = 10
FIRM_NAME_CONFIDENCE_SITE_NAME = 9
FIRM_NAME_CONFIDENCE_TITLE = 7
FIRM_NAME_CONFIDENCE_DOMAIN = 5
DEFAULT_FIRM_NAME = "Law Firm"

# Data quality
REPORT_READY_THRESHOLD = 5  # Minimum overall confidence for downstream reporting

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

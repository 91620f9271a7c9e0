"""
Firm Research - confidence-scored research records for law firm websites.

This package provides utilities for:
- Discovering and categorizing the pages of a firm's website
- Extracting practice areas, attorneys, credentials and location signals
- Validating locations and finding business listings and competitors
- Aggregating per-field confidence into a data quality verdict
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

from firm_research.models import (
    DataQuality,
    Location,
    LocationSource,
    ResearchHints,
    ResearchRecord,
)
from firm_research.pipeline import ResearchPipeline, SiteUnreachableError, research_firm

__all__ = [
    "__version__",
    # Models
    "DataQuality",
    "Location",
    "LocationSource",
    "ResearchHints",
    "ResearchRecord",
    # Pipeline
    "ResearchPipeline",
    "SiteUnreachableError",
    "research_firm",
]

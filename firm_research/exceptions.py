"""
Pipeline-level errors.

Only failures that abort a whole research run are exceptions; every
recoverable problem is recorded as a warning on the research record.
"""


class SiteUnreachableError(Exception):
    """The target website could not be loaded at all."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not load {url}: {reason}")

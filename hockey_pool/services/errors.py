"""
Exceptions raised by the injury scraping services.
"""

from typing import Optional


class InjuryServiceError(Exception):
    """Base class for injury service failures."""


class FetchError(InjuryServiceError):
    """The injury page could not be retrieved or the body was unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FetchTimeoutError(FetchError, TimeoutError):
    """The injury page did not respond within the configured timeout."""


class ParseError(InjuryServiceError):
    """Reserved for document-level parse failures; row problems are skipped, not raised."""

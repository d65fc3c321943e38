"""Exception hierarchy shared across WordFinder."""

from __future__ import annotations


class WordFinderError(Exception):
    """Base class for all WordFinder errors."""


class ConfigurationError(WordFinderError):
    """Settings are malformed. Raised at startup, never per request."""


class CorpusLoadError(WordFinderError):
    """The word list could not be read or decoded."""


class TransportError(WordFinderError):
    """A suggestion request failed on the wire or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

"""
Lookup service — thin orchestration around the corpus store and matcher.

Shapes matches into a result envelope and turns every fault below this
boundary into an empty envelope with an error attached, so callers never
see an exception from a lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from wordfinder.config.settings import AutocompleteSettings, Settings, get_settings
from wordfinder.corpus.store import CorpusStore
from wordfinder.matching.engine import find_prefix_matches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultEnvelope:
    """Matches for one query plus the metadata the client renders with."""

    results: list[str] = field(default_factory=list)
    truncated: bool = False
    min_query_length: int = 0

    @classmethod
    def empty(cls, min_query_length: int) -> "ResultEnvelope":
        return cls(results=[], truncated=False, min_query_length=min_query_length)


@dataclass(frozen=True)
class LookupOutcome:
    """An envelope, plus an error message when the lookup faulted."""

    envelope: ResultEnvelope
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LookupService:
    """Answer prefix queries against a lazily loaded corpus."""

    def __init__(
        self,
        store: Optional[CorpusStore] = None,
        ac_settings: Optional[AutocompleteSettings] = None,
    ) -> None:
        if store is None or ac_settings is None:
            settings: Settings = get_settings()
            ac_settings = ac_settings or settings.autocomplete
            store = store or CorpusStore(settings.word_list_path)
        self._store = store
        self._ac = ac_settings

    @property
    def store(self) -> CorpusStore:
        return self._store

    @property
    def min_query_length(self) -> int:
        return self._ac.min_query_length

    @property
    def max_results(self) -> int:
        return self._ac.max_results

    def lookup(self, query: str, limit: Optional[int] = None) -> LookupOutcome:
        """
        Return up to *limit* corpus words starting with *query*.

        *limit* defaults to ``max_results`` and is clamped to it. Queries
        shorter than ``min_query_length`` after trimming return an empty
        envelope without touching the corpus.
        """
        min_len = self._ac.min_query_length
        query = query.strip()
        if len(query) < min_len:
            return LookupOutcome(ResultEnvelope.empty(min_len))

        limit = self._ac.max_results if limit is None else min(limit, self._ac.max_results)

        try:
            words = self._store.load()
            matches = find_prefix_matches(words, query, limit)
        except Exception as exc:
            logger.exception("Lookup failed for query %r", query)
            return LookupOutcome(ResultEnvelope.empty(min_len), error=str(exc) or type(exc).__name__)

        return LookupOutcome(
            ResultEnvelope(
                results=matches,
                truncated=limit > 0 and len(matches) == limit,
                min_query_length=min_len,
            )
        )

    def warm(self) -> bool:
        """
        Load the corpus now instead of on the first lookup.

        Returns False if the load failed; the store stays unloaded and the
        next lookup retries.
        """
        try:
            self._store.load()
        except Exception:
            logger.exception("Corpus preload failed; will retry on first lookup")
            return False
        return True

"""
Binary-search prefix matcher.

Given a word list sorted ascending by ``str.lower``, every word that starts
with a prefix (case-insensitively) sits in one contiguous run beginning at
the prefix's lower bound. Locating the run is O(log n); collecting it is
O(k) for k returned words.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Sequence


def lower_bound(words: Sequence[str], prefix: str) -> int:
    """First index ``i`` such that ``words[i].lower() >= prefix``."""
    return bisect_left(words, prefix, key=str.lower)


def find_prefix_matches(words: Sequence[str], raw_query: str, limit: int) -> list[str]:
    """
    Return up to *limit* words starting with *raw_query*, ignoring case.

    Words keep their stored casing and come back in corpus order, so an
    exact match precedes its extensions. *words* must already be sorted by
    ``str.lower``; this is not checked.
    """
    query = raw_query.lower()
    if not query or limit <= 0:
        return []

    matches: list[str] = []
    for i in range(lower_bound(words, query), len(words)):
        candidate = words[i]
        if not candidate.lower().startswith(query):
            break
        matches.append(candidate)
        if len(matches) >= limit:
            break
    return matches

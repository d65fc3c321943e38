"""Prefix matching over a case-insensitively sorted word list."""

from wordfinder.matching.engine import find_prefix_matches, lower_bound

__all__ = ["find_prefix_matches", "lower_bound"]

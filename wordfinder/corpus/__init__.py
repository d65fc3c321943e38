"""Corpus package — word list parsing and the single-flight corpus store."""

from wordfinder.corpus.parser import is_sorted_case_insensitive, parse_word_list
from wordfinder.corpus.store import CorpusStore, LoadState

__all__ = [
    "CorpusStore",
    "LoadState",
    "is_sorted_case_insensitive",
    "parse_word_list",
]

"""Word list parsing and the sortedness check applied once per load."""

from __future__ import annotations

import re
from typing import Sequence

_LINE_BREAK = re.compile(r"\r?\n")


def parse_word_list(raw: str) -> list[str]:
    """
    Split raw file text into words.

    One word per line; surrounding whitespace is stripped and blank lines
    are dropped. Case, duplicates and order are left untouched.
    """
    words = []
    for line in _LINE_BREAK.split(raw):
        word = line.strip()
        if word:
            words.append(word)
    return words


def first_unsorted_index(words: Sequence[str]) -> int:
    """
    Return the first index whose word sorts before its predecessor
    (case-insensitively), or -1 if the sequence is in order.
    """
    previous = None
    for i, word in enumerate(words):
        lowered = word.lower()
        if previous is not None and lowered < previous:
            return i
        previous = lowered
    return -1


def is_sorted_case_insensitive(words: Sequence[str]) -> bool:
    return first_unsorted_index(words) == -1

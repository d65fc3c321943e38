"""
Shared test fixtures for the WordFinder test suite.

Word lists are written to pytest's tmp_path so every test gets its own
file, and settings are built against that directory instead of the
project root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

from wordfinder.config.settings import AutocompleteSettings, CoordinatorSettings, Settings


SAMPLE_WORDS = [
    "aardvark",
    "app",
    "Apple",
    "application",
    "apply",
    "banana",
    "band",
    "Bandana",
    "cat",
    "catalog",
    "Category",
    "dog",
    "doge",
    "dogma",
    "door",
]


@pytest.fixture
def sample_words() -> list[str]:
    """A small word list already sorted case-insensitively."""
    return list(SAMPLE_WORDS)


@pytest.fixture
def write_word_list(tmp_path: Path) -> Callable[..., Path]:
    """Factory that writes lines to a word list file and returns its path."""

    def _write(lines: Sequence[str], name: str = "words.txt", newline: str = "\n") -> Path:
        path = tmp_path / name
        path.write_text(newline.join(lines) + newline, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def word_list_path(write_word_list, sample_words: list[str]) -> Path:
    return write_word_list(sample_words)


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    """Build Settings rooted at tmp_path. Keyword args override AutocompleteSettings."""

    def _make(word_list: Path | None = None, debounce_ms: int = 0, **ac_overrides) -> Settings:
        ac = AutocompleteSettings(
            word_list_file=str(word_list or tmp_path / "words.txt"),
            **ac_overrides,
        )
        settings = Settings(
            project_root=tmp_path,
            autocomplete=ac,
            coordinator=CoordinatorSettings(debounce_ms=debounce_ms),
        )
        settings.ensure_dirs()
        return settings

    return _make

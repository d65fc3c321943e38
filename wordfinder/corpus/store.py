"""
Corpus store — loads the word list once and serves it to every lookup.

The store owns a single state cell guarded by a lock::

    UNLOADED --load()--> LOADING(shared future) --ok--> LOADED(words)
                                                 \\-err--> FAILED(error)
    FAILED --load()--> LOADING (retry from scratch)

Concurrent callers that arrive while a load is in progress wait on the
same future, so exactly one physical read happens per successful load.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from wordfinder.corpus.parser import first_unsorted_index, parse_word_list
from wordfinder.errors import CorpusLoadError

logger = logging.getLogger(__name__)

Reader = Callable[[], str]


class LoadState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def file_reader(path: Path) -> Reader:
    """Build a reader that returns the UTF-8 text of *path*."""

    def read() -> str:
        return path.read_text(encoding="utf-8")

    return read


class CorpusStore:
    """Lazily loaded, immutable, case-insensitively sorted word list."""

    def __init__(
        self,
        path: Optional[Path] = None,
        reader: Optional[Reader] = None,
    ) -> None:
        if reader is None:
            if path is None:
                raise ValueError("CorpusStore needs a path or a reader")
            reader = file_reader(path)
        self._path = path
        self._reader = reader
        self._lock = threading.Lock()
        self._state = LoadState.UNLOADED
        self._pending: Optional[Future] = None
        self._words: Optional[tuple[str, ...]] = None
        self._last_error: Optional[BaseException] = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is LoadState.LOADED

    @property
    def size(self) -> int:
        """Number of words, or 0 if not loaded yet."""
        words = self._words
        return len(words) if words is not None else 0

    @property
    def last_error(self) -> Optional[BaseException]:
        """The error from the most recent failed load, if the store is FAILED."""
        return self._last_error

    def load(self) -> tuple[str, ...]:
        """
        Return the word list, reading it on first use.

        Raises:
            CorpusLoadError: the read failed. Every caller waiting on that
                read gets the same error and the next call retries.
        """
        with self._lock:
            if self._state is LoadState.LOADED:
                return self._words
            if self._state is LoadState.LOADING:
                pending = self._pending
                owner = False
            else:
                pending = Future()
                self._pending = pending
                self._state = LoadState.LOADING
                owner = True

        if owner:
            self._run_load(pending)
        return pending.result()

    def _run_load(self, pending: Future) -> None:
        try:
            words = self._read()
        except Exception as exc:
            error = exc if isinstance(exc, CorpusLoadError) else CorpusLoadError(
                f"Failed to load word list{self._describe_source()}: {exc}"
            )
            if error is not exc:
                error.__cause__ = exc
            with self._lock:
                self._state = LoadState.FAILED
                self._pending = None
                self._last_error = error
            logger.error("Corpus load failed: %s", error)
            pending.set_exception(error)
            return
        except BaseException as exc:
            # Interrupts still propagate to the owner, but must not leave
            # waiters blocked on an unresolved future.
            error = CorpusLoadError(f"Word list load interrupted: {type(exc).__name__}")
            error.__cause__ = exc
            with self._lock:
                self._state = LoadState.FAILED
                self._pending = None
                self._last_error = error
            pending.set_exception(error)
            raise

        with self._lock:
            self._words = words
            self._state = LoadState.LOADED
            self._pending = None
            self._last_error = None
        pending.set_result(words)

    def _read(self) -> tuple[str, ...]:
        start = time.perf_counter()
        try:
            raw = self._reader()
        except (OSError, UnicodeDecodeError) as exc:
            raise CorpusLoadError(
                f"Cannot read word list{self._describe_source()}: {exc}"
            ) from exc

        words = parse_word_list(raw)
        bad = first_unsorted_index(words)
        if bad != -1:
            logger.warning(
                "Word list is not sorted case-insensitively (first at entry %d: %r after %r); "
                "sorting %d words",
                bad + 1, words[bad], words[bad - 1], len(words),
            )
            words.sort(key=str.lower)

        elapsed = time.perf_counter() - start
        logger.info(
            "Loaded %d words%s in %.3fs", len(words), self._describe_source(), elapsed
        )
        return tuple(words)

    def _describe_source(self) -> str:
        return f" from {self._path}" if self._path is not None else ""

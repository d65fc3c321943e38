"""Tests for the single-flight CorpusStore."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

import pytest

from wordfinder.corpus.store import CorpusStore, LoadState
from wordfinder.errors import CorpusLoadError


class CountingReader:
    """Reader that counts physical reads and can be held open by the test."""

    def __init__(self, text: str = "app\napple\n", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls = 0
        self.started = threading.Event()
        self.release = threading.Event()
        self.release.set()

    def hold(self) -> "CountingReader":
        self.release.clear()
        return self

    def __call__(self) -> str:
        self.calls += 1
        self.started.set()
        self.release.wait(timeout=5.0)
        if self.error is not None:
            raise self.error
        return self.text


def _load_in_threads(store: CorpusStore, n: int) -> tuple[list[threading.Thread], list, list[CorpusLoadError]]:
    results: list = []
    errors: list[CorpusLoadError] = []
    lock = threading.Lock()

    def worker():
        try:
            words = store.load()
        except CorpusLoadError as exc:
            with lock:
                errors.append(exc)
        else:
            with lock:
                results.append(words)

    threads = [threading.Thread(target=worker) for _ in range(n)]
    for t in threads:
        t.start()
    return threads, results, errors


class TestCorpusStoreLoad:
    def test_loads_file(self, word_list_path: Path, sample_words):
        store = CorpusStore(word_list_path)
        assert store.state is LoadState.UNLOADED
        assert store.size == 0

        words = store.load()
        assert words == tuple(sample_words)
        assert store.is_loaded
        assert store.size == len(sample_words)

    def test_second_load_uses_cache(self):
        reader = CountingReader()
        store = CorpusStore(reader=reader)
        first = store.load()
        second = store.load()
        assert first is second
        assert reader.calls == 1

    def test_requires_path_or_reader(self):
        with pytest.raises(ValueError):
            CorpusStore()

    def test_unsorted_input_is_sorted_once(self, caplog):
        reader = CountingReader("banana\nApple\napp\n")
        store = CorpusStore(reader=reader)
        with caplog.at_level(logging.WARNING, logger="wordfinder"):
            words = store.load()
        assert words == ("app", "Apple", "banana")
        assert "not sorted" in caplog.text

    def test_duplicates_are_kept(self):
        store = CorpusStore(reader=CountingReader("app\napp\napple\n"))
        assert store.load() == ("app", "app", "apple")


class TestCorpusStoreFailures:
    def test_missing_file_raises_and_stays_unloaded(self, tmp_path: Path):
        store = CorpusStore(tmp_path / "missing.txt")
        with pytest.raises(CorpusLoadError):
            store.load()
        assert store.state is LoadState.FAILED
        assert not store.is_loaded
        assert isinstance(store.last_error, CorpusLoadError)

    def test_retries_after_failure(self, tmp_path: Path):
        path = tmp_path / "later.txt"
        store = CorpusStore(path)
        with pytest.raises(CorpusLoadError):
            store.load()

        path.write_text("cat\ncatalog\n", encoding="utf-8")
        assert store.load() == ("cat", "catalog")
        assert store.state is LoadState.LOADED
        assert store.last_error is None

    def test_invalid_utf8_is_a_load_error(self, tmp_path: Path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("caf\xe9\n".encode("latin-1"))
        with pytest.raises(CorpusLoadError):
            CorpusStore(path).load()

    def test_interrupted_load_does_not_block_later_loads(self):
        calls = []

        def reader() -> str:
            calls.append(1)
            if len(calls) == 1:
                raise KeyboardInterrupt
            return "app\n"

        store = CorpusStore(reader=reader)
        with pytest.raises(KeyboardInterrupt):
            store.load()
        assert store.state is LoadState.FAILED

        results = []
        t = threading.Thread(target=lambda: results.append(store.load()))
        t.start()
        t.join(timeout=5.0)
        assert not t.is_alive()
        assert results == [("app",)]
        assert store.is_loaded

    def test_interrupted_load_fails_waiters(self):
        reader = CountingReader(error=KeyboardInterrupt()).hold()
        store = CorpusStore(reader=reader)
        owner_errors: list[BaseException] = []

        def owner():
            try:
                store.load()
            except BaseException as exc:
                owner_errors.append(exc)

        owner_thread = threading.Thread(target=owner)
        owner_thread.start()
        assert reader.started.wait(timeout=5.0)

        threads, results, errors = _load_in_threads(store, 3)
        time.sleep(0.05)
        reader.release.set()
        for t in [owner_thread, *threads]:
            t.join(timeout=5.0)

        assert all(not t.is_alive() for t in [owner_thread, *threads])
        assert len(owner_errors) == 1 and isinstance(owner_errors[0], KeyboardInterrupt)
        assert results == []
        assert len(errors) == 3
        assert reader.calls == 1

    def test_unexpected_reader_error_is_wrapped(self):
        store = CorpusStore(reader=CountingReader(error=RuntimeError("disk on fire")))
        with pytest.raises(CorpusLoadError) as excinfo:
            store.load()
        assert isinstance(excinfo.value.__cause__, RuntimeError)


class TestCorpusStoreConcurrency:
    def test_concurrent_first_loads_share_one_read(self):
        reader = CountingReader("app\napple\napplication\n").hold()
        store = CorpusStore(reader=reader)

        threads, results, errors = _load_in_threads(store, 8)
        assert reader.started.wait(timeout=5.0)
        time.sleep(0.05)
        assert store.state is LoadState.LOADING
        reader.release.set()
        for t in threads:
            t.join(timeout=5.0)

        assert reader.calls == 1
        assert errors == []
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_failure_reaches_every_waiter_then_retries(self):
        reader = CountingReader(error=OSError("unreadable")).hold()
        store = CorpusStore(reader=reader)

        threads, results, errors = _load_in_threads(store, 5)
        assert reader.started.wait(timeout=5.0)
        time.sleep(0.05)
        reader.release.set()
        for t in threads:
            t.join(timeout=5.0)

        assert results == []
        assert len(errors) == 5
        assert reader.calls == 1
        assert store.state is LoadState.FAILED

        reader.error = None
        assert store.load() == ("app", "apple")
        assert reader.calls == 2

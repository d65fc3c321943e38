"""WordFinder CLI — local lookups, corpus stats, and keystroke replay against a server."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from wordfinder.client.coordinator import CoordinatorView, QueryCoordinator
from wordfinder.client.http_client import SuggestionClient
from wordfinder.config.logging_config import setup_logging
from wordfinder.config.settings import Settings, get_settings
from wordfinder.corpus.parser import is_sorted_case_insensitive, parse_word_list
from wordfinder.corpus.store import CorpusStore
from wordfinder.errors import CorpusLoadError
from wordfinder.service.lookup import LookupService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WordFinder tools.")
    parser.add_argument("--word-list", type=Path, default=None, help="Override the word list path.")
    parser.add_argument("--log-level", default="WARNING", help="Log level name.")
    sub = parser.add_subparsers(dest="command")

    query = sub.add_parser("query", help="Look up a prefix in the local word list.")
    query.add_argument("prefix", help="Prefix to complete.")
    query.add_argument("--limit", type=int, default=None, help="Max suggestions.")

    sub.add_parser("stats", help="Report word list size and sort order.")

    suggest = sub.add_parser(
        "suggest",
        help="Type text one keystroke at a time against a running server.",
    )
    suggest.add_argument("text", help="Text to type.")
    suggest.add_argument("--base-url", default=None, help="Server URL.")

    return parser


def _cmd_query(settings: Settings, word_list: Path, prefix: str, limit: Optional[int]) -> int:
    service = LookupService(store=CorpusStore(word_list), ac_settings=settings.autocomplete)
    outcome = service.lookup(prefix, limit=limit)
    envelope = outcome.envelope
    print(json.dumps({
        "results": envelope.results,
        "meta": {"minQueryLength": envelope.min_query_length, "truncated": envelope.truncated},
    }, indent=2))
    if not outcome.ok:
        print(f"error: {outcome.error}")
        return 1
    return 0


def _cmd_stats(word_list: Path) -> int:
    try:
        raw = word_list.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusLoadError(f"Cannot read word list from {word_list}: {exc}") from exc
    words = parse_word_list(raw)
    print(json.dumps({
        "path": str(word_list),
        "words": len(words),
        "distinct": len(set(words)),
        "sorted": is_sorted_case_insensitive(words),
    }, indent=2))
    return 0


async def _replay(coordinator: QueryCoordinator, text: str) -> CoordinatorView:
    for i in range(1, len(text) + 1):
        coordinator.input(text[:i])
    await coordinator.wait()
    return coordinator.view


def _cmd_suggest(settings: Settings, text: str, base_url: Optional[str]) -> int:
    coord_settings = settings.coordinator
    if base_url:
        coord_settings = replace(coord_settings, base_url=base_url)

    client = SuggestionClient(coord_settings)
    coordinator = QueryCoordinator.from_client(client, settings.autocomplete, coord_settings)
    try:
        view = asyncio.run(_replay(coordinator, text))
    finally:
        coordinator.close()
        client.close()

    if view.error:
        print(f"error: {view.error}")
        return 1
    if view.helper_message:
        print(view.helper_message)
    if not view.suggestions and len(text.strip()) >= settings.autocomplete.min_query_length:
        print("No matches.")
    for word in view.suggestions:
        print(word)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(log_dir=settings.logs_dir, level=args.log_level)
    logger = logging.getLogger(__name__)
    word_list = args.word_list or settings.word_list_path

    try:
        if args.command == "query":
            return _cmd_query(settings, word_list, args.prefix, args.limit)
        if args.command == "stats":
            return _cmd_stats(word_list)
        if args.command == "suggest":
            return _cmd_suggest(settings, args.text, args.base_url)
    except CorpusLoadError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}")
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

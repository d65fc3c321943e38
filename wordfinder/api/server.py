"""
Run the autocomplete API under uvicorn.

The app is built through ``create_app`` in factory mode, so it reads its
configuration from ``get_settings()``. Command-line flags that change
configuration are therefore exported as ``WORDFINDER_*`` variables before
settings are first read; that also carries them into reload workers.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

import uvicorn

from wordfinder.config.logging_config import setup_logging
from wordfinder.config.settings import get_settings

APP_FACTORY = "wordfinder.api.app:create_app"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve word-prefix suggestions over HTTP.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address.")
    parser.add_argument("--port", type=int, default=8000, help="Bind port.")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes.")
    parser.add_argument("--log-level", default="INFO", help="Log level name.")
    parser.add_argument("--word-list", help="Word list to serve instead of the configured one.")
    parser.add_argument(
        "--preload",
        action="store_true",
        help="Load the word list at startup so the first request does not pay for it.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.word_list:
        os.environ["WORDFINDER_WORD_LIST"] = os.path.abspath(args.word_list)
    if args.preload:
        os.environ["WORDFINDER_PRELOAD"] = "1"

    # Raises ConfigurationError before the port is bound.
    settings = get_settings()
    setup_logging(log_dir=settings.logs_dir, level=args.log_level)
    logger = logging.getLogger(__name__)

    ac = settings.autocomplete
    logger.info(
        "Serving %s on %s:%d (min_query_length=%d, max_results=%d, preload=%s)",
        settings.word_list_path, args.host, args.port,
        ac.min_query_length, ac.max_results, ac.preload,
    )
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

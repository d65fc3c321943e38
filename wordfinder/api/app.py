"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from wordfinder import __version__
from wordfinder.api.routes.autocomplete import router as autocomplete_router
from wordfinder.api.routes.health import router as health_router
from wordfinder.config.settings import Settings, get_settings
from wordfinder.corpus.store import CorpusStore
from wordfinder.service.lookup import LookupService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: CorpusStore | None = None,
) -> FastAPI:
    """
    Build and return a fully wired FastAPI application.

    Validates settings (raising ConfigurationError on bad values), creates
    the shared corpus store and lookup service, then mounts routes. The
    corpus is read on the first lookup unless ``preload`` is set.
    """
    settings = (settings or get_settings()).validate()

    app = FastAPI(
        title="WordFinder API",
        version=__version__,
        description="Prefix autocomplete over a static word list",
    )

    # Shared state — accessible via request.app.state in routes
    app.state.settings = settings
    app.state.lookup_service = LookupService(
        store=store or CorpusStore(settings.word_list_path),
        ac_settings=settings.autocomplete,
    )

    if settings.autocomplete.preload:
        app.state.lookup_service.warm()

    app.include_router(health_router)
    app.include_router(autocomplete_router)

    logger.info(
        "App ready (word list: %s, min query length: %d, max results: %d)",
        settings.word_list_path,
        settings.autocomplete.min_query_length,
        settings.autocomplete.max_results,
    )
    return app

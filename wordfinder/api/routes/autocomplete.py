"""Autocomplete API route."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from wordfinder.api.schemas import AutocompleteMeta, AutocompleteResponse
from wordfinder.service.lookup import LookupService

router = APIRouter(prefix="/api", tags=["autocomplete"])


@router.get("/autocomplete", response_model=AutocompleteResponse)
def autocomplete(
    request: Request,
    q: str = Query("", description="Prefix to complete"),
):
    """
    Return words starting with *q*.

    A failed lookup still returns the empty envelope, with status 500, so
    clients can render "no data" and retry on the next keystroke.
    """
    service: LookupService = request.app.state.lookup_service
    outcome = service.lookup(q)

    body = AutocompleteResponse(
        results=outcome.envelope.results,
        meta=AutocompleteMeta(
            min_query_length=outcome.envelope.min_query_length,
            truncated=outcome.envelope.truncated,
        ),
    )
    if not outcome.ok:
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))
    return body

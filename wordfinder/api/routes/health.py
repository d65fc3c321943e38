"""Health route."""

from __future__ import annotations

from fastapi import APIRouter, Request

from wordfinder.api.schemas import CorpusStatus, HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    """Liveness check plus the corpus load state."""
    store = request.app.state.lookup_service.store
    error = store.last_error
    return HealthResponse(
        status="ok",
        corpus=CorpusStatus(
            state=store.state.value,
            size=store.size,
            error=str(error) if error is not None else None,
        ),
    )

"""Pydantic response models for the API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AutocompleteMeta(BaseModel):
    """Metadata rendered alongside suggestions."""

    model_config = ConfigDict(populate_by_name=True)

    min_query_length: int = Field(alias="minQueryLength")
    truncated: bool


class AutocompleteResponse(BaseModel):
    """Autocomplete results."""

    results: list[str]
    meta: AutocompleteMeta


class CorpusStatus(BaseModel):
    """Load state of the word list."""

    state: str
    size: int
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    corpus: CorpusStatus

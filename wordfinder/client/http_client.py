"""HTTP client for the autocomplete endpoint."""

from __future__ import annotations

from typing import Optional

import requests

from wordfinder.config.settings import CoordinatorSettings, get_settings
from wordfinder.errors import TransportError
from wordfinder.service.lookup import ResultEnvelope


class SuggestionClient:
    """Fetch suggestions from a running WordFinder server."""

    def __init__(
        self,
        settings: Optional[CoordinatorSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings or get_settings().coordinator
        self._session = session or requests.Session()
        self._url = self._settings.base_url.rstrip("/") + "/api/autocomplete"

    def fetch(self, query: str) -> ResultEnvelope:
        """
        Request suggestions for *query*.

        Raises:
            TransportError: network failure, non-success status, or a body
                that is not the expected envelope.
        """
        try:
            response = self._session.get(
                self._url,
                params={"q": query},
                timeout=self._settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request failed: {exc}") from exc

        if response.status_code >= 400:
            raise TransportError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            meta = data["meta"]
            return ResultEnvelope(
                results=list(data["results"]),
                truncated=bool(meta["truncated"]),
                min_query_length=int(meta["minQueryLength"]),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise TransportError(f"Malformed response: {exc}") from exc

    def close(self) -> None:
        self._session.close()

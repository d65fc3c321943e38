"""Tests for the requests-based SuggestionClient."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from wordfinder.client.http_client import SuggestionClient
from wordfinder.config.settings import CoordinatorSettings
from wordfinder.errors import TransportError
from wordfinder.service.lookup import ResultEnvelope


def _response(status: int = 200, body=None, json_error: Exception | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session: MagicMock) -> SuggestionClient:
    settings = CoordinatorSettings(base_url="http://words.local/", request_timeout=2.5)
    return SuggestionClient(settings, session=session)


class TestSuggestionClient:
    def test_parses_envelope(self, client: SuggestionClient, session: MagicMock):
        session.get.return_value = _response(
            body={"results": ["dog", "doge"], "meta": {"minQueryLength": 2, "truncated": True}}
        )
        envelope = client.fetch("dog")
        assert envelope == ResultEnvelope(["dog", "doge"], True, 2)
        session.get.assert_called_once_with(
            "http://words.local/api/autocomplete",
            params={"q": "dog"},
            timeout=2.5,
        )

    def test_error_status_raises(self, client: SuggestionClient, session: MagicMock):
        session.get.return_value = _response(
            status=500,
            body={"results": [], "meta": {"minQueryLength": 2, "truncated": False}},
        )
        with pytest.raises(TransportError) as excinfo:
            client.fetch("dog")
        assert str(excinfo.value) == "HTTP error! status: 500"
        assert excinfo.value.status_code == 500

    def test_network_error_raises(self, client: SuggestionClient, session: MagicMock):
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TransportError, match="refused"):
            client.fetch("dog")

    def test_malformed_body_raises(self, client: SuggestionClient, session: MagicMock):
        session.get.return_value = _response(body={"results": []})
        with pytest.raises(TransportError, match="Malformed"):
            client.fetch("dog")

    def test_non_json_body_raises(self, client: SuggestionClient, session: MagicMock):
        session.get.return_value = _response(json_error=ValueError("not json"))
        with pytest.raises(TransportError):
            client.fetch("dog")

    def test_close_closes_session(self, client: SuggestionClient, session: MagicMock):
        client.close()
        session.close.assert_called_once()

"""Client side — HTTP transport and the keystroke query coordinator."""

from wordfinder.client.coordinator import (
    CoordinatorView,
    QueryCoordinator,
    QueryState,
    RequestToken,
    split_highlight,
)
from wordfinder.client.http_client import SuggestionClient

__all__ = [
    "CoordinatorView",
    "QueryCoordinator",
    "QueryState",
    "RequestToken",
    "SuggestionClient",
    "split_highlight",
]

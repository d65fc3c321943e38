"""
Query coordinator — turns a stream of keystrokes into at most one live lookup.

States::

    IDLE --input(short)--> IDLE
    any  --input(long enough)--> DEBOUNCING --timer--> IN_FLIGHT
    IN_FLIGHT --response--> SUCCESS | --fault--> FAILURE
    SUCCESS --select()--> IDLE

Every keystroke bumps a generation counter and cancels the pending timer
or request. A response is applied only if its token's generation is still
current, so a slow answer for an older query can never overwrite the view
for a newer one, whatever order responses arrive in. Cancelling the task
only asks the transport to stop; the generation check is what guarantees
stale results are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional

from wordfinder.client.http_client import SuggestionClient
from wordfinder.config.settings import (
    AutocompleteSettings,
    CoordinatorSettings,
    Settings,
    get_settings,
)
from wordfinder.service.lookup import ResultEnvelope

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[ResultEnvelope]]
Listener = Callable[["CoordinatorView"], None]


class QueryState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    IN_FLIGHT = "in_flight"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class RequestToken:
    """Identity of one dispatched query."""

    generation: int
    query: str


@dataclass(frozen=True)
class CoordinatorView:
    """Snapshot of everything a search box needs to render."""

    query: str = ""
    state: QueryState = QueryState.IDLE
    suggestions: tuple[str, ...] = field(default_factory=tuple)
    truncated: bool = False
    error: Optional[str] = None
    selected_index: int = -1
    helper_message: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.state in (QueryState.DEBOUNCING, QueryState.IN_FLIGHT)

    @property
    def selected(self) -> Optional[str]:
        if 0 <= self.selected_index < len(self.suggestions):
            return self.suggestions[self.selected_index]
        return None


def split_highlight(suggestion: str, query: str) -> tuple[str, str]:
    """
    Split *suggestion* into the part matching *query* and the remainder.

    Returns ``("", suggestion)`` when it does not start with *query*.
    """
    query = query.strip()
    if query and suggestion.lower().startswith(query.lower()):
        return suggestion[: len(query)], suggestion[len(query):]
    return "", suggestion


def fetcher_from_client(client: SuggestionClient) -> Fetcher:
    """Adapt the blocking HTTP client to the coordinator's async fetcher."""

    async def fetch(query: str) -> ResultEnvelope:
        return await asyncio.to_thread(client.fetch, query)

    return fetch


class QueryCoordinator:
    """Debounce, dispatch and supersede suggestion requests for one search box."""

    def __init__(
        self,
        fetch: Fetcher,
        ac_settings: Optional[AutocompleteSettings] = None,
        coord_settings: Optional[CoordinatorSettings] = None,
    ) -> None:
        if ac_settings is None or coord_settings is None:
            settings: Settings = get_settings()
            ac_settings = ac_settings or settings.autocomplete
            coord_settings = coord_settings or settings.coordinator
        self._fetch = fetch
        self._ac = ac_settings
        self._debounce = coord_settings.debounce_seconds

        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._listeners: list[Listener] = []

        self._query = ""
        self._state = QueryState.IDLE
        self._suggestions: tuple[str, ...] = ()
        self._truncated = False
        self._error: Optional[str] = None
        self._selected = -1

    @classmethod
    def from_client(
        cls,
        client: SuggestionClient,
        ac_settings: Optional[AutocompleteSettings] = None,
        coord_settings: Optional[CoordinatorSettings] = None,
    ) -> "QueryCoordinator":
        return cls(fetcher_from_client(client), ac_settings, coord_settings)

    # ---- observation ----

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def view(self) -> CoordinatorView:
        return CoordinatorView(
            query=self._query,
            state=self._state,
            suggestions=self._suggestions,
            truncated=self._truncated,
            error=self._error,
            selected_index=self._selected,
            helper_message=self._helper_message(),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with a fresh view after every change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_current(self, token: RequestToken) -> bool:
        return token.generation == self._generation

    # ---- input ----

    def input(self, text: str) -> None:
        """
        Handle a keystroke that left the box containing *text*.

        Must be called from inside a running event loop when the text is
        long enough to dispatch.
        """
        self._supersede()
        self._query = text
        self._selected = -1

        trimmed = text.strip()
        if len(trimmed) < self._ac.min_query_length:
            self._reset_results()
            self._state = QueryState.IDLE
            self._notify()
            return

        token = RequestToken(self._generation, trimmed)
        self._state = QueryState.DEBOUNCING
        self._error = None
        self._task = asyncio.get_running_loop().create_task(self._run(token))
        self._notify()

    def move_selection(self, step: int) -> int:
        """
        Move the highlighted suggestion by *step*, wrapping at both ends.

        From "none selected", a forward step lands on the first suggestion
        and a backward step on the last. Returns the new index.
        """
        count = len(self._suggestions)
        if count == 0 or step == 0:
            return self._selected
        if self._selected < 0:
            self._selected = 0 if step > 0 else count - 1
        else:
            self._selected = (self._selected + step) % count
        self._notify()
        return self._selected

    def select(self, index: Optional[int] = None) -> Optional[str]:
        """
        Accept a suggestion (Enter, Tab or click).

        Uses the highlighted suggestion unless *index* is given. The input
        takes the chosen word and the coordinator returns to IDLE. Returns
        None, changing nothing, if there is nothing to select.
        """
        index = self._selected if index is None else index
        if not 0 <= index < len(self._suggestions):
            return None
        chosen = self._suggestions[index]
        self._supersede()
        self._query = chosen
        self._selected = -1
        self._reset_results()
        self._state = QueryState.IDLE
        self._notify()
        return chosen

    def dismiss(self) -> None:
        """Hide suggestions (Escape) and drop any pending request. The text is kept."""
        self._supersede()
        self._selected = -1
        self._reset_results()
        self._state = QueryState.IDLE
        self._notify()

    def clear(self) -> None:
        """Empty the search box."""
        self.input("")

    async def wait(self) -> None:
        """Wait until no debounce timer or request is pending."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    def close(self) -> None:
        self._supersede()
        self._listeners.clear()

    # ---- internals ----

    async def _run(self, token: RequestToken) -> None:
        await asyncio.sleep(self._debounce)
        if not self.is_current(token):
            return

        self._state = QueryState.IN_FLIGHT
        self._notify()

        try:
            envelope = await self._fetch(token.query)
        except Exception as exc:
            self._settle_failure(token, exc)
            return
        self._settle_success(token, envelope)

    def _settle_success(self, token: RequestToken, envelope: ResultEnvelope) -> None:
        if not self.is_current(token):
            logger.debug("Discarding stale results for %r (generation %d)", token.query, token.generation)
            return
        self._suggestions = tuple(envelope.results)
        self._truncated = envelope.truncated
        self._error = None
        self._state = QueryState.SUCCESS
        self._notify()

    def _settle_failure(self, token: RequestToken, exc: Exception) -> None:
        if not self.is_current(token):
            logger.debug("Discarding stale failure for %r: %s", token.query, exc)
            return
        logger.warning("Suggestion request for %r failed: %s", token.query, exc)
        self._reset_results()
        self._error = str(exc) or "An error occurred"
        self._state = QueryState.FAILURE
        self._notify()

    def _supersede(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _reset_results(self) -> None:
        self._suggestions = ()
        self._truncated = False
        self._error = None

    def _helper_message(self) -> Optional[str]:
        if self._error:
            return None
        length = len(self._query.strip())
        missing = self._ac.min_query_length - length
        if length > 0 and missing > 0:
            return f"Type {missing} more character{'s' if missing > 1 else ''}"
        if self._truncated:
            return f"Showing top {self._ac.max_results} results"
        return None

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.view
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                logger.exception("Coordinator listener %r failed", listener)

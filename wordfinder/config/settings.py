"""
Central configuration for WordFinder.

All tunables live here. Nothing is hardcoded in module code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path

from wordfinder.errors import ConfigurationError


def _project_root() -> Path:
    """Nearest ancestor holding pyproject.toml, else the checkout containing the package."""
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").is_file():
            return parent
    return here.parents[2]


@dataclass(frozen=True)
class AutocompleteSettings:
    """Settings for the lookup side: corpus location and result shaping."""

    # Minimum trimmed query length before a search is dispatched
    min_query_length: int = 2

    # Hard cap on matches returned per query
    max_results: int = 50

    # Word list, one word per line. Relative paths resolve against project root.
    word_list_file: str = "data/words.txt"

    # Load the corpus when the app starts instead of on the first request
    preload: bool = False


@dataclass(frozen=True)
class CoordinatorSettings:
    """Settings for the client-side query coordinator."""

    # Quiet period after the last keystroke before a request is issued
    debounce_ms: int = 150

    # Per-request timeout for the HTTP transport (seconds)
    request_timeout: float = 5.0

    # Where the lookup endpoint is served
    base_url: str = "http://127.0.0.1:8000"

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


@dataclass
class Settings:
    """
    Top-level settings container.

    Usage:
        settings = get_settings()
        print(settings.autocomplete.max_results)
        print(settings.word_list_path)
    """

    project_root: Path = field(default_factory=_project_root)
    autocomplete: AutocompleteSettings = field(default_factory=AutocompleteSettings)
    coordinator: CoordinatorSettings = field(default_factory=CoordinatorSettings)

    @property
    def data_dir(self) -> Path:
        """Root directory for runtime data (word list, logs)."""
        return self.project_root / "data"

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / "logs"

    @property
    def word_list_path(self) -> Path:
        """Absolute path to the word list file."""
        path = Path(self.autocomplete.word_list_file)
        return path if path.is_absolute() else self.project_root / path

    def ensure_dirs(self) -> None:
        """Create runtime directories if they don't exist."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def validate(self) -> "Settings":
        """
        Fail fast on values that would silently break every request.

        Returns self so it can be chained at startup.
        """
        ac = self.autocomplete
        if ac.max_results <= 0:
            raise ConfigurationError(f"max_results must be positive, got {ac.max_results}")
        if ac.min_query_length < 1:
            raise ConfigurationError(
                f"min_query_length must be at least 1, got {ac.min_query_length}"
            )
        if self.coordinator.debounce_ms < 0:
            raise ConfigurationError(
                f"debounce_ms must not be negative, got {self.coordinator.debounce_ms}"
            )
        return self


_ENV_PREFIX = "WORDFINDER_"


def _env_int(name: str) -> int | None:
    raw = os.environ.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str) -> bool | None:
    raw = os.environ.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{_ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def apply_env_overrides(settings: Settings) -> Settings:
    """Return a copy of *settings* with ``WORDFINDER_*`` environment overrides applied."""
    ac_changes: dict = {}
    min_len = _env_int("MIN_QUERY_LENGTH")
    if min_len is not None:
        ac_changes["min_query_length"] = min_len
    max_results = _env_int("MAX_RESULTS")
    if max_results is not None:
        ac_changes["max_results"] = max_results
    word_list = os.environ.get(_ENV_PREFIX + "WORD_LIST")
    if word_list:
        ac_changes["word_list_file"] = word_list
    preload = _env_bool("PRELOAD")
    if preload is not None:
        ac_changes["preload"] = preload

    coord_changes: dict = {}
    debounce = _env_int("DEBOUNCE_MS")
    if debounce is not None:
        coord_changes["debounce_ms"] = debounce

    return replace(
        settings,
        autocomplete=replace(settings.autocomplete, **ac_changes),
        coordinator=replace(settings.coordinator, **coord_changes),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns the singleton Settings instance.

    Call this instead of constructing Settings() directly so the entire
    application shares one config object. Environment overrides are read
    once, here.
    """
    settings = apply_env_overrides(Settings()).validate()
    settings.ensure_dirs()
    return settings

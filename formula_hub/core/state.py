"""
Application state for the formula hub.

AppState is the single owner of session, settings, recent topics and the
two query state machines. It is created once by the controller and passed
to the view; nothing here is module-global.

Settings changes are reconciled explicitly: update_settings() diffs the
previous and new snapshots and notifies observers subscribed to the fields
that changed.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Callable, Generic, Iterator, TypeVar

from loguru import logger

from .models import AppSettings, Explanation, Syllabus, UserSession
from .themes import ThemeTokens, resolve_theme_tokens

T = TypeVar("T")

SettingsObserver = Callable[[AppSettings, AppSettings], None]

SETTINGS_FIELDS = frozenset(f.name for f in fields(AppSettings))


class QueryStatus(str, Enum):
    """Lifecycle of a single fetch."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class QueryState(Generic[T]):
    """
    Three-state machine for one kind of query.

    Every begin() issues a new generation number. Only the response carrying
    the latest generation may settle the state; older responses are stale
    and dropped.
    """

    status: QueryStatus = QueryStatus.IDLE
    result: T | None = None
    error: str = ""
    generation: int = 0

    @property
    def loading(self) -> bool:
        return self.status == QueryStatus.LOADING

    def begin(self) -> int:
        """Enter loading and return the generation for this request."""
        self.generation += 1
        self.status = QueryStatus.LOADING
        self.error = ""
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def resolve(self, generation: int, result: T) -> bool:
        """Store a successful result. Returns False if the response is stale."""
        if not self.is_current(generation):
            logger.debug(f"Dropping stale result (gen {generation} < {self.generation})")
            return False
        self.status = QueryStatus.SUCCESS
        self.result = result
        self.error = ""
        return True

    def fail(self, generation: int, message: str) -> bool:
        """Record a failure. The previous result is kept but no longer shown."""
        if not self.is_current(generation):
            logger.debug(f"Dropping stale failure (gen {generation} < {self.generation})")
            return False
        self.status = QueryStatus.ERROR
        self.error = message
        return True

    def clear(self) -> None:
        """Drop the result and invalidate any request still in flight."""
        self.generation += 1
        self.status = QueryStatus.IDLE
        self.result = None
        self.error = ""


class RecentTopics:
    """Bounded most-recent-first topic list, de-duplicated by exact match."""

    def __init__(self, limit: int = 5):
        self.limit = limit
        self._items: list[str] = []

    def add(self, topic: str) -> bool:
        """Push a topic to the front. Topics already present are left in place."""
        if topic in self._items:
            return False
        self._items.insert(0, topic)
        del self._items[self.limit:]
        return True

    def as_list(self) -> list[str]:
        return list(self._items)

    def __contains__(self, topic: object) -> bool:
        return topic in self._items

    def __getitem__(self, index: int) -> str:
        return self._items[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class AppState:
    """Everything the dashboard knows, owned by one controller."""

    def __init__(self, settings: AppSettings | None = None, history_limit: int = 5):
        self.session = UserSession()
        self.settings = settings or AppSettings()
        self.theme_tokens: ThemeTokens = resolve_theme_tokens(self.settings.theme)
        self.history = RecentTopics(limit=history_limit)
        self.explanation: QueryState[Explanation] = QueryState()
        self.syllabus: QueryState[Syllabus] = QueryState()
        self._observers: dict[str, list[SettingsObserver]] = {}

        self.subscribe("theme", self._on_theme_changed)

    # =========================================================================
    # Session
    # =========================================================================

    def login(self, name: str) -> bool:
        """Log in with a display name, stored as given. Blank names are ignored."""
        if not name.strip():
            return False
        self.session = UserSession(name=name, is_logged_in=True)
        logger.info(f"Session started for {name.strip()}")
        return True

    # =========================================================================
    # Settings
    # =========================================================================

    def subscribe(self, field_name: str, observer: SettingsObserver) -> None:
        """Call observer(old, new) whenever the named settings field changes."""
        if field_name not in SETTINGS_FIELDS:
            raise ValueError(f"Unknown settings field: {field_name}")
        self._observers.setdefault(field_name, []).append(observer)

    def update_settings(self, new_settings: AppSettings) -> list[str]:
        """
        Replace the settings record and notify observers of changed fields.

        Args:
            new_settings: Full replacement; no merging or coercion

        Returns:
            Names of the fields that changed
        """
        previous = self.settings
        self.settings = new_settings

        changed = [
            name
            for name in sorted(SETTINGS_FIELDS)
            if getattr(previous, name) != getattr(new_settings, name)
        ]
        if changed:
            logger.debug(f"Settings changed: {', '.join(changed)}")

        for name in changed:
            for observer in self._observers.get(name, []):
                observer(previous, new_settings)
        return changed

    def _on_theme_changed(self, previous: AppSettings, current: AppSettings) -> None:
        self.theme_tokens = resolve_theme_tokens(current.theme)


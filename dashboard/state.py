"""View state of a report session: selection, search, completion, preferences.

The generated page keeps the same state in its ``appState`` object and
persists it through ``localStorage``. This module holds the same rules so
they can run outside a browser, with any ``Storage`` behind them.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Set

from .config import DashboardConfig
from .filters import FilterState, apply_filters, count_summary
from .records import Category, Record

logger = logging.getLogger(__name__)

THEMES = ("dark", "light")
SIDEBAR_STATES = ("expanded", "collapsed")


class Storage(Protocol):
    """String key-value store, e.g. a browser's localStorage."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed Storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class CompletionStore:
    """Persisted set of Links marked done.

    Unreadable stored content is treated as an empty set.
    """

    def __init__(self, storage: Storage, key: str):
        self.storage = storage
        self.key = key

    def load(self) -> Set[str]:
        raw = self.storage.get(self.key)
        if not raw:
            return set()
        try:
            values = json.loads(raw)
        except ValueError:
            logger.debug(f"Ignoring malformed {self.key} value")
            return set()
        if not isinstance(values, list):
            return set()
        return {v for v in values if isinstance(v, str)}

    def is_done(self, link: str) -> bool:
        return bool(link) and link in self.load()

    def set_done(self, link: str, done: bool) -> None:
        if not link:
            return
        links = self.load()
        if done:
            links.add(link)
        else:
            links.discard(link)
        self.storage.set(self.key, json.dumps(sorted(links)))


class Preferences:
    """Theme and sidebar flags, each persisted under its own key."""

    def __init__(self, storage: Storage, theme_key: str, sidebar_key: str):
        self.storage = storage
        self.theme_key = theme_key
        self.sidebar_key = sidebar_key

    @property
    def theme(self) -> str:
        value = self.storage.get(self.theme_key)
        return value if value in THEMES else "dark"

    def toggle_theme(self) -> str:
        theme = "light" if self.theme == "dark" else "dark"
        self.storage.set(self.theme_key, theme)
        return theme

    @property
    def sidebar_collapsed(self) -> bool:
        return self.storage.get(self.sidebar_key) == "collapsed"

    def toggle_sidebar(self) -> bool:
        collapsed = not self.sidebar_collapsed
        self.storage.set(self.sidebar_key, "collapsed" if collapsed else "expanded")
        return collapsed


@dataclass
class VisibleRow:
    record: Record
    done: bool


@dataclass
class ReportSession:
    """Application state for one viewing session."""
    categories: Dict[str, Category]
    storage: Storage
    config: DashboardConfig = field(default_factory=DashboardConfig)
    filters: FilterState = field(default_factory=FilterState)
    selected: Optional[str] = None

    def __post_init__(self):
        self.completion = CompletionStore(self.storage, self.config.completed_key)
        self.preferences = Preferences(self.storage, self.config.theme_key, self.config.sidebar_key)

    @property
    def names(self) -> List[str]:
        return list(self.categories)

    def search(self, query: str) -> List[str]:
        """Category names containing query, ignoring case."""
        query = query.strip().lower()
        if not query:
            return self.names
        return [name for name in self.names if query in name.lower()]

    def select(self, name: str) -> None:
        if name not in self.categories:
            raise ValueError(f"Unknown category: {name}")
        self.selected = name

    @property
    def current(self) -> Optional[Category]:
        if self.selected is None:
            return None
        return self.categories[self.selected]

    def visible_rows(self) -> List[VisibleRow]:
        """Filtered rows of the selected category with their done state."""
        category = self.current
        if category is None:
            return []
        done_links = self.completion.load()
        return [
            VisibleRow(record=record, done=bool(record.link) and record.link in done_links)
            for record in apply_filters(category.records, self.filters)
        ]

    def summary(self) -> str:
        category = self.current
        if category is None:
            return ""
        filtered = len(apply_filters(category.records, self.filters))
        return count_summary(filtered, len(category.records))

    def toggle_done(self, link: str, done: bool) -> None:
        self.completion.set_done(link, done)

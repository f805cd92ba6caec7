"""Filter state and row filtering, matching the report's filter bar."""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .records import Record

DIFFICULTIES = ("easy", "medium", "hard")

# Leading numeric prefix, the way a browser's parseFloat reads it
_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a leading number from text, or None when there is none."""
    if value is None:
        return None
    match = _NUMBER_PREFIX.match(value.strip())
    if not match:
        return None
    return float(match.group(0).replace("Infinity", "inf"))


@dataclass
class FilterState:
    """Filter bar values. Unset bounds do not filter."""
    easy: bool = True
    medium: bool = True
    hard: bool = True
    freq_min: Optional[float] = None
    freq_max: Optional[float] = None
    accept_min: Optional[float] = None  # percent, 0-100
    accept_max: Optional[float] = None

    def allows_difficulty(self, difficulty: str) -> bool:
        enabled = dict(zip(DIFFICULTIES, (self.easy, self.medium, self.hard)))
        return enabled.get(difficulty.strip().lower(), True)

    @property
    def is_default(self) -> bool:
        return self == FilterState()


def _within(value: Optional[float], low: Optional[float], high: Optional[float]) -> bool:
    if value is None:
        return True
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def passes(record: Record, state: FilterState) -> bool:
    """Check a record against difficulty, frequency and acceptance filters.

    Values that do not parse as numbers pass the numeric filters.
    Acceptance Rate is stored as a fraction and compared as a percentage.
    """
    if not state.allows_difficulty(record.difficulty):
        return False

    if not _within(parse_number(record.frequency), state.freq_min, state.freq_max):
        return False

    acceptance = parse_number(record.acceptance_rate)
    accept_pct = acceptance * 100 if acceptance is not None else None
    return _within(accept_pct, state.accept_min, state.accept_max)


def apply_filters(records: Iterable[Record], state: FilterState) -> List[Record]:
    return [record for record in records if passes(record, state)]


def count_summary(filtered: int, total: int) -> str:
    """Count line shown above the table."""
    if filtered == total:
        return f"{total} problems (All time)"
    return f"{filtered} of {total} problems"

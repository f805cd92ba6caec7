"""Record and category models."""
from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

DIFFICULTY = "Difficulty"
TITLE = "Title"
LINK = "Link"
FREQUENCY = "Frequency"
ACCEPTANCE_RATE = "Acceptance Rate"
TOPICS = "Topics"
COMPANIES = "Companies"


class Record(Mapping):
    """One dataset row keyed by header name.

    Lookups ignore case; iteration yields the original header spelling in
    header order. Records are read-only, use ``with_field`` to derive one.
    """

    def __init__(self, fields: Optional[Dict[str, str]] = None):
        self._fields: Dict[str, str] = dict(fields or {})
        self._keys: Dict[str, str] = {}
        for key in self._fields:
            self._keys.setdefault(key.lower(), key)

    def __getitem__(self, key: str) -> str:
        return self._fields[self._keys[key.lower()]]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and key.lower() in self._keys

    def __eq__(self, other) -> bool:
        if isinstance(other, Record):
            return self._fields == other._fields
        if isinstance(other, Mapping):
            return self._fields == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Record({self._fields!r})"

    def text(self, name: str) -> str:
        """Field value, or an empty string when the field is absent."""
        return self.get(name, "")

    def with_field(self, name: str, value: str) -> "Record":
        """Copy of this record with ``name`` set to ``value``."""
        fields = dict(self._fields)
        existing = self._keys.get(name.lower())
        fields[existing or name] = value
        return Record(fields)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._fields)

    @property
    def difficulty(self) -> str:
        return self.text(DIFFICULTY)

    @property
    def title(self) -> str:
        return self.text(TITLE)

    @property
    def link(self) -> str:
        return self.text(LINK)

    @property
    def frequency(self) -> str:
        return self.text(FREQUENCY)

    @property
    def acceptance_rate(self) -> str:
        return self.text(ACCEPTANCE_RATE)

    @property
    def topics(self) -> str:
        return self.text(TOPICS)

    @property
    def companies(self) -> str:
        return self.text(COMPANIES)


@dataclass
class Category:
    """A company dataset: ordered headers plus its records."""
    name: str
    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)
    source: str = ""  # dataset file name, empty for synthesized categories

    def to_payload(self) -> dict:
        """JSON-ready form embedded in the report."""
        return {
            "headers": list(self.headers),
            "data": [record.to_dict() for record in self.records],
        }


def materialize(headers: List[str], rows: List[List[str]]) -> List[Record]:
    """Pair each row with the headers.

    Short rows are padded with empty strings and extra fields are dropped.
    """
    records = []
    for row in rows:
        values = {}
        for i, header in enumerate(headers):
            values[header] = row[i] if i < len(row) else ""
        records.append(Record(values))
    return records

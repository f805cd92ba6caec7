"""Minimal quote-aware CSV tokenizer for company datasets."""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import List

LINE_BREAK = re.compile(r"\r?\n")


@dataclass
class ParsedCSV:
    """Header row and data rows, not yet paired."""
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


def parse_line(line: str) -> List[str]:
    """Split one CSV line into fields.

    A double quote toggles quoted mode and is dropped. Inside quotes commas
    and whitespace are literal; outside quotes a comma ends the field and
    the field is trimmed.

    Doubled quotes ("") are not treated as an escaped quote, and a quoted
    field cannot span lines. Existing datasets rely on this behavior.
    """
    fields = []
    current = ""
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif in_quotes:
            current += char
        elif char == ",":
            fields.append(current.strip())
            current = ""
        else:
            current += char

    fields.append(current.strip())
    return fields


def parse_csv(text: str) -> ParsedCSV:
    """Parse raw CSV text; the first non-blank line is the header."""
    lines = [line for line in LINE_BREAK.split(text) if line.strip()]
    if not lines:
        return ParsedCSV()

    headers = parse_line(lines[0])
    rows = [parse_line(line) for line in lines[1:]]
    return ParsedCSV(headers=headers, rows=rows)

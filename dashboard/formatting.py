"""Cell formatting for report tables."""
from __future__ import annotations
from html import escape

from .filters import parse_number
from .records import (
    ACCEPTANCE_RATE,
    DIFFICULTY,
    FREQUENCY,
    LINK,
    TITLE,
    TOPICS,
    Record,
)

EM_DASH = "—"


def difficulty_class(value: str) -> str:
    """CSS class for a difficulty label; unknown values get hard styling."""
    value = value.strip().lower()
    return value if value in ("easy", "medium") else "hard"


def format_acceptance_rate(value: str) -> str:
    """Fraction to a one-decimal percentage, em-dash when unusable."""
    number = parse_number(value)
    if number is None:
        return EM_DASH
    return f"{number * 100:.1f}%"


def _anchor(href: str, text: str, css_class: str = "") -> str:
    class_attr = f' class="{css_class}"' if css_class else ""
    return f'<a href="{escape(href)}" target="_blank" rel="noopener"{class_attr}>{escape(text)}</a>'


def format_cell(header: str, record: Record) -> str:
    """HTML for one table cell. Never changes the record."""
    value = record.text(header)

    if header == DIFFICULTY:
        return f'<span class="diff {difficulty_class(value)}">{escape(value)}</span>'
    if header == TITLE:
        if record.link:
            return _anchor(record.link, value, "title")
        return escape(value)
    if header == ACCEPTANCE_RATE:
        return f'<span class="accept">{escape(format_acceptance_rate(value))}</span>'
    if header == FREQUENCY:
        return f'<span class="freq">{escape(value)}</span>'
    if header == TOPICS:
        return f'<span class="topics">{escape(value)}</span>'
    if header == LINK:
        return _anchor(value, "Open") if value else EM_DASH
    return escape(value)

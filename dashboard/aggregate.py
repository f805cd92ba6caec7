"""Build the cross-company "All" category."""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .records import COMPANIES, LINK, Category, Record

logger = logging.getLogger(__name__)


def _with_companies(record: Record, header: str, value: str) -> Record:
    """Copy of record whose only Companies key is spelled exactly as header."""
    fields = {k: v for k, v in record.items() if k.lower() != header.lower()}
    fields[header] = value
    return Record(fields)


def build_all_category(categories: Dict[str, Category], label: str) -> Optional[Category]:
    """Union records of every company by Link.

    Each merged record carries a Companies field listing, sorted and
    deduplicated, the companies whose dataset contains that Link. The first
    sighting of a Link supplies the remaining fields.

    Args:
        categories: Company datasets keyed by name
        label: Name of the aggregate category

    Returns:
        The aggregate Category, or None when there are no companies or the
        first company's headers have no Link column
    """
    names = sorted(categories)
    if not names:
        return None

    base_headers = categories[names[0]].headers
    if LINK not in base_headers:
        logger.debug(f"{names[0]} has no {LINK} column; skipping {label}")
        return None

    merged: Dict[str, Record] = {}
    sources: Dict[str, List[str]] = {}

    for name in names:
        for record in categories[name].records:
            link = record.link
            if not link:
                continue
            if link not in merged:
                merged[link] = record
                sources[link] = [name]
            elif name not in sources[link]:
                sources[link].append(name)

    # headers and row keys share one spelling
    companies_header = next((h for h in base_headers if h.lower() == COMPANIES.lower()), COMPANIES)
    records = [
        _with_companies(record, companies_header, ", ".join(sorted(sources[link])))
        for link, record in merged.items()
    ]

    headers = list(base_headers)
    if companies_header not in headers:
        headers.append(companies_header)

    return Category(name=label, headers=headers, records=records)


def category_order(categories: Dict[str, Category], all_label: str) -> List[str]:
    """Sidebar order: the aggregate first, then companies alphabetically."""
    names = sorted(name for name in categories if name != all_label)
    if all_label in categories:
        names.insert(0, all_label)
    return names


def with_aggregate(categories: Dict[str, Category], label: str) -> Dict[str, Category]:
    """Companies plus the aggregate, in sidebar order."""
    combined = dict(categories)
    aggregate = build_all_category(categories, label)
    if aggregate is not None:
        combined[label] = aggregate
    return {name: combined[name] for name in category_order(combined, label)}

"""Locate and load per-company datasets from a directory tree."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import DashboardConfig
from .parser import parse_csv
from .records import Category, materialize

logger = logging.getLogger(__name__)


def discover_category_dirs(root: Path, exclude: Iterable[str] = ()) -> List[Path]:
    """Immediate subdirectories of root, minus hidden and excluded names."""
    excluded = set(exclude)
    dirs = []
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        if entry.name.startswith(".") or entry.name in excluded:
            continue
        dirs.append(entry)
    return sorted(dirs, key=lambda p: p.name)


def locate_dataset(directory: Path, candidates: Iterable[str]) -> Optional[Path]:
    """First existing dataset file among the candidate names."""
    for name in candidates:
        path = directory / name
        if path.is_file():
            return path
    return None


def read_category(dataset: Path, name: str) -> Category:
    """Read, parse and materialize one dataset file."""
    text = dataset.read_text(encoding="utf-8")
    parsed = parse_csv(text)
    return Category(
        name=name,
        headers=parsed.headers,
        records=materialize(parsed.headers, parsed.rows),
        source=dataset.name,
    )


def load_categories(root: Path, config: Optional[DashboardConfig] = None) -> Dict[str, Category]:
    """Load every company dataset under root, keyed by directory name.

    A company whose dataset cannot be read is logged and left out; the
    remaining companies still load.

    Args:
        root: Directory holding one subdirectory per company
        config: Dataset file names and excluded directories

    Returns:
        Dict of Category objects in sorted name order
    """
    config = config or DashboardConfig()
    categories: Dict[str, Category] = {}

    for directory in discover_category_dirs(root, config.exclude_dirs):
        try:
            dataset = locate_dataset(directory, config.csv_names)
            if dataset is None:
                logger.debug(f"No dataset in {directory.name}")
                continue
            category = read_category(dataset, directory.name)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skip {directory.name}: {e}")
            continue

        logger.debug(f"Loaded {len(category.records)} rows from {dataset}")
        categories[category.name] = category

    return categories

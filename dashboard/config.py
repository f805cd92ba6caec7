"""Dashboard build configuration."""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

CONFIG_FILENAME = "dashboard.yaml"


def _string_list(config: dict, key: str, default: List[str]) -> List[str]:
    value = config.get(key, default)
    if not isinstance(value, list):
        raise ValueError(f"{key}: expected a list, got {value!r}")
    return [str(item) for item in value]


@dataclass
class DashboardConfig:
    """Settings for locating datasets and rendering the report."""
    output: str = "index.html"
    title: str = "LeetCode Company-Wise Problems"
    all_label: str = "All Problems"
    sidebar_heading: str = "Companies"
    csv_names: List[str] = field(default_factory=lambda: ["All.csv", "5. All.csv"])
    exclude_dirs: List[str] = field(default_factory=lambda: ["node_modules"])
    storage_prefix: str = "dashboard"

    @classmethod
    def from_yaml(cls, config: dict) -> "DashboardConfig":
        """Create DashboardConfig from parsed YAML config."""
        defaults = cls()
        return cls(
            output=str(config.get("output", defaults.output)),
            title=str(config.get("title", defaults.title)),
            all_label=str(config.get("all_label", defaults.all_label)),
            sidebar_heading=str(config.get("sidebar_heading", defaults.sidebar_heading)),
            csv_names=_string_list(config, "csv_names", defaults.csv_names),
            exclude_dirs=_string_list(config, "exclude_dirs", defaults.exclude_dirs),
            storage_prefix=str(config.get("storage_prefix", defaults.storage_prefix)),
        )

    @property
    def theme_key(self) -> str:
        return f"{self.storage_prefix}-theme"

    @property
    def sidebar_key(self) -> str:
        return f"{self.storage_prefix}-sidebar"

    @property
    def completed_key(self) -> str:
        return f"{self.storage_prefix}-completed"


def load_config(path: Optional[Path]) -> DashboardConfig:
    """Load a config file, falling back to defaults when it does not exist."""
    if path is None or not path.exists():
        return DashboardConfig()

    with open(path, encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e

    if raw is None:
        return DashboardConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    return DashboardConfig.from_yaml(raw)

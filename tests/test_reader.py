import errno
import logging
from pathlib import Path

from dashboard.config import DashboardConfig
from dashboard.reader import discover_category_dirs, load_categories, locate_dataset


def test_discovery_skips_hidden_and_excluded_dirs(dataset_root):
    dirs = discover_category_dirs(dataset_root, ["node_modules"])
    assert [d.name for d in dirs] == ["Amazon", "Empty", "Google"]


def test_first_candidate_wins(tmp_path):
    (tmp_path / "All.csv").write_text("A\n1\n", encoding="utf-8")
    (tmp_path / "5. All.csv").write_text("A\n2\n", encoding="utf-8")
    assert locate_dataset(tmp_path, ["All.csv", "5. All.csv"]).name == "All.csv"
    assert locate_dataset(tmp_path, ["missing.csv"]) is None


def test_load_categories(dataset_root):
    categories = load_categories(dataset_root)
    assert list(categories) == ["Amazon", "Google"]
    assert len(categories["Amazon"].records) == 3
    # header plus two non-blank data lines
    assert len(categories["Google"].records) == 2
    assert categories["Google"].source == "5. All.csv"
    assert categories["Amazon"].records[0].topics == "Array, Hash Table"


def test_unreadable_dataset_is_skipped_with_warning(dataset_root, caplog):
    (dataset_root / "Broken").mkdir()
    (dataset_root / "Broken" / "All.csv").write_bytes(b"Title,Link\n\xff\xfe\xfa,x\n")

    with caplog.at_level(logging.WARNING, logger="dashboard.reader"):
        categories = load_categories(dataset_root)

    assert "Broken" not in categories
    assert list(categories) == ["Amazon", "Google"]
    assert any("Skip Broken" in message for message in caplog.messages)


def test_custom_dataset_names(dataset_root):
    config = DashboardConfig(csv_names=["5. All.csv"])
    assert list(load_categories(dataset_root, config)) == ["Google"]


def test_empty_root(tmp_path):
    assert load_categories(tmp_path) == {}


def test_permission_denied_directory_is_skipped(dataset_root, monkeypatch, caplog):
    locked = dataset_root / "Locked"
    locked.mkdir()
    (locked / "All.csv").write_text("Title,Link\nA,x\n", encoding="utf-8")

    original_is_file = Path.is_file

    def is_file(self):
        if self.parent == locked:
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return original_is_file(self)

    monkeypatch.setattr(Path, "is_file", is_file)

    with caplog.at_level(logging.WARNING, logger="dashboard.reader"):
        categories = load_categories(dataset_root)

    assert list(categories) == ["Amazon", "Google"]
    assert any("Skip Locked" in message for message in caplog.messages)

from click.testing import CliRunner

from main import cli


def run(*args):
    return CliRunner().invoke(cli, list(args))


def test_build_writes_report(dataset_root):
    result = run("--root", str(dataset_root), "build")
    assert result.exit_code == 0, result.output
    assert "Found 2 companies" in result.output
    assert (dataset_root / "index.html").exists()


def test_build_with_no_companies(tmp_path):
    result = run("--root", str(tmp_path), "build", "--title", "Empty")
    assert result.exit_code == 0, result.output
    assert "Found 0 companies" in result.output
    assert "<title>Empty</title>" in (tmp_path / "index.html").read_text(encoding="utf-8")


def test_build_reads_config(dataset_root):
    (dataset_root / "dashboard.yaml").write_text("output: report.html\n", encoding="utf-8")
    result = run("--root", str(dataset_root), "build")
    assert result.exit_code == 0, result.output
    assert (dataset_root / "report.html").exists()


def test_bad_config_exits(dataset_root):
    (dataset_root / "dashboard.yaml").write_text("just a string\n", encoding="utf-8")
    result = run("--root", str(dataset_root), "build")
    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_categories_lists_aggregate(dataset_root):
    result = run("--root", str(dataset_root), "categories")
    assert result.exit_code == 0, result.output
    assert "All Problems" in result.output
    assert "Amazon" in result.output


def test_show_applies_filters(dataset_root):
    result = run("--root", str(dataset_root), "show", "Amazon", "--no-hard", "--accept-min", "50")
    assert result.exit_code == 0, result.output
    assert "1 of 3 problems" in result.output
    assert "Two Sum" in result.output


def test_show_unknown_company(dataset_root):
    result = run("--root", str(dataset_root), "show", "Netflix")
    assert result.exit_code == 1
    assert "Unknown category: Netflix" in result.output


def test_malformed_config_exits(dataset_root):
    (dataset_root / "dashboard.yaml").write_text("title: [unclosed\n", encoding="utf-8")
    result = run("--root", str(dataset_root), "build")
    assert result.exit_code == 1
    assert "Configuration error" in result.output
    assert not (dataset_root / "index.html").exists()

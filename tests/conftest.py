import pytest

HEADERS = "Difficulty,Title,Frequency,Acceptance Rate,Link,Topics"

AMAZON_CSV = f"""{HEADERS}
EASY,Two Sum,100.0,0.5561,https://leetcode.com/problems/two-sum,"Array, Hash Table"
MEDIUM,LRU Cache,87.5,0.4420,https://leetcode.com/problems/lru-cache,"Hash Table, Design"
HARD,Trapping Rain Water,,0.6403,https://leetcode.com/problems/trapping-rain-water,"Array, Two Pointers"
"""

GOOGLE_CSV = f"""{HEADERS}\r
MEDIUM,LRU Cache,60.2,0.4420,https://leetcode.com/problems/lru-cache,"Hash Table, Design"\r
\r
EASY,Valid Parentheses,45.1,0.4105,https://leetcode.com/problems/valid-parentheses,"String, Stack"\r
"""


@pytest.fixture
def dataset_root(tmp_path):
    """Directory tree with two companies plus entries that must be ignored."""
    (tmp_path / "Amazon").mkdir()
    (tmp_path / "Amazon" / "All.csv").write_text(AMAZON_CSV, encoding="utf-8")

    (tmp_path / "Google").mkdir()
    (tmp_path / "Google" / "5. All.csv").write_text(GOOGLE_CSV, encoding="utf-8")

    (tmp_path / "Empty").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "All.csv").write_text(AMAZON_CSV, encoding="utf-8")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "All.csv").write_text(AMAZON_CSV, encoding="utf-8")
    (tmp_path / "README.md").write_text("notes", encoding="utf-8")
    return tmp_path

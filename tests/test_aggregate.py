from dashboard.aggregate import build_all_category, category_order, with_aggregate
from dashboard.reader import load_categories
from dashboard.records import Category, Record

LABEL = "All Problems"


def make_category(name, links, headers=("Title", "Link")):
    records = [Record({"Title": f"T{link}", "Link": link}) for link in links]
    return Category(name=name, headers=list(headers), records=records)


def test_companies_sorted_and_deduplicated():
    categories = {
        "B": make_category("B", ["x", "x", "y"]),
        "A": make_category("A", ["x"]),
    }
    aggregate = build_all_category(categories, LABEL)

    by_link = {record.link: record for record in aggregate.records}
    assert by_link["x"].companies == "A, B"
    assert by_link["y"].companies == "B"
    assert aggregate.headers == ["Title", "Link", "Companies"]


def test_first_sighting_supplies_fields(dataset_root):
    categories = load_categories(dataset_root)
    aggregate = build_all_category(categories, LABEL)

    assert len(aggregate.records) == 4
    lru = next(r for r in aggregate.records if r.title == "LRU Cache")
    assert lru.frequency == "87.5"
    assert lru.companies == "Amazon, Google"


def test_building_twice_is_identical_and_leaves_inputs_alone():
    categories = {"A": make_category("A", ["x", "y"]), "B": make_category("B", ["y"])}
    first = build_all_category(categories, LABEL)
    second = build_all_category(categories, LABEL)

    assert first == second
    assert all("Companies" not in record for record in categories["A"].records)


def test_requires_link_header_on_first_company():
    categories = {
        "A": make_category("A", ["x"], headers=("Title",)),
        "B": make_category("B", ["y"]),
    }
    assert build_all_category(categories, LABEL) is None


def test_no_categories():
    assert build_all_category({}, LABEL) is None
    assert with_aggregate({}, LABEL) == {}


def test_empty_links_are_not_merged():
    categories = {"A": make_category("A", ["", "x"])}
    assert [r.link for r in build_all_category(categories, LABEL).records] == ["x"]


def test_existing_companies_header_not_duplicated():
    categories = {"A": make_category("A", ["x"], headers=("Title", "Link", "Companies"))}
    assert build_all_category(categories, LABEL).headers == ["Title", "Link", "Companies"]


def test_aggregate_listed_first():
    categories = {"Zoom": make_category("Zoom", ["x"]), "Adobe": make_category("Adobe", ["y"])}
    ordered = with_aggregate(categories, LABEL)
    assert list(ordered) == [LABEL, "Adobe", "Zoom"]
    assert category_order(categories, LABEL) == ["Adobe", "Zoom"]


def test_lowercase_companies_header_keeps_its_spelling():
    records = [Record({"Title": "Tx", "Link": "x", "companies": "stale"})]
    categories = {
        "A": Category(name="A", headers=["Title", "Link", "companies"], records=records),
        "B": make_category("B", ["x"]),
    }
    aggregate = build_all_category(categories, LABEL)

    assert aggregate.headers == ["Title", "Link", "companies"]
    assert aggregate.records[0].to_dict() == {"Title": "Tx", "Link": "x", "companies": "A, B"}

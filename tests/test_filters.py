from dashboard.filters import FilterState, apply_filters, count_summary, parse_number, passes
from dashboard.records import Record


def problem(difficulty="Easy", frequency="50", acceptance="0.5"):
    return Record({
        "Difficulty": difficulty,
        "Frequency": frequency,
        "Acceptance Rate": acceptance,
        "Link": f"{difficulty}-{frequency}-{acceptance}",
    })


RECORDS = [
    problem("EASY", "10", "0.9"),
    problem("Medium", "55.5", "0.45"),
    problem("hard", "", "0.2"),
    problem("Hard", "90", "n/a"),
    problem("Unknown", "70", "0.6"),
]


def test_parse_number_reads_leading_number():
    assert parse_number("42.5") == 42.5
    assert parse_number(" 0.3abc") == 0.3
    assert parse_number(".5") == 0.5
    assert parse_number("-1e2") == -100.0
    assert parse_number("") is None
    assert parse_number("abc") is None
    assert parse_number(None) is None


def test_defaults_pass_everything():
    assert apply_filters(RECORDS, FilterState()) == RECORDS


def test_difficulty_matching_ignores_case():
    state = FilterState(hard=False)
    kept = [r["Difficulty"] for r in apply_filters(RECORDS, state)]
    assert kept == ["EASY", "Medium", "Unknown"]


def test_unparseable_frequency_is_never_excluded():
    record = problem("Easy", "", "0.5")
    assert passes(record, FilterState(freq_min=99))
    assert passes(record, FilterState(freq_max=0))


def test_acceptance_compared_as_percentage():
    state = FilterState(accept_min=50)
    links = [r.link for r in apply_filters(RECORDS, state)]
    assert links == ["EASY-10-0.9", "Hard-90-n/a", "Unknown-70-0.6"]


def test_frequency_bounds_inclusive():
    state = FilterState(freq_min=10, freq_max=55.5)
    links = [r.link for r in apply_filters(RECORDS, state)]
    assert links == ["EASY-10-0.9", "Medium-55.5-0.45", "hard--0.2"]


def test_filters_are_monotonic():
    states = [
        FilterState(),
        FilterState(easy=False),
        FilterState(easy=False, medium=False),
        FilterState(easy=False, medium=False, freq_max=80),
        FilterState(easy=False, medium=False, freq_max=80, accept_min=30),
    ]
    counts = [len(apply_filters(RECORDS, s)) for s in states]
    assert counts == sorted(counts, reverse=True)


def test_count_summary():
    assert count_summary(5, 5) == "5 problems (All time)"
    assert count_summary(2, 5) == "2 of 5 problems"
    assert count_summary(0, 0) == "0 problems (All time)"

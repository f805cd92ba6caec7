from dashboard.parser import parse_csv, parse_line


def test_quoted_field_keeps_comma():
    assert parse_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_unquoted_fields_are_trimmed():
    assert parse_line(" a , b ,c ") == ["a", "b", "c"]


def test_commas_and_spaces_inside_quotes_are_literal():
    assert parse_line('x,"a , b",y') == ["x", "a , b", "y"]


def test_trailing_comma_yields_empty_field():
    assert parse_line("a,b,") == ["a", "b", ""]


def test_doubled_quotes_are_not_an_escape():
    # "" closes and reopens quoting, so no quote character survives
    assert parse_line('"say ""hi""",x') == ["say hi", "x"]


def test_parse_csv_skips_blank_lines_and_handles_crlf():
    parsed = parse_csv("A,B\r\n1,2\r\n\r\n   \n3,4\n")
    assert parsed.headers == ["A", "B"]
    assert parsed.rows == [["1", "2"], ["3", "4"]]


def test_parse_csv_empty_text():
    parsed = parse_csv("\n\n")
    assert parsed.headers == []
    assert parsed.rows == []


def test_quoted_field_does_not_span_lines():
    parsed = parse_csv('A,B\n"open,\nclosed",2\n')
    assert parsed.rows == [["open,"], ["closed,2"]]

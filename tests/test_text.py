from simuverse.text import parse_url_query_string, remove_leading_indentation


def test_dedent_by_first_line():
    code = "    a\n      b\n    c"
    assert remove_leading_indentation(code) == "a\n  b\nc"


def test_dedent_keeps_trailing_newline():
    code = "\tx\n\ty\n"
    assert remove_leading_indentation(code) == "x\ny\n"


def test_dedent_less_indented_line():
    code = "    a\n  b"
    assert remove_leading_indentation(code) == "a\nb"


def test_dedent_empty_and_unindented():
    assert remove_leading_indentation("") == ""
    assert remove_leading_indentation("a\n  b") == "a\n  b"


def test_query_finds_key():
    assert parse_url_query_string("?RUST_LOG=debug", "RUST_LOG") == "debug"
    assert parse_url_query_string("?a=1&RUST_LOG=warn", "RUST_LOG") == "warn"


def test_query_requires_question_mark():
    assert parse_url_query_string("RUST_LOG=debug", "RUST_LOG") is None


def test_query_missing_key():
    assert parse_url_query_string("?a=1&b=2", "RUST_LOG") is None


def test_query_pair_without_equals_stops_search():
    assert parse_url_query_string("?flag&RUST_LOG=info", "RUST_LOG") is None


def test_query_value_is_second_piece():
    assert parse_url_query_string("?k=v=w", "k") == "v"
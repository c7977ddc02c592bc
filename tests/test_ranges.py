import pytest

from linesmith.core.ranges import RangeSpec, parse_line_ranges, parse_meta


@pytest.mark.parametrize("meta", ["{1,3}", "{1, 3}", "{1-1,3-3}", "{ 3 , 1 }"])
def test_range_union_forms_are_equivalent(meta: str) -> None:
    assert parse_meta(meta).highlighted_lines == {1, 3}


def test_range_is_inclusive() -> None:
    assert parse_meta("{1-3}").highlighted_lines == {1, 2, 3}


def test_ranges_and_values_combine() -> None:
    assert parse_meta("{1, 4-6, 9}").highlighted_lines == {1, 4, 5, 6, 9}


def test_show_line_numbers_token_is_detected() -> None:
    spec = parse_meta("{2} showLineNumbers")
    assert spec.show_line_numbers is True
    assert spec.highlighted_lines == {2}
    assert spec.start_line == 1


def test_show_line_numbers_accepts_start_value() -> None:
    spec = parse_meta("showLineNumbers=12")
    assert spec.show_line_numbers is True
    assert spec.start_line == 12


def test_show_line_numbers_is_case_sensitive() -> None:
    assert parse_meta("showlinenumbers").show_line_numbers is False


def test_show_line_numbers_must_be_a_whole_token() -> None:
    assert parse_meta("noshowLineNumbers").show_line_numbers is False


@pytest.mark.parametrize("meta", [None, "", "title=example.py"])
def test_absent_directives_give_defaults(meta: str | None) -> None:
    assert parse_meta(meta) == RangeSpec()


@pytest.mark.parametrize("meta", ["{1,a}", "{1-2-3}", "{x}", "{-2}"])
def test_malformed_groups_degrade_to_no_highlights(meta: str) -> None:
    spec = parse_meta(meta)
    assert spec.highlighted_lines == frozenset()
    assert spec.show_line_numbers is False


def test_only_first_group_is_read() -> None:
    assert parse_meta("{1} {2}").highlighted_lines == {1}


def test_unrelated_annotations_are_ignored() -> None:
    spec = parse_meta('title="demo.py" {2-3} showLineNumbers')
    assert spec.highlighted_lines == {2, 3}
    assert spec.show_line_numbers is True


def test_zero_and_descending_ranges_contribute_nothing() -> None:
    assert parse_line_ranges("0, 5-3, 2") == {2}


def test_trailing_comma_is_tolerated() -> None:
    assert parse_line_ranges("1,") == {1}


def test_is_highlighted_uses_physical_index() -> None:
    spec = RangeSpec(highlighted_lines=frozenset({2}), show_line_numbers=True, start_line=10)
    assert spec.is_highlighted(2)
    assert not spec.is_highlighted(11)

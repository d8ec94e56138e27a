import pytest

from stockapp.utils.parse_utils import parse_number, parse_id_list


def test_parse_number_strips_thousands_separators():
    assert parse_number("1,23,456.70") == pytest.approx(123456.70)
    assert parse_number(" -10.50 ") == pytest.approx(-10.5)
    assert parse_number(42) == 42.0


@pytest.mark.parametrize("value", [None, "", "  ", "-", "n/a", True, False, "nan", "inf", "-Infinity", float("nan")])
def test_parse_number_rejects(value):
    with pytest.raises(ValueError):
        parse_number(value)


def test_parse_id_list():
    assert parse_id_list("1,2,3") == [1, 2, 3]
    assert parse_id_list("7") == [7]
    assert parse_id_list("") is None
    assert parse_id_list(None) is None
    assert parse_id_list("1,a") is None
    assert parse_id_list("1,,2") is None

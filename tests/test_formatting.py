import locale
from decimal import Decimal

import pytest

from csvexport.formatting import (
    build_header,
    build_row,
    format_field,
    is_float,
    locale_number_text,
    number_text,
)
from csvexport.models import CsvOptions, resolve_options


def opts(**overrides):
    return resolve_options(overrides)


def test_is_float():
    assert is_float(3.14)
    assert is_float(-0.5)
    assert is_float(Decimal("1.25"))
    assert is_float(float("inf"))
    assert is_float(float("-inf"))
    assert not is_float(5)
    assert not is_float(5.0)
    assert not is_float(Decimal("2.00"))
    assert not is_float(float("nan"))
    assert not is_float(True)
    assert not is_float("3.14")
    assert not is_float(None)


def test_decimal_separator_substitution():
    options = opts(decimalseparator=",")
    assert format_field(3.14, options) == "3,14"
    assert format_field(5, options) == "5"
    assert format_field(5.0, options) == "5"
    assert format_field(Decimal("-12.50"), options) == "-12,50"


@pytest.mark.parametrize("value", [0, 7, -3, 10.0, 1e15, Decimal("4")])
def test_whole_numbers_never_substituted(value):
    for separator in (",", ";", "locale"):
        assert "," not in format_field(value, opts(decimalseparator=separator))


def test_infinity_counts_as_fractional():
    assert format_field(float("inf"), opts(decimalseparator=",")) == "Infinity"
    assert format_field(float("-inf"), opts(decimalseparator="locale")) == "-∞"


def test_locale_rendering():
    # The interpreter starts in the C locale for LC_NUMERIC
    assert locale_number_text(1234.5678) == "1234.568"
    assert locale_number_text(2.5) == "2.5"
    assert format_field(0.1, opts(decimalseparator="locale")) == "0.1"
    assert format_field(12, opts(decimalseparator="locale")) == "12"


def test_text_is_quoted_by_default():
    options = CsvOptions()
    assert format_field("x", options) == '"x"'
    assert format_field("a,b", options) == '"a,b"'
    assert format_field('he said "hi"', options) == '"he said ""hi"""'
    assert format_field("", options) == '""'


def test_text_without_quote_strings():
    options = opts(quoteStrings="")
    assert format_field("plain", options) == "plain"
    assert format_field("a,b", options) == '"a,b"'
    assert format_field("two\nlines", options) == '"two\nlines"'
    assert format_field("cr\rhere", options) == '"cr\rhere"'
    assert format_field('5" pipe', options) == '5"" pipe'


def test_text_checks_configured_separator():
    options = opts(quoteStrings="", fieldSeparator=";")
    assert format_field("a;b", options) == '"a;b"'
    assert format_field("a,b", options) == "a,b"


def test_custom_quote_character():
    options = opts(quoteStrings="'")
    assert format_field("it's", options) == "'it''s'"


def test_quoted_text_decodes_back():
    options = CsvOptions()
    original = 'say ""twice"" and "once"'
    field = format_field(original, options)
    assert field[0] == field[-1] == '"'
    assert field[1:-1].replace('""', '"') == original


def test_booleans():
    options = CsvOptions()
    assert format_field(True, options) == "TRUE"
    assert format_field(False, options) == "FALSE"


def test_null_and_numbers_default_text():
    options = CsvOptions()
    assert format_field(None, options) == "null"
    assert format_field(0, options) == "0"
    assert format_field(3.14, options) == "3.14"
    assert format_field(float("nan"), options) == "NaN"


def test_null_to_empty_string():
    options = opts(nullToEmptyString=True)
    assert format_field(None, options) == ""
    assert format_field(False, options) == ""
    assert format_field(0, options) == ""
    assert format_field(0.0, options) == ""
    assert format_field(True, options) == "TRUE"
    assert format_field(42, options) == "42"


def test_empty_text_is_not_nulled():
    # Text is handled before the empty-value rule
    assert format_field("", opts(nullToEmptyString=True)) == '""'
    assert format_field("", opts(nullToEmptyString=True, quoteStrings="")) == ""


def test_build_header():
    assert build_header((), ",") is None
    assert build_header(("name", "age"), ",") == "name,age"
    assert build_header(("only",), ";") == "only"


def test_row_uses_record_order():
    options = opts(quoteStrings="")
    assert build_row({"b": 2, "a": 1, "c": "z"}, options) == "2,1,z"
    assert build_row([("b", 2), ("a", 1)], options) == "2,1"
    assert build_row({}, options) == ""


def test_row_uses_header_order():
    options = opts(quoteStrings="", headers=["name", "age"], useHeader=True)
    assert build_row({"age": 30, "name": "Al"}, options) == "Al,30"
    assert build_row([("age", 30), ("name", "Al")], options) == "Al,30"


def test_row_missing_header_field_is_null():
    options = opts(headers=["name", "age"], useHeader=True)
    assert build_row({"name": "Al"}, options) == '"Al",null'
    options = opts(headers=["name", "age"], useHeader=True, nullToEmptyString=True)
    assert build_row({"name": "Al"}, options) == '"Al",'


def test_headers_without_use_header_keep_record_order():
    options = opts(quoteStrings="", headers=["name", "age"])
    assert build_row({"age": 30, "name": "Al"}, options) == "30,Al"


@pytest.mark.parametrize(
    "value, expected",
    [
        (1e-7, "1e-7"),
        (1e-6, "0.000001"),
        (0.00001, "0.00001"),
        (123456.789, "123456.789"),
        (1e16, "10000000000000000"),
        (1e21, "1e+21"),
        (1.5e300, "1.5e+300"),
        (-2.5e-9, "-2.5e-9"),
        (-0.0, "0"),
        (10.0, "10"),
    ],
)
def test_number_text_follows_script_number_layout(value, expected):
    assert number_text(value) == expected


@pytest.fixture(params=[
    ("en_US.UTF-8", "1,234,567.891", "2.5"),
    ("de_DE.UTF-8", "1.234.567,891", "2,5"),
])
def grouping_locale(request):
    name, grouped, short = request.param
    saved = locale.setlocale(locale.LC_NUMERIC)
    try:
        locale.setlocale(locale.LC_NUMERIC, name)
    except locale.Error:
        pytest.skip(f"locale {name} is not installed")
    try:
        yield grouped, short
    finally:
        locale.setlocale(locale.LC_NUMERIC, saved)


def test_locale_rendering_groups_digits(grouping_locale):
    grouped, short = grouping_locale
    options = opts(decimalseparator="locale")
    assert format_field(1234567.8912, options) == grouped
    assert format_field(2.5, options) == short
    assert format_field(1234567, options) == "1234567"

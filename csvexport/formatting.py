"""
Field, header and row rendering.

A field is rendered by the first matching rule, in this order:

1. locale-aware number text, when decimalseparator is "locale" and the value
   is fractional
2. separator substitution, when decimalseparator is anything but "." and the
   value is fractional
3. quoting and escaping for text; this always returns, so text (even "")
   never reaches the rules below
4. empty string for falsy values, when nullToEmptyString is set
5. TRUE / FALSE for booleans
6. the default text of the value

Rule 3 sitting above rule 4 means that with nullToEmptyString enabled an
empty string renders as "" wrapped in quotes while None renders as nothing.
"""

from __future__ import annotations

import locale
import math
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from . import rules
from .models import CsvOptions

Value = Union[None, bool, int, float, Decimal, str]
Record = Union[Mapping[str, Value], Sequence[Tuple[str, Value]]]

# Decimal exponent range printed without scientific notation, as in ECMAScript
_FIXED_MIN_EXPONENT = -6
_FIXED_MAX_EXPONENT = 21


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def is_float(value: Any) -> bool:
    """True for numbers with a fractional part, and for infinities. NaN is excluded."""
    if not is_number(value) or _is_nan(value):
        return False
    return not _is_finite(value) or value % 1 != 0


def _is_falsy(value: Any) -> bool:
    if value is None or value is False:
        return True
    if is_number(value):
        return _is_nan(value) or value == 0
    return False


def _float_text(value: float) -> str:
    """
    Shortest round-trip digits laid out the way ECMAScript Number#toString does:
    plain notation for exponents in (-6, 21], otherwise d.ddde+n.
    """
    if value == 0:
        return "0"
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(map(str, digits))
    prefix = "-" if sign else ""
    k = len(digits)
    n = exponent + k

    if k <= n <= _FIXED_MAX_EXPONENT:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= _FIXED_MAX_EXPONENT:
        return prefix + digits[:n] + "." + digits[n:]
    if _FIXED_MIN_EXPONENT < n <= 0:
        return prefix + "0." + "0" * -n + digits

    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    e = n - 1
    return f"{prefix}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def number_text(value: Any) -> str:
    """Default decimal text of a number."""
    if isinstance(value, Decimal):
        if value.is_nan():
            return "NaN"
        if value.is_infinite():
            return "-Infinity" if value < 0 else "Infinity"
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "-Infinity" if value < 0 else "Infinity"
        return _float_text(value)
    return str(value)


def locale_number_text(value: Any) -> str:
    """Number text grouped per the current LC_NUMERIC, at most 3 fraction digits."""
    if not _is_finite(value):
        return "-∞" if value < 0 else "∞"
    text = locale.format_string("%.3f", value, grouping=True)
    point = locale.localeconv()["decimal_point"]
    if point and point in text:
        text = text.rstrip("0").rstrip(point)
    return text


def _format_text(text: str, options: CsvOptions) -> str:
    quote = options.quote_char
    escaped = text.replace(quote, quote + quote)
    if (
        options.quote_strings
        or options.field_separator in escaped
        or "\n" in escaped
        or "\r" in escaped
    ):
        return quote + escaped + quote
    return escaped


def format_field(value: Value, options: CsvOptions) -> str:
    separator = options.decimal_separator

    if separator == rules.LOCALE_DECIMAL_SEPARATOR and is_float(value):
        return locale_number_text(value)

    if separator != rules.DEFAULT_DECIMAL_SEPARATOR and is_float(value):
        return number_text(value).replace(".", separator)

    if isinstance(value, str):
        return _format_text(value, options)

    if options.null_to_empty_string and _is_falsy(value):
        return ""

    if isinstance(value, bool):
        return rules.TRUE_TEXT if value else rules.FALSE_TEXT

    if value is None:
        return rules.NULL_TEXT
    if is_number(value):
        return number_text(value)
    return str(value)


def build_header(headers: Sequence[str], separator: str) -> Optional[str]:
    """Header line without terminator, or None when there are no headers."""
    if not headers:
        return None
    return separator.join(headers)


def record_entries(record: Record) -> Iterable[Tuple[str, Value]]:
    if isinstance(record, Mapping):
        return record.items()
    return record


def lookup(record: Record, name: str) -> Value:
    """Value stored under name; a name the record lacks reads as None."""
    if isinstance(record, Mapping):
        return record.get(name)
    for key, value in record:
        if key == name:
            return value
    return None


def build_row(record: Record, options: CsvOptions) -> str:
    if options.selects_by_header:
        values = [lookup(record, name) for name in options.headers]
    else:
        values = [value for _, value in record_entries(record)]
    return options.field_separator.join(format_field(value, options) for value in values)

"""
Formatting helpers callable from value tags.

Every helper is total: bad input falls back to the raw value or an empty
string rather than raising, so one odd field never aborts a proposal.
"""

import json
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional
from urllib.parse import quote

from porter.contexts.templating.scope import UNDEFINED
from porter.utils.text_processing import (
    capitalize_first,
    format_number,
    parse_leading_float,
    to_number,
)
from porter.utils.timestamp import parse_date

# Characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"

CURRENCY_SYMBOL = "$"
CENT = Decimal("0.01")


def to_display(value: Any) -> str:
    """
    Render a scalar or structure as template output text.

    Booleans are lower-case, integral floats drop ".0", non-finite floats use
    the JSON-script spellings (Infinity, NaN), dicts and lists are compact
    JSON. None renders empty, like an unresolved path.
    """
    if value is UNDEFINED or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return format_number(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def encode_uri(value: Any) -> str:
    """Percent-encode a value for use inside a URL; falsy values encode to ""."""
    if not value:
        return ""
    return quote(to_display(value), safe=URI_COMPONENT_SAFE)


def _coerce_amount(amount: Any) -> Optional[Decimal]:
    if isinstance(amount, bool):
        return None
    if isinstance(amount, int):
        return Decimal(amount)
    number = parse_leading_float(amount) if isinstance(amount, str) else amount
    if not isinstance(number, float) or not math.isfinite(number):
        return None
    # repr keeps the shortest decimal form, so 0.005 rounds up rather than down
    return Decimal(repr(number))


def format_currency(amount: Any) -> str:
    """
    Format an amount as US dollars with 0-2 fraction digits.

    Examples:
        >>> format_currency(2500)
        '$2,500'
        >>> format_currency("1234.5")
        '$1,234.5'
        >>> format_currency("TBD")
        'TBD'
    """
    if amount is UNDEFINED or amount is None:
        return ""

    number = _coerce_amount(amount)
    if number is None:
        return to_display(amount)

    # Cents must fit in the working precision however large the amount
    with localcontext() as context:
        context.prec = max(context.prec, number.adjusted() + 4)
        rounded = number.quantize(CENT, rounding=ROUND_HALF_UP)
        sign = "-" if rounded < 0 else ""
        whole, _, fraction = f"{abs(rounded):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    text = f"{int(whole):,}"
    if fraction:
        text += f".{fraction}"
    return f"{sign}{CURRENCY_SYMBOL}{text}"


def format_date(value: Any) -> str:
    """
    Format a date string in long form ("October 15, 2026").

    Unparseable values come back unchanged.
    """
    if not value:
        return ""
    if not isinstance(value, str):
        return to_display(value)

    parsed = parse_date(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def capitalize(value: Any) -> str:
    """Upper-case the first letter of a value's text."""
    if not value:
        return ""
    return capitalize_first(to_display(value))


def pluralize(count: Any, singular: str, plural: Optional[str] = None) -> str:
    """
    Build a count phrase such as "1 Guest" or "4 Guests".

    Non-numeric counts are treated as 0. The plural defaults to singular + "s".
    """
    number = float(count) if isinstance(count, bool) else to_number(count)
    if number is None or not math.isfinite(number):
        number = 0.0
    word = singular if number == 1 else (plural or f"{singular}s")
    return f"{format_number(number)} {word}"


def default_value(value: Any, fallback: str) -> str:
    """Use the fallback only when the value is undefined, None or empty."""
    if value is UNDEFINED or value is None or value == "":
        return fallback
    return to_display(value)


def inspect(value: Any) -> str:
    """Indented JSON dump of any value, for template debugging."""
    if value is UNDEFINED:
        return ""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)

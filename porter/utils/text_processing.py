"""
Text processing utilities shared by the intake and templating contexts.
"""

import json
import re
from typing import Any, Optional

# Leading numeric prefix, mirroring the lenient "parse what you can" float parsing
# that trip data was originally authored against ("12.5 pp" -> 12.5)
LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def has_alphanumeric(text: Any) -> bool:
    """
    Check whether text contains at least one letter or digit.

    Used to detect empty or emoji-only display text.

    Examples:
        >>> has_alphanumeric("🌴 Beach day")
        True
        >>> has_alphanumeric("🌴🍹")
        False
    """
    if not isinstance(text, str):
        return False
    return any(ch.isalnum() for ch in text)


def capitalize_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def title_case_slug(slug: str, separator: str = "-") -> str:
    """
    Turn a hyphenated slug into a display label.

    Examples:
        >>> title_case_slug("port-louis")
        'Port Louis'
        >>> title_case_slug("st-maarten")
        'St Maarten'
    """
    return " ".join(capitalize_first(word) for word in slug.split(separator))


def looks_like_json(text: Any) -> bool:
    """
    Check whether a string is a serialized JSON array or object.

    Only bracketed/braced strings that actually parse count, so prose that
    happens to start with "[" is left alone.
    """
    if not isinstance(text, str):
        return False
    trimmed = text.strip()
    bracketed = trimmed.startswith("[") and trimmed.endswith("]")
    braced = trimmed.startswith("{") and trimmed.endswith("}")
    if not (bracketed or braced):
        return False
    try:
        json.loads(trimmed)
    except ValueError:
        return False
    return True


def parse_leading_float(text: str) -> Optional[float]:
    """
    Parse the numeric prefix of a string, returning None when there is none.

    Examples:
        >>> parse_leading_float("2500")
        2500.0
        >>> parse_leading_float("12.5 per person")
        12.5
        >>> parse_leading_float("TBD") is None
        True
    """
    match = LEADING_FLOAT.match(text)
    if not match:
        return None
    return float(match.group(0))


def to_number(value: Any) -> Optional[float]:
    """
    Strict numeric coercion for numbers and numeric strings.

    Whitespace-only and empty strings count as 0. Booleans, None and
    non-numeric strings return None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0.0
        try:
            return float(stripped)
        except ValueError:
            return None
    return None


def format_number(value: float) -> str:
    """Render a number without a trailing ".0" for integral values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

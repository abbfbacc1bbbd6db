"""Unit tests for template formatting helpers."""

import pytest

from porter.contexts.templating.helpers import (
    capitalize,
    default_value,
    encode_uri,
    format_currency,
    format_date,
    inspect,
    pluralize,
    to_display,
)
from porter.contexts.templating.scope import UNDEFINED


@pytest.mark.unit
@pytest.mark.parametrize(
    "amount, expected",
    [
        (2500, "$2,500"),
        (1234.567, "$1,234.57"),
        (0.005, "$0.01"),
        ("1234.5", "$1,234.5"),
        ("12.5 pp", "$12.5"),
        (-50, "-$50"),
        (0, "$0"),
        ("TBD", "TBD"),
        (True, "true"),
        (None, ""),
        (UNDEFINED, ""),
    ],
)
def test_format_currency(amount, expected):
    """Whole dollars drop cents; half-cents round up; non-numbers pass through."""
    assert format_currency(amount) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "amount",
    [1e30, "1e30", 10**30],
)
def test_format_currency_large_amounts(amount):
    """Amounts beyond the default decimal precision still format."""
    assert format_currency(amount) == "$1" + ",000" * 10


@pytest.mark.unit
def test_format_currency_out_of_range():
    """Overflowing text and non-finite floats pass through as display text."""
    assert format_currency("1e400") == "1e400"
    assert format_currency(float("inf")) == "Infinity"
    assert format_currency(-(10**40)) == "-$10" + ",000" * 13


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("2026-10-15", "October 15, 2026"),
        ("2026-05-03T09:30:00Z", "May 3, 2026"),
        ("Oct 15, 2026", "October 15, 2026"),
        ("sometime in May", "sometime in May"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_date(value, expected):
    """ISO and long-form dates format in long form; the rest comes back as-is."""
    assert format_date(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "count, singular, plural, expected",
    [
        (1, "Guest", "Guests", "1 Guest"),
        (4, "Guest", "Guests", "4 Guests"),
        ("1", "Guest", "Guests", "1 Guest"),
        (0, "Guest", "Guests", "0 Guests"),
        ("abc", "Guest", "Guests", "0 Guests"),
        (None, "Guest", "Guests", "0 Guests"),
        (2.5, "night", None, "2.5 nights"),
    ],
)
def test_pluralize(count, singular, plural, expected):
    """Exactly one takes the singular; non-numeric counts are 0."""
    assert pluralize(count, singular, plural) == expected


@pytest.mark.unit
def test_encode_uri_matches_uri_component_rules():
    """Unreserved marks stay literal; spaces and commas are escaped."""
    assert encode_uri("it's (ok)!") == "it's%20(ok)!"
    assert encode_uri("Port Louis, Mauritius") == "Port%20Louis%2C%20Mauritius"
    assert encode_uri("") == ""
    assert encode_uri(UNDEFINED) == ""


@pytest.mark.unit
def test_capitalize_only_touches_first_letter():
    """The rest of the text keeps its case."""
    assert capitalize("proposal") == "Proposal"
    assert capitalize("eXtra") == "EXtra"
    assert capitalize(None) == ""


@pytest.mark.unit
def test_default_value():
    """Zero and False are real values; only missing or empty text falls back."""
    assert default_value(UNDEFINED, "TBD") == "TBD"
    assert default_value("", "TBD") == "TBD"
    assert default_value(0, "TBD") == "0"
    assert default_value(False, "TBD") == "false"


@pytest.mark.unit
def test_to_display_and_inspect():
    """Compact JSON for plain tags, indented JSON for inspect."""
    assert to_display({"a": [1, 2]}) == '{"a":[1,2]}'
    assert to_display("Réunion") == "Réunion"
    assert to_display(float("inf")) == "Infinity"
    assert to_display(float("-inf")) == "-Infinity"
    assert to_display(float("nan")) == "NaN"
    assert to_display(None) == ""
    assert inspect([1]) == "[\n  1\n]"
    assert inspect(UNDEFINED) == ""

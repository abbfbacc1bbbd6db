"""Unit tests for tag parsing and scope resolution."""

import pytest

from porter.contexts.templating.scope import UNDEFINED, Scope, get_value, is_truthy
from porter.contexts.templating.tags import TagKind, parse_lookup, parse_tag


class TestParseTag:
    """Classification of `{{...}}` contents."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "content, kind, expression",
        [
            ("#if meta.phase", TagKind.IF, "meta.phase"),
            ("#unless paid", TagKind.UNLESS, "paid"),
            ("#each bookings", TagKind.EACH, "bookings"),
            ("#with (lookup tiers selected)", TagKind.WITH, "(lookup tiers selected)"),
            ("/if", TagKind.CLOSE, "if"),
            ("else", TagKind.ELSE, ""),
            ("timestamp", TagKind.TIMESTAMP, ""),
            ("formatCurrency budget.total", TagKind.FORMAT_CURRENCY, "budget.total"),
            ("encodeUri meta.destination", TagKind.ENCODE_URI, "meta.destination"),
            ("inspect meta", TagKind.INSPECT, "meta"),
            ("meta.title", TagKind.VARIABLE, "meta.title"),
        ],
    )
    def test_kinds(self, content, kind, expression):
        """Each recognized form maps to its TagKind and expression."""
        tag = parse_tag(content)
        assert tag.kind is kind
        assert tag.expression == expression

    @pytest.mark.unit
    def test_pluralize_args(self):
        """The plural form is optional."""
        assert parse_tag('pluralize travelers.count "Guest" "Guests"').args == ("Guest", "Guests")
        assert parse_tag('pluralize nights "night"').args == ("night", None)

    @pytest.mark.unit
    def test_default_args(self):
        """The fallback literal is captured without quotes."""
        tag = parse_tag('default flights.outbound.airline "TBD"')
        assert tag.kind is TagKind.DEFAULT
        assert tag.expression == "flights.outbound.airline"
        assert tag.args == ("TBD",)

    @pytest.mark.unit
    def test_helper_name_without_argument_is_a_variable(self):
        """A bare helper name is looked up as a path."""
        assert parse_tag("capitalize").kind is TagKind.VARIABLE

    @pytest.mark.unit
    def test_literal_round_trips_content(self):
        """Literal echo reproduces the tag text."""
        assert parse_tag("#if x").literal == "{{#if x}}"

    @pytest.mark.unit
    def test_parse_lookup(self):
        """Only the parenthesized lookup form splits into two paths."""
        assert parse_lookup("(lookup tiers selectedTier)") == ("tiers", "selectedTier")
        assert parse_lookup("meta") is None


class TestScope:
    """Dot-path lookup and the one-level fallback."""

    @pytest.mark.unit
    def test_get_value_paths(self):
        """Dicts, list indices and lengths."""
        data = {"days": [{"title": "Arrive"}], "name": "Ana"}
        assert get_value(data, "days.0.title") == "Arrive"
        assert get_value(data, "days.length") == 1
        assert get_value(data, "name.length") == 3
        assert get_value(data, "this") is data
        assert get_value(data, "days.5") is UNDEFINED
        assert get_value(data, "name.first") is UNDEFINED
        assert get_value({"meta": None}, "meta.phase") is UNDEFINED

    @pytest.mark.unit
    def test_explicit_none_is_not_undefined(self):
        """A key present with None is a value, not a miss."""
        assert get_value({"x": None}, "x") is None

    @pytest.mark.unit
    def test_resolve_falls_back_once(self):
        """Child, then parent, and never the grandparent."""
        root = {"currency": "USD", "name": "root"}
        day = {"title": "Day 1"}
        scope = Scope(root).enter(day)
        assert scope.resolve("title") == "Day 1"
        assert scope.resolve("currency") == "USD"
        assert scope.enter({}).resolve("name") is UNDEFINED

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            (UNDEFINED, False),
            (None, False),
            (False, False),
            ("", False),
            ([], False),
            (0, True),
            ({}, True),
            ("0", True),
            ([0], True),
        ],
    )
    def test_is_truthy(self, value, expected):
        """Zero and empty dicts are truthy."""
        assert is_truthy(value) is expected

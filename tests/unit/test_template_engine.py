"""Unit tests for the proposal template interpreter."""

import re

import pytest

from porter.contexts.templating.engine import (
    TemplateEngine,
    find_else,
    find_matching_close,
    render_template,
)


class TestConditionals:
    """{{#if}} / {{else}} / {{#unless}} blocks."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data, expected",
        [
            ({"x": True}, "A"),
            ({"x": "yes"}, "A"),
            ({"x": 0}, "A"),
            ({"x": 0.0}, "A"),
            ({"x": {}}, "A"),
            ({"x": [1]}, "A"),
            ({"x": False}, "B"),
            ({"x": ""}, "B"),
            ({"x": None}, "B"),
            ({"x": []}, "B"),
            ({}, "B"),
        ],
    )
    def test_if_else_truthiness(self, data, expected):
        """Only undefined, None, False, "" and [] are falsy."""
        assert render_template("{{#if x}}A{{else}}B{{/if}}", data) == expected

    @pytest.mark.unit
    def test_if_without_else_renders_nothing_when_falsy(self):
        """A falsy #if with no else branch renders nothing."""
        assert render_template("[{{#if x}}A{{/if}}]", {}) == "[]"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "flags, expected",
        [
            ({"a": True, "b": True, "c": True}, "123"),
            ({"a": True, "b": True, "c": False}, "12x"),
            ({"a": True, "b": False, "c": True}, "1y"),
            ({"a": False, "b": True, "c": True}, "z"),
        ],
    )
    def test_nested_if_three_levels(self, flags, expected):
        """Same-kind nesting keeps each else with its own block."""
        template = (
            "{{#if a}}1{{#if b}}2{{#if c}}3{{else}}x{{/if}}{{else}}y{{/if}}{{else}}z{{/if}}"
        )
        assert render_template(template, flags) == expected

    @pytest.mark.unit
    def test_else_inside_nested_each_belongs_to_inner_if(self):
        """An else nested in an #each body does not split the outer #if."""
        template = "{{#if show}}{{#each items}}{{#if this}}Y{{else}}N{{/if}}{{/each}}{{else}}hidden{{/if}}"
        assert render_template(template, {"show": True, "items": [1, 0]}) == "YY"
        assert render_template(template, {"show": False, "items": [1]}) == "hidden"

    @pytest.mark.unit
    def test_unless(self):
        """#unless renders its body only when the value is falsy."""
        template = "{{#unless paid}}Balance due{{/unless}}"
        assert render_template(template, {"paid": False}) == "Balance due"
        assert render_template(template, {"paid": True}) == ""


class TestEach:
    """{{#each}} iteration over lists and dicts."""

    @pytest.mark.unit
    def test_each_scalars_index_and_this(self):
        """Scalars inject {{@index}} and {{this}}."""
        template = "{{#each arr}}{{@index}}:{{this}}{{/each}}"
        assert render_template(template, {"arr": ["a", "b", "c"]}) == "0:a1:b2:c"

    @pytest.mark.unit
    def test_each_dict_key_and_value(self):
        """Dict entries inject {{@key}} in insertion order."""
        template = "{{#each prices}}{{@key}}={{this}};{{/each}}"
        assert render_template(template, {"prices": {"gold": 1, "silver": 2.5}}) == "gold=1;silver=2.5;"

    @pytest.mark.unit
    def test_each_object_items_fall_back_to_parent(self):
        """Object items become the scope; misses fall back one level."""
        template = "{{#each days}}{{title}}-{{currency}} {{/each}}"
        data = {
            "currency": "USD",
            "days": [{"title": "A"}, {"title": "B", "currency": "EUR"}],
        }
        assert render_template(template, data) == "A-USD B-EUR "

    @pytest.mark.unit
    def test_fallback_is_only_one_level_deep(self):
        """The root is not consulted from a doubly nested scope."""
        template = "{{#each outer}}{{#each inner}}[{{name}}]{{/each}}{{/each}}"
        data = {"name": "root", "outer": [{"inner": [{}]}]}
        assert render_template(template, data) == "[]"

    @pytest.mark.unit
    def test_explicit_none_blocks_parent_fallback(self):
        """Only undefined values fall back; an explicit None renders empty."""
        template = "{{#each days}}[{{note}}]{{/each}}"
        data = {"note": "root note", "days": [{"note": None}, {}]}
        assert render_template(template, data) == "[][root note]"

    @pytest.mark.unit
    def test_each_over_non_collection_renders_nothing(self):
        """Numbers, strings and missing values produce no output."""
        template = "{{#each x}}item{{/each}}"
        assert render_template(template, {"x": 5}) == ""
        assert render_template(template, {"x": "abc"}) == ""
        assert render_template(template, {}) == ""


class TestWith:
    """{{#with}} scope changes, including the lookup form."""

    @pytest.mark.unit
    def test_with_path(self):
        """A truthy value becomes the scope, with the enclosing scope as fallback."""
        template = "{{#with meta}}{{title}} for {{client}}{{/with}}"
        data = {"meta": {"title": "Mauritius"}, "client": "Ana"}
        assert render_template(template, data) == "Mauritius for Ana"

    @pytest.mark.unit
    def test_with_lookup(self):
        """(lookup obj key) resolves obj[key] with key taken from the data."""
        template = "{{#with (lookup tiers selected)}}{{name}}{{/with}}"
        data = {"tiers": {"gold": {"name": "Gold"}, "silver": {"name": "Silver"}}, "selected": "gold"}
        assert render_template(template, data) == "Gold"

    @pytest.mark.unit
    def test_with_lookup_list_index(self):
        """A numeric key indexes a list."""
        template = "{{#with (lookup options pick)}}{{name}}{{/with}}"
        data = {"options": [{"name": "Basic"}, {"name": "Plus"}], "pick": 1}
        assert render_template(template, data) == "Plus"

    @pytest.mark.unit
    def test_with_falsy_renders_nothing(self):
        """Missing and falsy values skip the body."""
        assert render_template("{{#with meta}}x{{/with}}", {}) == ""
        assert render_template("{{#with (lookup tiers nope)}}x{{/with}}", {"tiers": {}}) == ""


class TestLeniency:
    """Malformed templates degrade instead of raising."""

    @pytest.mark.unit
    def test_unmatched_if_is_literal(self):
        """An opener without a closer is echoed and the rest still renders."""
        template = "{{#if x}}Hello {{name}}"
        assert render_template(template, {"x": True, "name": "Ana"}) == "{{#if x}}Hello Ana"

    @pytest.mark.unit
    def test_stray_closer_and_else_are_literal(self):
        """Closers and else outside a block are echoed."""
        assert render_template("A{{/if}}B", {}) == "A{{/if}}B"
        assert render_template("A{{else}}B", {}) == "A{{else}}B"

    @pytest.mark.unit
    def test_unterminated_tag_echoes_rest(self):
        """A {{ without }} echoes the remaining text."""
        assert render_template("Hi {{name", {"name": "Ana"}) == "Hi {{name"

    @pytest.mark.unit
    def test_unknown_tag_is_a_path(self):
        """Unrecognized tags fall through to path lookup."""
        assert render_template("[{{no such thing}}]", {}) == "[]"

    @pytest.mark.unit
    def test_else_prefixed_names_are_values(self):
        """Only the exact else marker is special; elsewhere is a field."""
        assert render_template("{{elsewhere}}", {"elsewhere": "Rodrigues"}) == "Rodrigues"
        assert render_template("[{{else }}]", {}) == "[{{else}}]"


class TestValues:
    """Plain value tags and helper tags."""

    @pytest.mark.unit
    def test_display_forms(self):
        """Booleans, integral floats and missing values."""
        data = {"yes": True, "no": False, "n": 2.0, "f": 2.5, "i": 3}
        assert render_template("{{yes}} {{no}} {{n}} {{f}} {{i}} [{{missing}}]", data) == (
            "true false 2 2.5 3 []"
        )

    @pytest.mark.unit
    def test_paths_length_and_index(self):
        """Dot-paths index lists and read lengths."""
        data = {"items": ["a", "b", "c"], "meta": {"title": "Trip"}}
        assert render_template("{{items.length}} {{items.1}} {{meta.title.length}}", data) == "3 b 4"

    @pytest.mark.unit
    def test_object_dump_default_and_disabled(self):
        """Objects dump as compact JSON unless dump_objects is off."""
        data = {"meta": {"a": 1, "b": [1, 2]}}
        assert render_template("{{meta}}", data) == '{"a":1,"b":[1,2]}'
        assert TemplateEngine(dump_objects=False).render("[{{meta}}]", data) == "[]"

    @pytest.mark.unit
    def test_inspect_helper(self):
        """{{inspect path}} dumps indented JSON regardless of dump_objects."""
        engine = TemplateEngine(dump_objects=False)
        assert engine.render("{{inspect meta}}", {"meta": {"a": 1}}) == '{\n  "a": 1\n}'

    @pytest.mark.unit
    def test_helpers_in_templates(self):
        """Helpers resolve their path argument against the scope."""
        data = {
            "price": 2500,
            "guests": 4,
            "phase": "proposal",
            "dest": "Port Louis, Mauritius",
            "day": "2026-10-15",
        }
        template = (
            '{{formatCurrency price}}|{{pluralize guests "Guest" "Guests"}}|{{capitalize phase}}|'
            "{{encodeUri dest}}|{{formatDate day}}"
        )
        assert render_template(template, data) == (
            "$2,500|4 Guests|Proposal|Port%20Louis%2C%20Mauritius|October 15, 2026"
        )

    @pytest.mark.unit
    def test_pluralize_singular_and_default_plural(self):
        """Count 1 takes the singular; the plural defaults to singular + s."""
        assert render_template('{{pluralize n "Guest" "Guests"}}', {"n": 1}) == "1 Guest"
        assert render_template('{{pluralize n "night"}}', {"n": 3}) == "3 nights"

    @pytest.mark.unit
    def test_default_helper(self):
        """The fallback applies to undefined, None and "" only."""
        template = '{{default airline "TBD"}}'
        assert render_template(template, {}) == "TBD"
        assert render_template(template, {"airline": None}) == "TBD"
        assert render_template(template, {"airline": ""}) == "TBD"
        assert render_template(template, {"airline": 0}) == "0"
        assert render_template(template, {"airline": "Air Mauritius"}) == "Air Mauritius"

    @pytest.mark.unit
    def test_timestamp(self):
        """{{timestamp}} renders the current UTC time."""
        output = render_template("{{timestamp}}", {})
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} UTC", output)


@pytest.mark.unit
def test_find_matching_close_counts_depth():
    """The closer returned balances nested same-kind openers."""
    template = "{{#if a}}x{{#if b}}y{{/if}}z{{/if}}tail"
    start = len("{{#if a}}")
    close = find_matching_close(template, "{{#if ", "{{/if}}", start)
    assert template[close:] == "{{/if}}tail"
    assert find_matching_close("{{#if a}}x", "{{#if ", "{{/if}}", start) == -1


@pytest.mark.unit
def test_find_else_ignores_nested_blocks():
    """Only a depth-zero else is returned."""
    body = "a{{#if b}}1{{else}}2{{/if}}{{else}}c"
    assert body[find_else(body):] == "{{else}}c"
    assert find_else("{{#each x}}{{else}}{{/each}}") == -1

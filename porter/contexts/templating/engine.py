"""
Proposal template interpreter.

Evaluates the fixed `{{...}}` tag vocabulary against normalized trip data:

- Blocks: {{#if}}/{{else}}/{{/if}}, {{#unless}}/{{/unless}},
  {{#each}}/{{/each}}, {{#with}}/{{/with}}
- Helpers: timestamp, encodeUri, formatCurrency, formatDate, capitalize,
  pluralize, default, inspect
- Anything else: dot-path lookup with one level of parent fallback

The interpreter is lenient by contract. Unmatched openers and stray closers are
echoed literally, unresolved paths render as "", and nothing here raises.

Examples:
    >>> render_template("{{#each tags}}{{@index}}:{{this}}{{/each}}", {"tags": ["a", "b"]})
    '0:a1:b'
    >>> render_template("{{#if vip}}VIP{{else}}Guest{{/if}}", {"vip": 0})
    'VIP'
"""

import re
from typing import Any, Callable, Dict

from porter.contexts.templating import helpers
from porter.contexts.templating.logger import log_unmatched_block
from porter.contexts.templating.scope import UNDEFINED, Scope, is_truthy
from porter.contexts.templating.tags import (
    BLOCK_DELIMITERS,
    PATTERNS,
    Tag,
    TagKind,
    parse_lookup,
    parse_tag,
)
from porter.utils.timestamp import render_timestamp

# Tokens that move the {{else}} search in or out of a nested block
ELSE_SCAN = re.compile(r"\{\{(?:(?P<open>#if |#each )|(?P<close>/if\}\}|/each\}\})|(?P<else>else\}\}))")

# Single-path helpers: tag kind -> formatter applied to the resolved value
PATH_FORMATTERS: Dict[TagKind, Callable[[Any], str]] = {
    TagKind.ENCODE_URI: helpers.encode_uri,
    TagKind.FORMAT_CURRENCY: helpers.format_currency,
    TagKind.FORMAT_DATE: helpers.format_date,
    TagKind.CAPITALIZE: helpers.capitalize,
    TagKind.INSPECT: helpers.inspect,
}


def find_matching_close(template: str, open_tag: str, close_tag: str, start: int) -> int:
    """
    Find the closer that balances an already-consumed opener.

    Scans forward from `start`, counting nested openers of the same kind.

    Args:
        template: Full template text
        open_tag: Literal opener prefix (e.g., "{{#if ")
        close_tag: Literal closer (e.g., "{{/if}}")
        start: Position just after the opener

    Returns:
        Index of the depth-zero closer, or -1 when the opener is unbalanced
    """
    depth = 1
    pos = start

    while pos < len(template):
        next_open = template.find(open_tag, pos)
        next_close = template.find(close_tag, pos)

        if next_close == -1:
            return -1

        if next_open != -1 and next_open < next_close:
            depth += 1
            pos = next_open + len(open_tag)
        else:
            depth -= 1
            if depth == 0:
                return next_close
            pos = next_close + len(close_tag)

    return -1


def find_else(block: str) -> int:
    """
    Locate the {{else}} that belongs to this #if body.

    Only an {{else}} at nesting depth zero counts; nested #if and #each blocks
    keep their own.

    Returns:
        Index of the {{else}} tag, or -1
    """
    depth = 0
    for match in ELSE_SCAN.finditer(block):
        if match.group("open"):
            depth += 1
        elif match.group("close"):
            depth -= 1
        elif depth == 0:
            return match.start()
    return -1


class TemplateEngine:
    """
    Interpreter for proposal templates.

    Holds no per-render state, so one engine can serve any number of renders,
    including concurrent ones.

    Args:
        dump_objects: Render dict/list values of plain variable tags as compact
            JSON (the historical behaviour). When False they render as "" and
            {{inspect path}} is the only way to dump structure.
    """

    def __init__(self, dump_objects: bool = True):
        self.dump_objects = dump_objects

    def render(self, template: str, data: Any) -> str:
        """Render template text against a root context."""
        return self._process(template, Scope(data))

    # =========================================================================
    # Interpretation
    # =========================================================================

    def _process(self, template: str, scope: Scope) -> str:
        parts = []
        pos = 0

        while pos < len(template):
            tag_start = template.find(PATTERNS.OPEN, pos)
            if tag_start == -1:
                parts.append(template[pos:])
                break

            parts.append(template[pos:tag_start])

            tag_end = template.find(PATTERNS.CLOSE, tag_start)
            if tag_end == -1:
                parts.append(template[tag_start:])
                break

            tag = parse_tag(template[tag_start + len(PATTERNS.OPEN):tag_end].strip())
            pos = tag_end + len(PATTERNS.CLOSE)

            if tag.is_block:
                open_tag, close_tag = BLOCK_DELIMITERS[tag.kind]
                close_pos = find_matching_close(template, open_tag, close_tag, pos)
                if close_pos == -1:
                    log_unmatched_block(tag.content)
                    parts.append(tag.literal)
                    continue

                body = template[pos:close_pos]
                pos = close_pos + len(close_tag)
                parts.append(self._render_block(tag, body, scope))

            elif tag.kind in (TagKind.CLOSE, TagKind.ELSE):
                parts.append(tag.literal)

            else:
                parts.append(self._render_value(tag, scope))

        return "".join(parts)

    def _render_block(self, tag: Tag, body: str, scope: Scope) -> str:
        if tag.kind is TagKind.IF:
            return self._render_if(tag, body, scope)
        if tag.kind is TagKind.UNLESS:
            if is_truthy(scope.resolve(tag.expression)):
                return ""
            return self._process(body, scope)
        if tag.kind is TagKind.EACH:
            return self._render_each(tag, body, scope)
        return self._render_with(tag, body, scope)

    def _render_if(self, tag: Tag, body: str, scope: Scope) -> str:
        else_pos = find_else(body)
        if is_truthy(scope.resolve(tag.expression)):
            branch = body if else_pos == -1 else body[:else_pos]
        elif else_pos != -1:
            branch = body[else_pos + len(PATTERNS.ELSE_TAG):]
        else:
            return ""
        return self._process(branch, scope)

    def _render_each(self, tag: Tag, body: str, scope: Scope) -> str:
        collection = scope.resolve(tag.expression)

        if isinstance(collection, list):
            entries = [(str(index), index, item) for index, item in enumerate(collection)]
        elif isinstance(collection, dict):
            entries = [(str(key), index, value) for index, (key, value) in enumerate(collection.items())]
        else:
            return ""

        parts = []
        for key, index, item in entries:
            item_body = body.replace("{{@index}}", str(index)).replace("{{@key}}", key)
            if isinstance(item, (dict, list)):
                parts.append(self._process(item_body, scope.enter(item)))
            else:
                item_body = item_body.replace("{{this}}", helpers.to_display(item))
                parts.append(self._process(item_body, scope))
        return "".join(parts)

    def _render_with(self, tag: Tag, body: str, scope: Scope) -> str:
        lookup = parse_lookup(tag.expression)
        if lookup:
            obj_path, key_path = lookup
            value = _lookup(scope.resolve(obj_path), scope.resolve(key_path))
        else:
            value = scope.resolve(tag.expression)

        if not is_truthy(value):
            return ""
        return self._process(body, scope.enter(value))

    def _render_value(self, tag: Tag, scope: Scope) -> str:
        if tag.kind is TagKind.TIMESTAMP:
            return render_timestamp()

        if tag.kind in PATH_FORMATTERS:
            return PATH_FORMATTERS[tag.kind](scope.resolve(tag.expression))

        if tag.kind is TagKind.PLURALIZE:
            singular, plural = tag.args
            return helpers.pluralize(scope.resolve(tag.expression), singular, plural)

        if tag.kind is TagKind.DEFAULT:
            return helpers.default_value(scope.resolve(tag.expression), tag.args[0])

        value = scope.resolve(tag.expression)
        if isinstance(value, (dict, list)) and not self.dump_objects:
            return ""
        return helpers.to_display(value)


def _lookup(obj: Any, key: Any) -> Any:
    """obj[key] for the (lookup obj key) form; anything missing is UNDEFINED."""
    if key is UNDEFINED or key is None:
        return UNDEFINED
    if isinstance(obj, dict):
        return obj.get(helpers.to_display(key), UNDEFINED)
    if isinstance(obj, list):
        index = helpers.to_display(key)
        if index.isdigit() and int(index) < len(obj):
            return obj[int(index)]
    return UNDEFINED


def render_template(template: str, data: Any) -> str:
    """Render template text with a default TemplateEngine."""
    return TemplateEngine().render(template, data)

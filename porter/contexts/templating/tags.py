"""
Tag vocabulary for the proposal template language.

Tags are `{{...}}` directives. Each one is parsed into a `Tag` whose `kind` is a
`TagKind` member, so the interpreter dispatches over an enumeration rather than
over string prefixes.

Pattern classes follow the frozen-dataclass convention used for other pattern
constants in porter.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class TagKind(Enum):
    """Every form a `{{...}}` tag can take."""

    # Block openers
    IF = "if"
    UNLESS = "unless"
    EACH = "each"
    WITH = "with"

    # Structural markers that are only meaningful inside a block
    ELSE = "else"
    CLOSE = "close"

    # Helpers
    TIMESTAMP = "timestamp"
    ENCODE_URI = "encodeUri"
    FORMAT_CURRENCY = "formatCurrency"
    FORMAT_DATE = "formatDate"
    CAPITALIZE = "capitalize"
    PLURALIZE = "pluralize"
    DEFAULT = "default"
    INSPECT = "inspect"

    # Plain dot-path lookup
    VARIABLE = "variable"


BLOCK_KINDS = frozenset({TagKind.IF, TagKind.UNLESS, TagKind.EACH, TagKind.WITH})

# Helpers taking a single dot-path argument: `{{formatDate meta.lastUpdated}}`
PATH_HELPERS = {
    "encodeUri": TagKind.ENCODE_URI,
    "formatCurrency": TagKind.FORMAT_CURRENCY,
    "formatDate": TagKind.FORMAT_DATE,
    "capitalize": TagKind.CAPITALIZE,
    "inspect": TagKind.INSPECT,
}


@dataclass(frozen=True)
class TagPatterns:
    """Delimiters and argument patterns of the tag grammar."""

    OPEN: str = "{{"
    CLOSE: str = "}}"
    ELSE_TAG: str = "{{else}}"

    # {{pluralize travelers.count "Guest" "Guests"}} (plural form optional)
    PLURALIZE: str = r'^pluralize\s+(?P<path>[^\s]+)\s+"(?P<singular>[^"]+)"(?:\s+"(?P<plural>[^"]+)")?$'
    # {{default flights.outbound.airline "TBD"}}
    DEFAULT: str = r'^default\s+(?P<path>[^\s]+)\s+"(?P<fallback>[^"]+)"$'
    # {{#with (lookup tiers selectedTier)}}
    LOOKUP: str = r"^\(lookup\s+(?P<obj>[^\s]+)\s+(?P<key>[^\)]+)\)$"


PATTERNS = TagPatterns()
PLURALIZE_RE = re.compile(PATTERNS.PLURALIZE)
DEFAULT_RE = re.compile(PATTERNS.DEFAULT)
LOOKUP_RE = re.compile(PATTERNS.LOOKUP)

# Literal opener prefix and closer for each block kind, used for depth counting
BLOCK_DELIMITERS: Dict[TagKind, Tuple[str, str]] = {
    TagKind.IF: ("{{#if ", "{{/if}}"),
    TagKind.UNLESS: ("{{#unless ", "{{/unless}}"),
    TagKind.EACH: ("{{#each ", "{{/each}}"),
    TagKind.WITH: ("{{#with ", "{{/with}}"),
}


@dataclass(frozen=True)
class Tag:
    """
    A parsed `{{...}}` directive.

    Attributes:
        kind: What the tag does
        content: Trimmed text between the delimiters (used to echo it literally)
        expression: Block condition, helper path, or variable path
        args: Extra helper arguments (pluralize forms, default fallback, lookup key)
    """

    kind: TagKind
    content: str
    expression: str = ""
    args: Tuple[Optional[str], ...] = field(default_factory=tuple)

    @property
    def is_block(self) -> bool:
        return self.kind in BLOCK_KINDS

    @property
    def literal(self) -> str:
        """The tag as it would appear in source, for literal echoing."""
        return f"{PATTERNS.OPEN}{self.content}{PATTERNS.CLOSE}"


def parse_tag(content: str) -> Tag:
    """
    Classify the trimmed content of a `{{...}}` tag.

    Args:
        content: Text between `{{` and `}}`, already stripped

    Returns:
        Tag with its kind and arguments. Anything unrecognized is a VARIABLE.

    Examples:
        >>> parse_tag("#if meta.phase").kind
        <TagKind.IF: 'if'>
        >>> parse_tag('default airline "TBD"').args
        ('TBD',)
    """
    for kind in BLOCK_KINDS:
        keyword = f"#{kind.value} "
        if content.startswith(keyword):
            return Tag(kind, content, content[len(keyword):].strip())

    if content.startswith("/"):
        return Tag(TagKind.CLOSE, content, content[1:].strip())

    if content == "else":
        return Tag(TagKind.ELSE, content)

    if content == "timestamp":
        return Tag(TagKind.TIMESTAMP, content)

    name, _, rest = content.partition(" ")
    if name in PATH_HELPERS and rest.strip():
        return Tag(PATH_HELPERS[name], content, rest.strip())

    match = PLURALIZE_RE.match(content)
    if match:
        return Tag(
            TagKind.PLURALIZE,
            content,
            match.group("path"),
            (match.group("singular"), match.group("plural")),
        )

    match = DEFAULT_RE.match(content)
    if match:
        return Tag(TagKind.DEFAULT, content, match.group("path"), (match.group("fallback"),))

    return Tag(TagKind.VARIABLE, content, content)


def parse_lookup(expression: str) -> Optional[Tuple[str, str]]:
    """
    Split a `(lookup objPath keyPath)` expression into its two paths.

    Returns:
        (obj_path, key_path), or None when the expression is a plain dot-path
    """
    match = LOOKUP_RE.match(expression)
    if not match:
        return None
    return match.group("obj"), match.group("key").strip()

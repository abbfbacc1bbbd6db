"""
Scope resolution for template evaluation.

Paths resolve against the current scope first and then against exactly one
enclosing scope. Deeper ancestors are never consulted, so templates written
against this two-level rule keep rendering the same way.
"""

from dataclasses import dataclass
from typing import Any


class _Undefined:
    """Marker for a path that does not exist (distinct from an explicit None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def get_value(obj: Any, path: str) -> Any:
    """
    Walk a dot-path through dicts and lists.

    Rules:
    - Empty path or "this" is the object itself
    - Numeric segments index lists
    - "length" on a list or string is its length
    - Anything missing along the way yields UNDEFINED

    Examples:
        >>> get_value({"meta": {"phase": "proposal"}}, "meta.phase")
        'proposal'
        >>> get_value({"days": [{"title": "Arrive"}]}, "days.0.title")
        'Arrive'
        >>> get_value({"meta": None}, "meta.phase")
        UNDEFINED
    """
    if not path or path == "this":
        return obj

    current = obj
    for part in path.split("."):
        if current is UNDEFINED or current is None:
            return UNDEFINED
        if isinstance(current, dict):
            current = current.get(part, UNDEFINED)
        elif isinstance(current, (list, str)):
            if part == "length":
                current = len(current)
            elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
                current = current[int(part)]
            else:
                return UNDEFINED
        else:
            return UNDEFINED
    return current


def is_truthy(value: Any) -> bool:
    """
    Template truthiness.

    Falsy: UNDEFINED, None, False, "" and []. Everything else, including 0 and
    empty dicts, is truthy.
    """
    if value is UNDEFINED or value is None or value is False or value == "":
        return False
    if isinstance(value, list) and not value:
        return False
    return True


@dataclass(frozen=True)
class Scope:
    """
    An evaluation context plus its single parent fallback.

    Attributes:
        context: Data object that dot-paths resolve against
        parent: Immediately enclosing context, or None at the root
    """

    context: Any
    parent: Any = None

    def resolve(self, path: str) -> Any:
        """Look up a path here, then (only if undefined) in the parent."""
        value = get_value(self.context, path)
        if value is UNDEFINED and self.parent is not None:
            value = get_value(self.parent, path)
        return value

    def enter(self, context: Any) -> "Scope":
        """Open a child scope whose fallback is the current context."""
        return Scope(context, self.context)

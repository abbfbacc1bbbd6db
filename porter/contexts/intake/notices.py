"""
Redundant advisory notice removal.

Trips often carry the same "you'll book these yourself" guidance in two places
(for example the tour section description and a meta-level self-booking note).
When both fields match, the less specific one is blanked so the proposal says
it once.

Matching is a strategy: anything implementing `NoticeMatcher` can replace the
default keyword matcher.
"""

from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Protocol, Tuple

from porter.utils.settings import NoticePair


class NoticeMatcher(Protocol):
    """Detects "book independently" guidance in free text."""

    def match(self, text: str) -> FrozenSet[str]:
        """Return the distinct cues found in text; empty means no match."""
        ...


class KeywordNoticeMatcher:
    """
    Case-insensitive substring matcher over a keyword set.

    Examples:
        >>> matcher = KeywordNoticeMatcher(["book independently", "self-book"])
        >>> sorted(matcher.match("Please BOOK INDEPENDENTLY or self-book online"))
        ['book independently', 'self-book']
    """

    def __init__(self, keywords: Iterable[str]):
        self.keywords = tuple(keyword.lower() for keyword in keywords if keyword)

    def match(self, text: str) -> FrozenSet[str]:
        lowered = text.lower()
        return frozenset(keyword for keyword in self.keywords if keyword in lowered)


def get_path(data: Dict[str, Any], path: str) -> Any:
    """Dot-path read through nested dicts; None when any step is missing."""
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def set_path(data: Dict[str, Any], path: str, value: Any) -> None:
    """Dot-path write into existing nested dicts."""
    *parents, leaf = path.split(".")
    current: Any = data
    for part in parents:
        current = current.get(part) if isinstance(current, dict) else None
    if isinstance(current, dict):
        current[leaf] = value


def _specificity(matched: FrozenSet[str], text: str) -> Tuple[int, int]:
    return len(matched), len(text)


def less_specific_field(
    pair: NoticePair, data: Dict[str, Any], matcher: NoticeMatcher
) -> Optional[str]:
    """
    Pick which field of a pair to blank, or None when they don't both match.

    More distinct cues wins, then longer text; a full tie keeps the first field.
    """
    first_text = get_path(data, pair.first)
    second_text = get_path(data, pair.second)
    if not (isinstance(first_text, str) and isinstance(second_text, str)):
        return None

    first_match = matcher.match(first_text)
    second_match = matcher.match(second_text)
    if not (first_match and second_match):
        return None

    if _specificity(first_match, first_text) < _specificity(second_match, second_text):
        return pair.first
    return pair.second


def dedupe_notices(
    trip: Dict[str, Any], pairs: List[NoticePair], matcher: NoticeMatcher
) -> List[str]:
    """
    Blank the less specific notice of every matching pair.

    Returns:
        One warning per blanked field
    """
    warnings = []
    for pair in pairs:
        blanked = less_specific_field(pair, trip, matcher)
        if blanked is None:
            continue
        kept = pair.second if blanked == pair.first else pair.first
        set_path(trip, blanked, "")
        warnings.append(f"Blanked {blanked}: repeats the self-booking notice in {kept}")
    return warnings

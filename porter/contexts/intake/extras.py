"""Recommended-extras ranking."""

from typing import Any, Dict, List

from porter.contexts.intake.nomenclature import BADGE_LABELS, DEFAULT_PRIORITY, PRIORITY_RANK


def normalize_priority(priority: Any) -> str:
    """Lower-case a known priority; anything else is "medium"."""
    if isinstance(priority, str) and priority.lower() in PRIORITY_RANK:
        return priority.lower()
    return DEFAULT_PRIORITY


def rank_extras(extras: List[Any]) -> List[Any]:
    """
    Attach priority display fields and order extras by priority rank.

    The sort is stable, so extras of equal priority keep their authored order.

    Examples:
        >>> [e["priority"] for e in rank_extras([{"priority": "splurge"}, {"priority": "High"}])]
        ['high', 'splurge']
    """
    ranked = []
    for extra in extras:
        if not isinstance(extra, dict):
            ranked.append(extra)
            continue
        priority = normalize_priority(extra.get("priority"))
        ranked.append(
            {
                **extra,
                "priority": priority,
                "priorityClass": priority,
                "badgeLabel": BADGE_LABELS[priority],
            }
        )

    return sorted(ranked, key=_rank)


def _rank(extra: Any) -> int:
    if isinstance(extra, dict):
        return PRIORITY_RANK[extra["priority"]]
    return PRIORITY_RANK[DEFAULT_PRIORITY]


def rank_recommended_extras(trip: Dict[str, Any]) -> None:
    """Rank trip["recommendedExtras"] in place of the raw list."""
    extras = trip.get("recommendedExtras")
    if isinstance(extras, list):
        trip["recommendedExtras"] = rank_extras(extras)

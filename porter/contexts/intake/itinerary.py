"""
Itinerary sanitization.

Conversational editing sometimes leaves entries whose visible text is nothing
but emoji. Those render as empty bullets, so they are dropped here.
"""

from typing import Any, Dict, List

from porter.utils.text_processing import has_alphanumeric


def _activity_has_text(activity: Any) -> bool:
    if not isinstance(activity, dict):
        return False
    name = activity.get("name")
    if isinstance(name, str) and has_alphanumeric(name.strip()):
        return True
    description = activity.get("description")
    return bool(description) and has_alphanumeric(str(description))


def _schedule_item_has_text(item: Any) -> bool:
    return isinstance(item, dict) and has_alphanumeric(item.get("activity"))


def sanitize_day(day: Dict[str, Any]) -> List[str]:
    """
    Drop emoji-only activities, schedule items and lodging from one day.

    Returns:
        Warnings naming the day and how much was removed
    """
    warnings = []
    label = f"Day {day.get('day')}"

    activities = day.get("activities")
    if isinstance(activities, list):
        kept = [activity for activity in activities if _activity_has_text(activity)]
        removed = len(activities) - len(kept)
        day["activities"] = kept
        if removed:
            warnings.append(f"{label}: Removed {removed} emoji-only activity name(s)")

    schedule = day.get("schedule")
    if isinstance(schedule, list):
        kept = [item for item in schedule if _schedule_item_has_text(item)]
        removed = len(schedule) - len(kept)
        day["schedule"] = kept
        if removed:
            warnings.append(f"{label}: Removed {removed} emoji-only schedule item(s)")

    lodging = day.get("lodging")
    if isinstance(lodging, dict) and not has_alphanumeric(lodging.get("name")):
        del day["lodging"]
        warnings.append(f"{label}: Removed lodging with emoji-only name")

    return warnings


def sanitize_itinerary(trip: Dict[str, Any]) -> List[str]:
    """Sanitize every day of trip["itinerary"]; non-dict days are skipped."""
    itinerary = trip.get("itinerary")
    if not isinstance(itinerary, list):
        return []

    warnings = []
    for day in itinerary:
        if isinstance(day, dict):
            warnings.extend(sanitize_day(day))
    return warnings

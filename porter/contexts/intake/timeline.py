"""
Unified day-by-day timeline.

Cruise trips describe the same days twice: `itinerary` counts trip days (day 1
may be the flight in) while `ports` counts cruise days (day 1 is embarkation).
The timeline walks the itinerary and attaches each port by calendar date, never
by day number, then classifies the day and folds in flights and hotels for the
days either side of the cruise.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from porter.contexts.intake.patterns import (
    DAY_FIRST_RE,
    DAY_TYPE_KEYWORDS,
    ISO_DATE_RE,
    MONTH_FIRST_RE,
    MONTHS,
    contains_any,
)
from porter.utils.timestamp import parse_date

PRE_CRUISE = "pre-cruise"
POST_CRUISE = "post-cruise"
EMBARKATION = "embarkation"
DEBARKATION = "debarkation"
SEA_DAY = "sea-day"
PORT_DAY = "port-day"
CRUISE = "cruise"

# Day fields carried into the timeline unchanged
PASS_THROUGH_FIELDS = (
    "activities",
    "schedule",
    "dining",
    "tips",
    "shopping",
    "excursions",
    "cruiseInfo",
    "images",
    "videos",
    "map",
    "lodging",
)


def normalize_date(text: Any, fallback_year: Optional[int] = None) -> Optional[str]:
    """
    Normalize a free-text date to YYYY-MM-DD.

    Handles "2026-05-29", "May 29, 2026", "May 29", "29 May 2026" and "29 May".
    Year-less dates take the fallback year (default: the current year).

    Examples:
        >>> normalize_date("May 29, 2026")
        '2026-05-29'
        >>> normalize_date("29 May", fallback_year=2027)
        '2027-05-29'
        >>> normalize_date("next Tuesday") is None
        True
    """
    if not isinstance(text, str) or not text.strip():
        return None

    candidate = text.strip()
    if ISO_DATE_RE.match(candidate):
        return candidate

    match = MONTH_FIRST_RE.match(candidate) or DAY_FIRST_RE.match(candidate)
    if not match:
        return None

    month = MONTHS.get(match.group("month").lower())
    day = int(match.group("day"))
    if month is None or not 1 <= day <= 31:
        return None

    year = int(match.group("year")) if match.group("year") else (fallback_year or datetime.now().year)
    return f"{year:04d}-{month:02d}-{day:02d}"


def _text(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key):
            return record[key]
    return None


def _present(value: Any) -> bool:
    return value is not None and value is not False and value != ""


def _compact(record: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in record.items() if value is not None}


def _dict_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _lodging_with_timing(lodging: List[Dict[str, Any]], timing: str) -> List[Dict[str, Any]]:
    return [
        stay
        for stay in lodging
        if timing in (_text(stay.get("type")), _text(stay.get("timing")), _text(stay.get("category")))
    ]


def _trip_fallback_year(trip: Dict[str, Any]) -> int:
    dates = trip.get("dates")
    start = dates.get("start") if isinstance(dates, dict) else None
    if isinstance(start, str):
        parsed = parse_date(start)
        if parsed is not None:
            return parsed.year
    return datetime.now().year


def classify_day(
    port: Optional[Dict[str, Any]],
    combined_text: str,
    is_pre_cruise: bool,
    is_post_cruise: bool,
) -> str:
    """
    Pick a day type from the matched port and the day/port text.

    Pre/post-cruise only apply to days without a port.
    """
    port = port or {}
    port_type = _text(port.get("type"))
    port_name = _text(_first(port, "name", "port", "location"))

    if is_pre_cruise and not port:
        return PRE_CRUISE
    if is_post_cruise and not port:
        return POST_CRUISE
    if port_type == "embarkation" or port.get("isEmbarkation") or contains_any(
        combined_text, DAY_TYPE_KEYWORDS.EMBARKATION
    ):
        return EMBARKATION
    if port_type == "debarkation" or port.get("isDebarkation") or contains_any(
        combined_text, DAY_TYPE_KEYWORDS.DEBARKATION
    ):
        return DEBARKATION
    if port_type == "sea" or port_name == "at sea" or contains_any(combined_text, DAY_TYPE_KEYWORDS.SEA_DAY):
        return SEA_DAY
    if port_name:
        return PORT_DAY
    return CRUISE


def _port_block(port: Optional[Dict[str, Any]], port_info: Any) -> Optional[Dict[str, Any]]:
    block = None
    if port:
        block = _compact(
            {
                "name": _first(port, "name", "port", "location"),
                "country": port.get("country"),
                "arrival": _first(port, "arrival", "arrive"),
                "departure": _first(port, "departure", "depart"),
                "description": port.get("description"),
                "highlights": port.get("highlights"),
            }
        )

    # Port details embedded in the itinerary day fill whatever the port lacks
    if isinstance(port_info, dict):
        block = dict(block or {})
        block.update(
            _compact(
                {
                    "name": block.get("name") or _first(port_info, "name", "port"),
                    "arrival": block.get("arrival") or _first(port_info, "arrival", "arrive"),
                    "departure": block.get("departure") or _first(port_info, "departure", "depart"),
                    "description": block.get("description") or port_info.get("description"),
                }
            )
        )
    return block


def _merged_highlights(port: Optional[Dict[str, Any]], day: Dict[str, Any]) -> List[Any]:
    highlights = []
    if port and isinstance(port.get("highlights"), list):
        highlights.extend(port["highlights"])
    if isinstance(day.get("highlights"), list):
        for highlight in day["highlights"]:
            if highlight not in highlights:
                highlights.append(highlight)
    return highlights


def build_unified_timeline(trip: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Merge itinerary days, ports, flights and lodging into one timeline.

    Args:
        trip: Trip document (read only)

    Returns:
        One entry per itinerary day, in itinerary order. Empty when the trip
        has no itinerary.
    """
    itinerary = _dict_list(trip.get("itinerary"))
    if not itinerary:
        return []

    cruise_info = trip.get("cruiseInfo") if isinstance(trip.get("cruiseInfo"), dict) else {}
    ports = _dict_list(trip.get("ports")) or _dict_list(cruise_info.get("ports"))
    lodging = _dict_list(trip.get("lodging"))
    flights = trip.get("flights") if isinstance(trip.get("flights"), dict) else {}
    embarkation = cruise_info.get("embarkation")
    debarkation = cruise_info.get("debarkation")
    fallback_year = _trip_fallback_year(trip)

    ports_by_date = {}
    for port in ports:
        port_date = normalize_date(port.get("date"), fallback_year)
        if port_date:
            ports_by_date[port_date] = port

    pre_cruise_lodging = _lodging_with_timing(lodging, PRE_CRUISE)
    post_cruise_lodging = _lodging_with_timing(lodging, POST_CRUISE)

    def stays_on(stays: List[Dict[str, Any]], day_date: Optional[str]) -> bool:
        if day_date is None:
            return False
        return any(
            normalize_date(_first(stay, "dates", "date", "checkIn"), fallback_year) == day_date
            for stay in stays
        )

    timeline = []
    for position, day in enumerate(itinerary, 1):
        day_number = day.get("day", position)
        day_date = normalize_date(day.get("date"), fallback_year)
        port = ports_by_date.get(day_date) if day_date else None

        combined = " ".join(
            [
                _text((port or {}).get("description")),
                _text(_first(port or {}, "name", "port", "location")),
                _text(_first(day, "title", "location")),
            ]
        )
        is_pre_cruise = stays_on(pre_cruise_lodging, day_date) or contains_any(
            combined, DAY_TYPE_KEYWORDS.PRE_CRUISE
        )
        is_post_cruise = stays_on(post_cruise_lodging, day_date) or contains_any(
            combined, DAY_TYPE_KEYWORDS.POST_CRUISE
        )
        day_type = classify_day(port, combined, is_pre_cruise, is_post_cruise)

        entry = {
            "dayNumber": day_number,
            "dayType": day_type,
            "isPreCruise": day_type == PRE_CRUISE,
            "isPostCruise": day_type == POST_CRUISE,
            "title": _first(day, "title", "location")
            or _first(port or {}, "name", "port", "location")
            or f"Day {day_number}",
            "date": day.get("date"),
            "description": day.get("description"),
        }

        port_block = _port_block(port, day.get("portInfo"))
        if port_block is not None:
            entry["port"] = port_block

        if day_type == EMBARKATION and isinstance(embarkation, dict):
            entry["embarkation"] = _compact(
                {key: embarkation.get(key) for key in ("port", "time", "checkIn")}
            )
        if day_type == DEBARKATION and isinstance(debarkation, dict):
            entry["debarkation"] = _compact({key: debarkation.get(key) for key in ("port", "time")})

        if day_type == PRE_CRUISE:
            if isinstance(flights.get("outbound"), dict):
                entry["flight"] = {"type": "arrival", **flights["outbound"]}
            if pre_cruise_lodging:
                entry["hotel"] = pre_cruise_lodging[0]
        if day_type == POST_CRUISE:
            if isinstance(flights.get("return"), dict):
                entry["flight"] = {"type": "departure", **flights["return"]}
            if post_cruise_lodging:
                entry["hotel"] = post_cruise_lodging[0]

        for field_name in PASS_THROUGH_FIELDS:
            if _present(day.get(field_name)):
                entry[field_name] = day[field_name]

        highlights = _merged_highlights(port, day)
        if highlights:
            entry["highlights"] = highlights

        timeline.append(entry)

    return timeline

"""
Booking augmentation for proposal display.

Adds display fields (labels, icons, badge, traveler text, balance flag) to each
booking so templates stay free of lookup logic, and repairs booking text that
was pasted in as raw JSON.
"""

import json
import math
from typing import Any, Dict, List, Optional

from porter.contexts.intake.nomenclature import (
    BOOKING_STATUSES,
    BOOKING_TYPES,
    DEFAULT_STATUS_CLASS,
    DEFAULT_TYPE_ICON,
    DEFAULT_TYPE_LABEL,
    HELD_ICON,
    HELD_STATUS,
    HOLD_DATE_FIELDS,
    INSURANCE_OPTION_STATUSES,
    INSURANCE_TYPE,
    OPTIONS_PROVIDED,
    QUOTE_CONFIRMATION,
    BookingStatus,
    BookingType,
)
from porter.utils.text_processing import capitalize_first, looks_like_json, to_number
from porter.utils.timestamp import parse_date

# Free-text booking fields that must not contain serialized JSON
JSON_CHECKED_FIELDS = ("details", "notes")


def _lower(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def parse_travelers(travelers: Any) -> str:
    """
    Flatten a booking's travelers into display text.

    Accepts a list of names, a list of {"name": ...} objects, or either of
    those serialized as a JSON string. Any other string is used as-is.

    Examples:
        >>> parse_travelers(["Ana", "Ben"])
        'Ana, Ben'
        >>> parse_travelers('[{"name": "Ana"}, {"name": "Ben"}]')
        'Ana, Ben'
        >>> parse_travelers("Ana and Ben")
        'Ana and Ben'
    """
    if isinstance(travelers, str):
        try:
            travelers = json.loads(travelers)
        except ValueError:
            return travelers

    if not isinstance(travelers, list):
        return ""

    names = []
    for traveler in travelers:
        if isinstance(traveler, str):
            name = traveler
        elif isinstance(traveler, dict):
            name = traveler.get("name") or ""
        else:
            name = ""
        if name:
            names.append(str(name))
    return ", ".join(names)


def show_balance(balance: Any) -> bool:
    """
    Decide whether a balance line should be shown.

    Numbers (and numeric strings, where "" counts as 0) show when positive.
    Any other present value, such as "TBD", shows as-is.
    """
    number = to_number(balance)
    if number is not None and math.isfinite(number):
        return number > 0
    if isinstance(balance, float) and math.isnan(balance):
        return False
    return balance is not None and balance is not False


def format_hold_date(text: Any) -> str:
    """
    Short month-day form of a hold expiry ("Jan 25").

    Unparseable values come back unchanged.
    """
    if not text:
        return ""
    if not isinstance(text, str):
        return str(text)
    parsed = parse_date(text)
    if parsed is None:
        return text
    return f"{parsed.strftime('%b')} {parsed.day}"


def describe_type(booking: Dict[str, Any]) -> BookingType:
    """Display form of a booking's type; unknown types are title-cased."""
    type_key = _lower(booking.get("type"))
    if type_key in BOOKING_TYPES:
        return BOOKING_TYPES[type_key]
    return BookingType(capitalize_first(type_key) or DEFAULT_TYPE_LABEL, DEFAULT_TYPE_ICON)


def describe_status(booking: Dict[str, Any]) -> BookingStatus:
    """
    Display form of a booking's status.

    Held bookings with an expiry show "Held until <date>". Insurance bookings
    that are only quoted (or have no status) show "Options Provided".
    """
    status_key = _lower(booking.get("status"))
    status = BOOKING_STATUSES.get(status_key) or BookingStatus(
        capitalize_first(status_key), "", status_key or DEFAULT_STATUS_CLASS
    )

    if status_key == HELD_STATUS:
        hold_date = next((booking[f] for f in HOLD_DATE_FIELDS if booking.get(f)), None)
        if hold_date:
            status = BookingStatus(f"Held until {format_hold_date(hold_date)}", HELD_ICON, HELD_STATUS)

    if _lower(booking.get("type")) == INSURANCE_TYPE and status_key in INSURANCE_OPTION_STATUSES:
        status = OPTIONS_PROVIDED

    return status


def insurance_plans(trip: Dict[str, Any]) -> List[Any]:
    """Plans offered in the trip's travelInsurance section (plans, else options)."""
    insurance = trip.get("travelInsurance")
    if not isinstance(insurance, dict):
        return []
    for key in ("plans", "options"):
        if isinstance(insurance.get(key), list):
            return insurance[key]
    return []


def augment_booking(booking: Dict[str, Any], plans: Optional[List[Any]] = None) -> Dict[str, Any]:
    """
    Return a copy of a booking with display fields added.

    The raw `travelers` field is dropped in favour of `travelersText`.

    Args:
        booking: Raw booking record
        plans: Insurance plans to attach when this is an insurance booking

    Returns:
        New booking dict
    """
    booking_type = describe_type(booking)
    status = describe_status(booking)
    is_insurance = _lower(booking.get("type")) == INSURANCE_TYPE

    confirmation = booking.get("confirmation")
    if not isinstance(confirmation, str) or confirmation.lower() == QUOTE_CONFIRMATION:
        confirmation = ""

    augmented = {key: value for key, value in booking.items() if key != "travelers"}
    augmented.update(
        {
            "typeLabel": booking_type.label,
            "typeIcon": booking_type.icon,
            "statusLabel": status.label,
            "statusClass": status.class_name,
            "statusBadge": status.badge,
            "confirmationDisplay": confirmation,
            "travelersText": parse_travelers(booking.get("travelers")),
            "showBalance": show_balance(booking.get("balance")),
            "isInsurance": is_insurance,
            "insurancePlans": list(plans or []) if is_insurance else [],
        }
    )
    return augmented


def augment_bookings(trip: Dict[str, Any]) -> None:
    """Replace trip["bookings"] with augmented copies; non-dict entries pass through."""
    bookings = trip.get("bookings")
    if not isinstance(bookings, list):
        return

    plans = insurance_plans(trip)
    trip["bookings"] = [
        augment_booking(booking, plans) if isinstance(booking, dict) else booking
        for booking in bookings
    ]


def clear_json_notes(trip: Dict[str, Any]) -> List[str]:
    """
    Blank booking notes/details that hold serialized JSON instead of prose.

    Returns:
        One warning per cleared field
    """
    warnings = []
    bookings = trip.get("bookings")
    if not isinstance(bookings, list):
        return warnings

    for index, booking in enumerate(bookings, 1):
        if not isinstance(booking, dict):
            continue
        for field_name in JSON_CHECKED_FIELDS:
            if looks_like_json(booking.get(field_name)):
                booking[field_name] = ""
                warnings.append(
                    f"Booking #{index}: Cleared JSON in {field_name} - use readable text instead"
                )
    return warnings


def auto_recommend_insurance(trip: Dict[str, Any]) -> bool:
    """
    Mark the middle insurance option as recommended when none is.

    Only applies when there are at least two options.

    Returns:
        True if an option was marked
    """
    insurance = trip.get("travelInsurance")
    if not isinstance(insurance, dict):
        return False
    options = insurance.get("options")
    if not isinstance(options, list) or len(options) < 2:
        return False
    if any(isinstance(option, dict) and option.get("recommended") for option in options):
        return False

    middle = options[len(options) // 2]
    if not isinstance(middle, dict):
        return False
    middle["recommended"] = True
    return True

"""
Display nomenclature for bookings and recommended extras.

Raw trip data carries free-form `type`, `status` and `priority` strings. These
tables map the known values onto the labels, icons and CSS classes templates
render. Unknown values are title-cased by the callers.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class BookingType:
    """Display form of a booking type."""

    label: str
    icon: str


@dataclass(frozen=True)
class BookingStatus:
    """Display form of a booking status."""

    label: str
    icon: str
    class_name: str

    @property
    def badge(self) -> str:
        """Icon plus label, or "" when there is no label."""
        if not self.label:
            return ""
        return f"{self.icon} {self.label}".strip()


# =============================================================================
# BOOKINGS
# =============================================================================

BOOKING_TYPES: Dict[str, BookingType] = {
    "cruise": BookingType("Cruise", "🚢"),
    "insurance": BookingType("Insurance", "🛡️"),
    "flight": BookingType("Flight", "✈️"),
    "hotel": BookingType("Hotel", "🏨"),
}

DEFAULT_TYPE_LABEL = "Booking"
DEFAULT_TYPE_ICON = "📌"

BOOKING_STATUSES: Dict[str, BookingStatus] = {
    "confirmed": BookingStatus("Confirmed", "✓", "confirmed"),
    "quoted": BookingStatus("Quoted", "⏳", "quoted"),
    "pending": BookingStatus("Pending", "⏳", "pending"),
    "cancelled": BookingStatus("Cancelled", "✗", "cancelled"),
}

DEFAULT_STATUS_CLASS = "pending"

HELD_STATUS = "held"
HELD_ICON = "⏳"
HOLD_DATE_FIELDS = ("holdExpires", "holdUntil", "expiresDate")

INSURANCE_TYPE = "insurance"
# Insurance statuses that mean "the client still has to pick a plan"
INSURANCE_OPTION_STATUSES = frozenset({"", "quoted", "options_provided"})
OPTIONS_PROVIDED = BookingStatus("Options Provided", "📋", "quoted")

# Confirmation placeholder used while a booking is only quoted
QUOTE_CONFIRMATION = "quote"


# =============================================================================
# RECOMMENDED EXTRAS
# =============================================================================

DEFAULT_PRIORITY = "medium"

PRIORITY_RANK: Dict[str, int] = {
    "high": 0,
    "recommended": 1,
    "medium": 2,
    "splurge": 3,
}

BADGE_LABELS: Dict[str, str] = {
    "high": "Popular",
    "recommended": "Agent Recommended",
    "medium": "Recommended",
    "splurge": "Upgrade",
}

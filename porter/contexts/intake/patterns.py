"""
Reusable patterns and constants for trip data normalization.

Pattern classes follow the convention from templating/tags.py:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Dict

# =============================================================================
# DATE CONSTANTS
# =============================================================================

MONTHS: Dict[str, int] = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}


@dataclass(frozen=True)
class DatePatterns:
    """Free-text date shapes found in itinerary and port records."""

    # 2026-05-29
    ISO_DATE: str = r"^\d{4}-\d{2}-\d{2}$"
    # May 29, 2026 / May 29 2026 / May 29
    MONTH_FIRST: str = r"^(?P<month>[a-z]+)\s+(?P<day>\d{1,2})(?:,?\s+(?P<year>\d{4}))?$"
    # 29 May 2026 / 29 May
    DAY_FIRST: str = r"^(?P<day>\d{1,2})\s+(?P<month>[a-z]+)(?:,?\s+(?P<year>\d{4}))?$"


ISO_DATE_RE = re.compile(DatePatterns.ISO_DATE)
MONTH_FIRST_RE = re.compile(DatePatterns.MONTH_FIRST, re.IGNORECASE)
DAY_FIRST_RE = re.compile(DatePatterns.DAY_FIRST, re.IGNORECASE)


# =============================================================================
# TIMELINE KEYWORDS
# =============================================================================


@dataclass(frozen=True)
class DayTypeKeywords:
    """Substrings of port/day text that classify a timeline day."""

    PRE_CRUISE: tuple = ("arrive", "arrival")
    POST_CRUISE: tuple = ("depart", "departure", "fly home")
    EMBARKATION: tuple = ("embarkation", "embark day")
    DEBARKATION: tuple = ("debarkation", "disembark")
    SEA_DAY: tuple = ("at sea", "cruising")


DAY_TYPE_KEYWORDS = DayTypeKeywords()


def contains_any(text: str, keywords: tuple) -> bool:
    """Check whether any keyword occurs in text."""
    return any(keyword in text for keyword in keywords)

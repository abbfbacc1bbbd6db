"""Timestamp formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def now() -> str:
    """Local timestamp suitable for directory names (e.g., 20261019_143000)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def render_timestamp(moment: datetime = None) -> str:
    """
    Format a moment as the UTC render stamp used in proposal footers.

    Args:
        moment: Aware or naive datetime (naive is assumed UTC). Defaults to now.

    Returns:
        Timestamp like "2026-10-19 14:30:00 UTC"
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S") + " UTC"


# Free-text date inputs accepted after ISO 8601
DATE_INPUT_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
)


def parse_date(text: str) -> Optional[datetime]:
    """
    Parse an ISO 8601 or common long-form date string.

    Examples:
        parse_date("2026-10-15")        # datetime(2026, 10, 15)
        parse_date("Oct 15, 2026")      # datetime(2026, 10, 15)
        parse_date("sometime in May")   # None
    """
    candidate = text.strip()
    try:
        return datetime.fromisoformat(candidate.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(candidate, fmt)
        except ValueError:
            continue
    return None

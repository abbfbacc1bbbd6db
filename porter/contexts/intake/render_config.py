"""
Assembly of the `_config` object injected into the render context.

Templates read feature flags, the agent identity, comment-thread links and the
reserve link from `_config`, never from settings or the profile directly.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

from porter.contexts.intake.profile import UserProfile, build_agent_info
from porter.utils.settings import RenderSettings

CONFIRMED_PHASE = "confirmed"


@dataclass
class CommentSummary:
    """Client comment count for the proposal's discussion thread."""

    comment_count: int = 0
    has_comments: Optional[bool] = None
    comment_count_label: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CommentSummary":
        return cls(
            comment_count=data.get("commentCount") or 0,
            has_comments=data.get("hasComments"),
            comment_count_label=data.get("commentCountLabel"),
        )

    def to_template_dict(self) -> Dict[str, Any]:
        """commentCount, hasComments and commentCountLabel with derived defaults."""
        count = self.comment_count
        label = self.comment_count_label
        if label is None:
            label = "1 comment" if count == 1 else f"{count} comments"
        has_comments = self.has_comments if self.has_comments is not None else count > 0
        return {"commentCount": count, "hasComments": has_comments, "commentCountLabel": label}


def trip_id_from_key(trip_key: str) -> str:
    """
    Last path segment of a storage key.

    Examples:
        >>> trip_id_from_key("agent42/mauritius-2026")
        'mauritius-2026'
    """
    return trip_key.rsplit("/", 1)[-1]


def comment_thread_url(api_endpoint: str, trip_id: str) -> str:
    """Public URL of a trip's comment thread."""
    return f"{api_endpoint.rstrip('/')}/trips/{quote(trip_id, safe='')}/comments"


def show_tiers(meta: Mapping[str, Any]) -> bool:
    """Pricing tiers are shown until the trip is confirmed (and when phase is unknown)."""
    phase = meta.get("phase")
    if isinstance(phase, str):
        return phase.lower() != CONFIRMED_PHASE
    return True


def build_render_config(
    trip: Dict[str, Any],
    profile: Optional[UserProfile],
    settings: RenderSettings,
    trip_key: str = "",
    comment_summary: Union[CommentSummary, Mapping[str, Any], None] = None,
) -> Dict[str, Any]:
    """
    Build the `_config` mapping for one render.

    Args:
        trip: Trip document (read only)
        profile: Advisor profile, or None for the generic identity
        settings: Render settings (map key, API endpoint)
        trip_key: Storage key of the trip ("prefix/tripId")
        comment_summary: Comment counts, as a CommentSummary or its mapping form

    Returns:
        Config mapping with camelCase keys, as templates address them
    """
    meta = trip.get("meta") if isinstance(trip.get("meta"), dict) else {}
    agent = build_agent_info(profile)

    if comment_summary is None:
        comment_summary = CommentSummary()
    elif isinstance(comment_summary, Mapping):
        comment_summary = CommentSummary.from_dict(comment_summary)

    trip_id = trip_id_from_key(trip_key)
    config = {
        "googleMapsApiKey": settings.google_maps_api_key,
        "showMaps": meta.get("showMaps") is not False,
        "showVideos": meta.get("showVideos") is not False,
        "showTiers": show_tiers(meta),
        "showTravelStyle": meta.get("showTravelStyle") is True,
        "tripKey": trip_key,
        "tripId": trip_id,
        "apiEndpoint": settings.api_endpoint,
        "commentThreadUrl": comment_thread_url(settings.api_endpoint, trip_id),
        "reserveUrl": meta.get("reserveUrl") or agent.booking_url or "",
        "agent": agent.to_template_dict(),
    }
    config.update(comment_summary.to_template_dict())
    return config

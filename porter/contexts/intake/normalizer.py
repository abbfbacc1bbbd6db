"""
Trip Normalization Orchestration

Turns a raw, loosely-typed trip document into the render context templates
expect. Steps run in a fixed order because later steps read what earlier ones
produced (tours are tagged before they are reshaped, bookings are cleaned
before they are labelled):

1. Sanitize itinerary (emoji-only activities, schedule items, lodging)
2. Clear JSON pasted into booking notes/details
3. Move cabin images to cruiseInfo.cabin.images
4. Inject affiliate tracking into partner links
5. Augment bookings with display fields
6. Rank recommended extras
7. Reshape partner tours by port
8. Drop redundant self-booking notices
9. Auto-recommend the middle insurance option
10. Assemble `_config`
11. Build the unified timeline

Every step is a no-op when its branch of the trip is missing.

By default the caller's document is deep-copied first; `in_place=True` lets
the steps mutate it directly (the caller must then not share it across
concurrent renders).
"""

import copy
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from porter.contexts.intake.affiliates import inject_affiliate_tracking
from porter.contexts.intake.bookings import (
    augment_bookings,
    auto_recommend_insurance,
    clear_json_notes,
)
from porter.contexts.intake.extras import rank_recommended_extras
from porter.contexts.intake.images import merge_cabin_images
from porter.contexts.intake.itinerary import sanitize_itinerary
from porter.contexts.intake.logger import (
    _log_debug,
    log_normalization_complete,
    log_normalization_warnings,
)
from porter.contexts.intake.notices import KeywordNoticeMatcher, NoticeMatcher, dedupe_notices
from porter.contexts.intake.profile import UserProfile, coerce_profile
from porter.contexts.intake.render_config import CommentSummary, build_render_config
from porter.contexts.intake.timeline import build_unified_timeline
from porter.contexts.intake.tours import reshape_tours
from porter.utils.settings import RenderSettings, default_render_settings


@dataclass
class NormalizationResult:
    """Result from normalize_trip() orchestration function."""

    data: Dict[str, Any]
    warnings: List[str] = field(default_factory=list)
    time_s: float = 0.0


def trip_label(trip: Mapping[str, Any], trip_key: str = "") -> str:
    """Short name for a trip in log lines."""
    if trip_key:
        return trip_key
    meta = trip.get("meta")
    if isinstance(meta, dict) and meta.get("clientName"):
        return str(meta["clientName"])
    return "trip"


def normalize_trip(
    trip: Dict[str, Any],
    profile: Union[UserProfile, Mapping[str, Any], None] = None,
    *,
    trip_key: str = "",
    settings: Optional[RenderSettings] = None,
    comment_summary: Union[CommentSummary, Mapping[str, Any], None] = None,
    notice_matcher: Optional[NoticeMatcher] = None,
    in_place: bool = False,
) -> NormalizationResult:
    """
    Normalize a trip document into a render context.

    Args:
        trip: Raw trip document
        profile: Advisor profile (UserProfile or its stored mapping), or None
        trip_key: Storage key of the trip, used for _config.tripId and links
        settings: Render settings (the cached default_render_settings() when omitted)
        comment_summary: Comment counts for the trip's discussion thread
        notice_matcher: Strategy for spotting self-booking notices (defaults to
            keyword matching over settings.notice_keywords)
        in_place: Mutate `trip` instead of a deep copy

    Returns:
        NormalizationResult whose data is the trip plus `unifiedTimeline` and
        `_config`, and whose warnings list every repair made
    """
    start_time = time.time()
    settings = settings or default_render_settings()
    profile = coerce_profile(profile)
    matcher = notice_matcher or KeywordNoticeMatcher(settings.notice_keywords)
    label = trip_label(trip, trip_key)

    if not in_place:
        trip = copy.deepcopy(trip)

    warnings: List[str] = []
    warnings.extend(sanitize_itinerary(trip))
    warnings.extend(clear_json_notes(trip))
    warnings.extend(merge_cabin_images(trip))

    tagged = inject_affiliate_tracking(trip, profile.affiliates if profile else None, settings)
    if tagged:
        _log_debug(f"{label}: added affiliate tracking to {tagged} link(s)")

    augment_bookings(trip)
    rank_recommended_extras(trip)
    reshape_tours(trip)
    warnings.extend(dedupe_notices(trip, settings.notice_pairs, matcher))

    if auto_recommend_insurance(trip):
        _log_debug(f"{label}: marked middle insurance option as recommended")

    config = build_render_config(trip, profile, settings, trip_key, comment_summary)
    data = {**trip, "unifiedTimeline": build_unified_timeline(trip), "_config": config}

    elapsed = time.time() - start_time
    log_normalization_warnings(label, warnings)
    log_normalization_complete(label, elapsed)

    return NormalizationResult(data=data, warnings=warnings, time_s=elapsed)

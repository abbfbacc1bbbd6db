"""
Proposal Rendering Orchestration

Composes the other contexts into one call:

1. Select the template name (request, trip setting, profile, "default")
2. Fetch the template text from the registry (scoped, shared, built-in)
3. Normalize the trip into a render context
4. Interpret the template against that context
5. Add the trial watermark for trial subscriptions

TemplateNotFound from step 2 is the only exception that escapes.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from porter.contexts.intake.normalizer import normalize_trip, trip_label
from porter.contexts.intake.profile import UserProfile, coerce_profile
from porter.contexts.intake.render_config import CommentSummary
from porter.contexts.rendering.logger import log_render_result, log_render_start
from porter.contexts.rendering.watermark import inject_trial_watermark, trial_watermark
from porter.contexts.templating.engine import TemplateEngine
from porter.contexts.templating.registries import TemplateRegistry, select_template_name
from porter.utils.settings import RenderSettings, default_render_settings


@dataclass
class RenderResult:
    """Result from render_trip() orchestration function."""

    html: str
    template_name: str
    warnings: List[str] = field(default_factory=list)
    watermarked: bool = False
    time_s: float = 0.0


def render_trip(
    trip: Dict[str, Any],
    template_name: Optional[str] = None,
    profile: Union[UserProfile, Mapping[str, Any], None] = None,
    *,
    registry: Optional[TemplateRegistry] = None,
    scope: Optional[str] = None,
    trip_key: str = "",
    settings: Optional[RenderSettings] = None,
    comment_summary: Union[CommentSummary, Mapping[str, Any], None] = None,
    in_place: bool = False,
    engine: Optional[TemplateEngine] = None,
) -> RenderResult:
    """
    Render a trip document to proposal HTML.

    Args:
        trip: Raw trip document
        template_name: Explicitly requested template ("default" or None to defer
            to the trip and profile)
        profile: Advisor profile (UserProfile or its stored mapping), or None
        registry: Template registry (defaults to one with only the built-in template)
        scope: Caller key prefix for scoped template overrides
        trip_key: Storage key of the trip
        settings: Render settings (the cached default_render_settings() when omitted)
        comment_summary: Comment counts for the trip's discussion thread
        in_place: Let normalization mutate `trip` instead of a copy
        engine: Template engine (defaults to TemplateEngine())

    Returns:
        RenderResult with the HTML, the template used and normalization warnings

    Raises:
        TemplateNotFound: If the selected template exists in no tier
    """
    start_time = time.time()
    registry = registry or TemplateRegistry()
    settings = settings or default_render_settings()
    engine = engine or TemplateEngine()
    profile = coerce_profile(profile)
    label = trip_label(trip, trip_key)

    resolved_name = select_template_name(template_name, trip, profile)
    log_render_start(label, resolved_name, scope)
    template_text = registry.get_template_text(resolved_name, scope=scope)

    normalized = normalize_trip(
        trip,
        profile,
        trip_key=trip_key,
        settings=settings,
        comment_summary=comment_summary,
        in_place=in_place,
    )
    html = engine.render(template_text, normalized.data)

    watermarked = profile is not None and profile.is_trial
    if watermarked:
        html = inject_trial_watermark(html, trial_watermark(settings))

    result = RenderResult(
        html=html,
        template_name=resolved_name,
        warnings=normalized.warnings,
        watermarked=watermarked,
        time_s=time.time() - start_time,
    )
    log_render_result(label, result)
    return result


def render_trip_html(
    trip: Dict[str, Any],
    template_name: Optional[str] = None,
    profile: Union[UserProfile, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> str:
    """render_trip() returning only the HTML string."""
    return render_trip(trip, template_name, profile, **kwargs).html

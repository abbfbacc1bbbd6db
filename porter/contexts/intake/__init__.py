"""
Intake Context

Responsibilities:
- Accepts raw trip documents and advisor profiles
- Repairs authoring artifacts (emoji-only entries, pasted JSON, misplaced images)
- Enriches data for display (booking labels, extras ranking, tours by port,
  affiliate tracking, unified timeline)
- Assembles the `_config` block templates read flags and identity from

Owns: Trip data normalization, advisor profile model, display nomenclature
Never: Resolves or interprets templates (see templating context)
"""

from porter.contexts.intake.normalizer import NormalizationResult, normalize_trip
from porter.contexts.intake.notices import KeywordNoticeMatcher, NoticeMatcher
from porter.contexts.intake.profile import (
    AffiliateCodes,
    AgencyInfo,
    AgentInfo,
    Branding,
    Subscription,
    UserProfile,
    build_agent_info,
)
from porter.contexts.intake.render_config import CommentSummary

__all__ = [
    # Normalization orchestration
    "normalize_trip",
    "NormalizationResult",
    # Notice dedup strategy
    "NoticeMatcher",
    "KeywordNoticeMatcher",
    # Profile model
    "UserProfile",
    "AgencyInfo",
    "Branding",
    "AffiliateCodes",
    "Subscription",
    "AgentInfo",
    "build_agent_info",
    "CommentSummary",
]

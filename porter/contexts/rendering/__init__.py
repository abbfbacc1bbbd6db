"""
Rendering Context

Responsibilities:
- Orchestrates template selection, trip normalization and interpretation
- Applies the trial watermark to proposals of trial subscribers
- Reports render timing and data repairs

Owns: End-to-end proposal rendering, trial watermark
Never: Modifies template text or stores rendered output
"""

from porter.contexts.rendering.renderer import RenderResult, render_trip, render_trip_html
from porter.contexts.rendering.watermark import inject_trial_watermark, trial_watermark

__all__ = [
    # Orchestration
    "render_trip",
    "render_trip_html",
    "RenderResult",
    # Watermark
    "inject_trial_watermark",
    "trial_watermark",
]

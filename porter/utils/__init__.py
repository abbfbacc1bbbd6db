"""
Shared utilities for PORTER.

Common functionality used across contexts:
- Text processing
- Timestamps and date parsing
- Logging setup
- Render settings
"""

from porter.utils.settings import RenderSettings, default_render_settings, load_render_settings
from porter.utils.timestamp import now, render_timestamp

__all__ = [
    "RenderSettings",
    "default_render_settings",
    "load_render_settings",
    "now",
    "render_timestamp",
]

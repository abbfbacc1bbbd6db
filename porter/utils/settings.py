"""
Render settings resolution.

Loads rendering defaults from render_settings.yaml (packaged with porter, or the
file named by PORTER_SETTINGS_PATH) and layers environment overrides on top.

Examples:
    >>> settings = load_render_settings()
    >>> settings.partner_domain
    'viator.com'
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "config" / "render_settings.yaml"

# Environment variable -> settings field
ENV_OVERRIDES = {
    "GOOGLE_MAPS_API_KEY": "google_maps_api_key",
    "PORTER_API_ENDPOINT": "api_endpoint",
}


@dataclass
class NoticePair:
    """Two advisory fields (dot-paths) that may repeat the same guidance."""

    first: str = ""
    second: str = ""


@dataclass
class RenderSettings:
    """Opaque configuration consumed by normalization and rendering."""

    google_maps_api_key: str = ""
    api_endpoint: str = "https://proposals.example.com"

    # Tour partner affiliate tracking
    partner_domain: str = "viator.com"
    partner_name: str = "viator"
    partner_id_param: str = "pid"
    campaign_id_param: str = "mcid"
    medium_param: str = "medium"
    medium_value: str = "link"

    # Redundant "book independently" notice detection
    notice_keywords: List[str] = field(default_factory=list)
    notice_pairs: List[NoticePair] = field(default_factory=list)

    # Trial watermark
    product_name: str = "Porter"
    watermark_url: str = "https://porter.example.com"


def load_render_settings(config_path: Optional[Path] = None) -> RenderSettings:
    """
    Load render settings from YAML and the environment.

    Precedence (later wins): dataclass defaults, YAML file, environment.

    Args:
        config_path: Optional YAML path (defaults to PORTER_SETTINGS_PATH, then the
            packaged render_settings.yaml)

    Returns:
        RenderSettings instance
    """
    if config_path is None:
        config_path = Path(os.getenv("PORTER_SETTINGS_PATH", DEFAULT_SETTINGS_PATH))

    schema = OmegaConf.structured(RenderSettings)
    merged = OmegaConf.merge(schema, OmegaConf.load(config_path))

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            merged[field_name] = value

    return OmegaConf.to_object(merged)


# Settings file -> loaded settings, for callers that do not pass their own
_cache: Dict[Path, RenderSettings] = {}


def default_render_settings() -> RenderSettings:
    """
    Settings from the configured file, read once per process.

    The environment is consulted on first load only; call clear_settings_cache()
    after changing PORTER_SETTINGS_PATH or the override variables.
    """
    config_path = Path(os.getenv("PORTER_SETTINGS_PATH", DEFAULT_SETTINGS_PATH))
    if config_path not in _cache:
        _cache[config_path] = load_render_settings(config_path)
    return _cache[config_path]


def clear_settings_cache() -> None:
    """Forget settings loaded by default_render_settings()."""
    _cache.clear()

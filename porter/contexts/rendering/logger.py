"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from porter.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, template_name: Optional[str] = None) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        template_name: Requested template, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from porter.contexts.rendering.logger import setup_rendering_logger

        log_file = setup_rendering_logger(log_dir)
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Template": template_name or "(auto)",
            "Settings": os.getenv("PORTER_SETTINGS_PATH", "(packaged)"),
        },
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(trip_label: str, template_name: str, scope: Optional[str]) -> None:
    """Log start of a render with context."""
    _log_info(f"Rendering {trip_label} with template '{template_name}'")
    if scope:
        _log_debug(f"  Scope: {scope}")


def log_render_result(
    trip_label: str,
    result,  # RenderResult
    verbose: bool = False,
) -> None:
    """
    Log render result with normalization warnings.

    Args:
        trip_label: Trip identifier for log lines
        result: RenderResult from render_trip()
        verbose: List every warning instead of the first few
    """
    _log_success(f"{trip_label}: {len(result.html)} chars ({result.time_s:.3f}s)")

    if result.warnings:
        _log_warning(f"{len(result.warnings)} data repairs during normalization")
        warning_limit = len(result.warnings) if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Repair {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more repairs")

    if result.watermarked:
        _log_info("Trial watermark added")

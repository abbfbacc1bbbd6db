"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from typing import Optional

from loguru import logger

CONTEXT_PREFIX = "[template]"


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_template_resolved(template_name: str, tier: str, scope: Optional[str]) -> None:
    """Log which tier supplied a template."""
    where = f" for scope {scope}" if scope else ""
    _log_info(f"Resolved template '{template_name}' from {tier} tier{where}")


def log_unmatched_block(tag_content: str) -> None:
    """Log an opener that has no balanced closer (rendered literally)."""
    _log_debug(f"No closing tag for {{{{{tag_content}}}}}; rendering literally")

"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from typing import List

from loguru import logger

CONTEXT_PREFIX = "[intake]"


# Wrapper functions with automatic [intake] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_normalization_warnings(trip_label: str, warnings: List[str]) -> None:
    """Log every repair made while normalizing a trip."""
    if not warnings:
        _log_debug(f"{trip_label}: normalized without repairs")
        return
    _log_warning(f"{trip_label}: {len(warnings)} repair(s) during normalization")
    for warning in warnings:
        _log_warning(f"  {warning}")


def log_normalization_complete(trip_label: str, elapsed_time: float) -> None:
    """Log normalization timing."""
    _log_debug(f"{trip_label}: normalized in {elapsed_time:.3f}s")

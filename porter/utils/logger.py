"""
Session logging for PORTER commands.

One render (or batch of renders) gets one log directory. The file sink keeps
every DEBUG line for later inspection; the console sink goes to stderr so HTML
written to stdout stays clean.

Context-specific prefix wrappers live in contexts/{context}/logger.py.
"""

import os
import platform
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from porter import __version__

load_dotenv()
CONSOLE_LEVEL = os.getenv("PORTER_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <7}</level> | <level>{message}</level>"

# Repairs are logged as warnings, so they get a colour that reads as advisory
CONSOLE_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Route loguru output to a session log file and stderr.

    Args:
        context_name: Names the log file ({context_name}.log)
        log_dir: Session directory, created if missing
        extra_provenance: Extra header lines (template, settings file, ...)
        console_level: Minimum console level (default: PORTER_LOG_LEVEL or INFO)

    Returns:
        Path to the log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in CONSOLE_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=console_level or CONSOLE_LEVEL,
        colorize=True,
    )

    write_session_header(context_name, extra_provenance)
    return log_file


def write_session_header(context_name: str, extra: Optional[Dict[str, str]] = None) -> None:
    """Record what produced this log: command line, versions and caller extras."""
    lines = {
        "Session": context_name,
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Porter": __version__,
        "Python": platform.python_version(),
        **(extra or {}),
    }
    width = max(len(key) for key in lines)

    logger.debug("-" * 60)
    for key, value in lines.items():
        logger.debug(f"{key.ljust(width)} : {value}")
    logger.debug("-" * 60)

"""
Logging utilities for the Automata onboarding core.

Provides standardized logger configuration following privacy rules.

PRIVACY RULES:
- NEVER log a full business description (it may name people or places)
- NEVER log custom automation text verbatim
- Truncate free text to a short preview when it helps debugging

Acceptable logging:
- High-level events (e.g., "Industry detected", "Recommendations ranked")
- Non-sensitive metadata (e.g., "template_id='birthday-rewards'", counts)
- Recovery events (e.g., "Discarded expired onboarding state")
"""

import logging
from typing import Optional

from automata.config import settings

PREVIEW_LENGTH = 50


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from automata.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = settings.log_level()

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: Optional[str], length: int = PREVIEW_LENGTH) -> str:
    """Shorten free text for log lines ("" for None)."""
    if not text:
        return ""
    return text if len(text) <= length else f"{text[:length]}..."

"""Shared utilities for agent implementations."""

import functools
import logging
import re
import time
from typing import Any, Callable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NUMBER_PATTERN = re.compile(r"\b\d+(?:\.\d+)?\b")


def log_agent_action(agent_name: str):
    """
    Decorator to log agent stage actions.

    Args:
        agent_name: Name of the agent for logging

    Usage:
        @log_agent_action("DifficultyCalibrator")
        async def process(self, context):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger.info("[%s] Starting %s", agent_name, func.__name__)
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.error("[%s] Error in %s: %s", agent_name, func.__name__, e)
                raise
            logger.info(
                "[%s] Completed %s in %dms",
                agent_name,
                func.__name__,
                elapsed_ms(started),
            )
            return result

        return wrapper

    return decorator


def elapsed_ms(started: float) -> int:
    """Milliseconds since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - started) * 1000)


def extract_numbers(text: str) -> List[float]:
    """Return every integer or decimal literal in ``text``, in order."""
    return [float(match) for match in _NUMBER_PATTERN.findall(text or "")]


def format_number(value: Any) -> str:
    """Render 8.0 as ``8`` and 2.5 as ``2.5``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def truncate_text(text: str, max_length: int = 1000, suffix: str = "...") -> str:
    """
    Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length (default 1000)
        suffix: Suffix to add when truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix

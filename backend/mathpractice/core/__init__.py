"""Core configuration, logging and error types."""

from .config import Settings, get_settings
from .exceptions import (
    BackendError,
    BackendTimeoutError,
    GradingError,
    GradingParseError,
    GradingTimeoutError,
    InvalidSubmissionError,
    PracticeError,
)
from .logging import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "PracticeError",
    "BackendError",
    "BackendTimeoutError",
    "GradingError",
    "GradingParseError",
    "GradingTimeoutError",
    "InvalidSubmissionError",
]

"""Difficulty Calibrator Agent - deterministic difficulty settings."""

from .agent import (
    DifficultyCalibrator,
    analyze_complexity,
    calculate_number_range,
    calculate_type_limits,
    calibrate,
    get_allowed_operations,
)

__all__ = [
    "DifficultyCalibrator",
    "analyze_complexity",
    "calculate_number_range",
    "calculate_type_limits",
    "calibrate",
    "get_allowed_operations",
]

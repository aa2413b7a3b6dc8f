"""Grade-calibrated math practice question generation and answer grading."""

__version__ = "0.1.0"

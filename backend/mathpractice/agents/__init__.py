"""Math Practice - Agents Package.

This package contains the agents for the practice platform:
- Generation Workflow: curriculum-aware question generation (``generation``)
- Answer Validation: partial-credit grading of submissions (``validation``)
"""

from .base import BackendRegistry, build_backends, get_llm

__all__ = [
    "get_llm",
    "build_backends",
    "BackendRegistry",
]

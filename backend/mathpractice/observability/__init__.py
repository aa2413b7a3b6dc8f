"""Tracing helpers."""

from .langsmith import build_run_config, initialize_langsmith

__all__ = ["build_run_config", "initialize_langsmith"]

"""Context Enhancer Agent module."""

from .agent import ContextEnhancer, calculate_engagement, choose_style_by_grade, has_story_context

__all__ = ["ContextEnhancer", "calculate_engagement", "choose_style_by_grade", "has_story_context"]

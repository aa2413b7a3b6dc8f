"""Curriculum Analyzer Agent - vector context and learning objectives."""

from .agent import CurriculumAnalyzer, build_search_query
from .data import lookup_curriculum, nearest_grade

__all__ = ["CurriculumAnalyzer", "build_search_query", "lookup_curriculum", "nearest_grade"]

"""Quality Validator Agent module."""

from .agent import QualityValidator, diversity_score, text_similarity, validate_question

__all__ = ["QualityValidator", "diversity_score", "text_similarity", "validate_question"]

"""Base infrastructure for all agents."""

from .interfaces import EmbeddingProvider, TextGenerator, VectorSearch, make_random
from .llm import BackendRegistry, BackendVariant, ChatBackend, build_backends, get_llm
from .state import DifficultyLevel, EducationalAgent, QuestionType, SimilarQuestion

__all__ = [
    "get_llm",
    "build_backends",
    "BackendRegistry",
    "BackendVariant",
    "ChatBackend",
    "EmbeddingProvider",
    "TextGenerator",
    "VectorSearch",
    "make_random",
    "DifficultyLevel",
    "EducationalAgent",
    "QuestionType",
    "SimilarQuestion",
]

"""Vector search over curated practice questions."""

from .embeddings import EmbeddingService
from .question_store import ChromaQuestionStore

__all__ = ["EmbeddingService", "ChromaQuestionStore"]

"""Embedding generation using an OpenAI-compatible API."""

import logging
from typing import List

from langchain_openai import OpenAIEmbeddings

from ..core.config import Settings

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Service for generating query embeddings using an OpenAI-compatible backend."""

    def __init__(self, settings: Settings):
        """Initialize the embedding service configuration."""
        self.settings = settings
        api_key = settings.EMBEDDINGS_API_KEY
        base = (settings.EMBEDDINGS_BASE_URL or "").lower()
        if not api_key and ("127.0.0.1" in base or "localhost" in base):
            api_key = "ollama"

        self.embeddings = OpenAIEmbeddings(
            base_url=settings.EMBEDDINGS_BASE_URL,
            api_key=api_key,
            model=settings.EMBEDDINGS_MODEL,
            # Local servers expect raw strings, not tiktoken token arrays.
            tiktoken_enabled=False,
            check_embedding_ctx_length=False,
        )

    async def embed_query(self, text: str) -> List[float]:
        """
        Generate the embedding for a search phrase.

        Args:
            text: Text string to embed

        Returns:
            Embedding vector as list of floats
        """
        vector = await self.embeddings.aembed_query(text)
        if len(vector) != self.settings.EMBEDDINGS_DIMENSIONS:
            logger.warning(
                "Embedding model %s returned %d dimensions, expected %d",
                self.settings.EMBEDDINGS_MODEL,
                len(vector),
                self.settings.EMBEDDINGS_DIMENSIONS,
            )
        return vector

"""Question Vector Store - curated practice questions for retrieval.

Read-only access to a ChromaDB collection of real practice questions. Each
record stores the question text as its document and ``explanation``,
``type`` and ``grade`` as metadata. Populating the collection is handled by
a separate indexing job.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import chromadb
from chromadb.config import Settings as ChromaSettings

from ..agents.base.state import SimilarQuestion
from ..core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_where(filters: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Translate flat equality filters into a Chroma ``where`` clause."""
    if not filters:
        return None
    clauses = [{key: value} for key, value in filters.items() if value is not None]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def distance_to_score(distance: Optional[float]) -> float:
    """Cosine distance to a similarity score in [0, 1]."""
    if distance is None:
        return 0.0
    return max(0.0, min(1.0, 1.0 - distance))


def to_similar_questions(results: Dict[str, Any]) -> List[SimilarQuestion]:
    """Convert a Chroma query result for a single embedding."""
    documents = (results.get("documents") or [[]])[0] or []
    metadatas = (results.get("metadatas") or [[]])[0] or []
    distances = (results.get("distances") or [[]])[0] or []

    questions = []
    for index, document in enumerate(documents):
        metadata = metadatas[index] if index < len(metadatas) and metadatas[index] else {}
        distance = distances[index] if index < len(distances) else None
        questions.append(SimilarQuestion(
            question=document or "",
            explanation=metadata.get("explanation") or None,
            type=str(metadata.get("type", "")),
            score=distance_to_score(distance),
        ))
    return questions


class ChromaQuestionStore:
    """
    Similarity search over stored practice questions.

    Structure: ./data/vector_db/questions/ with one cosine collection.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        collection: Optional[Any] = None,
    ):
        """
        Initialize the store.

        Args:
            settings: Application settings (uses default if None)
            collection: Pre-built collection, mainly for tests
        """
        self.settings = settings or get_settings()
        self._collection = collection

    def _get_client(self) -> chromadb.ClientAPI:
        path = Path(self.settings.QUESTION_VECTOR_DB_PATH)
        path.mkdir(parents=True, exist_ok=True)
        return chromadb.PersistentClient(
            path=str(path),
            settings=ChromaSettings(anonymized_telemetry=False),
        )

    @property
    def collection(self) -> Any:
        """Get or create the questions collection."""
        if self._collection is None:
            self._collection = self._get_client().get_or_create_collection(
                name=self.settings.QUESTION_COLLECTION_NAME,
                metadata={"hnsw:space": "cosine"},
            )
        return self._collection

    async def search(
        self,
        embedding: List[float],
        k: int = 5,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[SimilarQuestion]:
        """Return up to ``k`` nearest questions matching ``filters``."""
        query: Dict[str, Any] = {
            "query_embeddings": [embedding],
            "n_results": k,
            "include": ["documents", "metadatas", "distances"],
        }
        where = build_where(filters)
        if where:
            query["where"] = where

        # chromadb is synchronous; keep the event loop free
        results = await asyncio.to_thread(self.collection.query, **query)
        questions = to_similar_questions(results)
        logger.debug("Vector search returned %d question(s) for %s", len(questions), filters)
        return questions

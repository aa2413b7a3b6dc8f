"""
Tests for the Chroma-backed question store.
"""

import pytest

from mathpractice.core.config import Settings
from mathpractice.vector.question_store import (
    ChromaQuestionStore,
    build_where,
    distance_to_score,
    to_similar_questions,
)


class FakeCollection:
    """Records ``query`` calls and returns a canned Chroma result."""

    def __init__(self, result):
        self.result = result
        self.queries = []

    def query(self, **kwargs):
        self.queries.append(kwargs)
        return self.result


CHROMA_RESULT = {
    "ids": [["q1", "q2"]],
    "documents": [["What is 12 + 7?", "What is 40 + 3?"]],
    "metadatas": [[
        {"explanation": "Add ones then tens.", "type": "addition", "grade": 3},
        {"type": "addition", "grade": 3},
    ]],
    "distances": [[0.08, 1.4]],
}


class TestQuestionStoreHelpers:
    """Filter translation and score conversion."""

    def test_build_where(self):
        assert build_where(None) is None
        assert build_where({"type": "addition"}) == {"type": "addition"}
        assert build_where({"type": "addition", "grade": 3}) == {
            "$and": [{"type": "addition"}, {"grade": 3}]
        }

    def test_distance_to_score_is_clamped(self):
        assert distance_to_score(0.25) == 0.75
        assert distance_to_score(1.4) == 0.0
        assert distance_to_score(-0.1) == 1.0
        assert distance_to_score(None) == 0.0

    def test_to_similar_questions(self):
        questions = to_similar_questions(CHROMA_RESULT)
        assert [q.question for q in questions] == ["What is 12 + 7?", "What is 40 + 3?"]
        assert questions[0].explanation == "Add ones then tens."
        assert questions[0].score == pytest.approx(0.92)
        assert questions[1].explanation is None
        assert questions[1].score == 0.0

    def test_empty_result(self):
        assert to_similar_questions({"documents": [[]]}) == []


@pytest.mark.asyncio
class TestChromaQuestionStore:
    """Search against an injected collection."""

    async def test_search(self):
        collection = FakeCollection(CHROMA_RESULT)
        store = ChromaQuestionStore(Settings(_env_file=None), collection=collection)

        results = await store.search([0.1, 0.2], k=2, filters={"type": "addition", "grade": 3})

        assert len(results) == 2
        query = collection.queries[0]
        assert query["query_embeddings"] == [[0.1, 0.2]]
        assert query["n_results"] == 2
        assert query["where"] == {"$and": [{"type": "addition"}, {"grade": 3}]}

    async def test_search_without_filters(self):
        collection = FakeCollection({"documents": [[]], "metadatas": [[]], "distances": [[]]})
        store = ChromaQuestionStore(Settings(_env_file=None), collection=collection)

        assert await store.search([0.1], k=5) == []
        assert "where" not in collection.queries[0]

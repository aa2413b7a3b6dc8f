"""
Tests for the Curriculum Analyzer Agent.
"""

import pytest

from mathpractice.agents.base.state import DifficultyLevel, QuestionType
from mathpractice.agents.generation.curriculum import (
    CurriculumAnalyzer,
    build_search_query,
    lookup_curriculum,
    nearest_grade,
)

from conftest import FailingVectorSearch, SlowVectorSearch, make_context


@pytest.mark.asyncio
class TestCurriculumAnalyzer:
    """Vector context retrieval and curriculum lookup."""

    async def test_similar_questions_ranked_and_capped(self, fake_embeddings, fake_vector_search):
        agent = CurriculumAnalyzer(fake_embeddings, fake_vector_search, top_k=2)

        context = await agent.process(make_context())

        scores = [item.score for item in context.curriculum_context.similar_questions]
        assert scores == [0.92, 0.75]
        assert context.has_vector_context

    async def test_search_uses_type_and_grade_filters(self, fake_embeddings, fake_vector_search):
        agent = CurriculumAnalyzer(fake_embeddings, fake_vector_search, top_k=3)

        await agent.process(make_context(grade=3))

        call = fake_vector_search.calls[0]
        assert call["k"] == 3
        assert call["filters"] == {"type": "addition", "grade": 3}
        assert fake_embeddings.queries[0].endswith("grade 3 easy")

    async def test_filters_can_be_disabled(self, fake_embeddings, fake_vector_search):
        agent = CurriculumAnalyzer(fake_embeddings, fake_vector_search, filter_by_type=False)

        await agent.process(make_context())

        assert fake_vector_search.calls[0]["filters"] is None

    async def test_search_failure_degrades_to_no_examples(self, fake_embeddings):
        agent = CurriculumAnalyzer(fake_embeddings, FailingVectorSearch())

        context = await agent.process(make_context())

        assert context.curriculum_context.similar_questions == []
        assert context.curriculum_context.learning_objectives
        assert not context.has_vector_context
        assert any("vector search failed" in warning for warning in context.workflow.warnings)
        assert context.workflow.errors == []

    async def test_search_timeout_degrades_to_no_examples(self, fake_embeddings):
        agent = CurriculumAnalyzer(fake_embeddings, SlowVectorSearch(), search_timeout=0.01)

        context = await agent.process(make_context())

        assert context.curriculum_context.similar_questions == []
        assert any("timed out" in warning for warning in context.workflow.warnings)


class TestCurriculumData:
    """Static objective tables."""

    def test_search_query_contains_keywords(self):
        context = make_context(QuestionType.DIVISION, DifficultyLevel.HARD, grade=5)
        query = build_search_query(context)
        assert "divi" in query
        assert query.endswith("grade 5 hard")

    def test_nearest_grade(self):
        assert nearest_grade(3) == 3
        assert nearest_grade(7) == 6
        assert nearest_grade(12) == 8

    def test_missing_type_gets_generic_objective(self):
        objectives, prerequisites = lookup_curriculum(1, QuestionType.DIVISION)
        assert objectives == ["Practice division skills"]
        assert prerequisites == []

    def test_known_entry(self):
        objectives, prerequisites = lookup_curriculum(1, QuestionType.ADDITION)
        assert "Add within 10 using objects and drawings" in objectives
        assert "Counting to 20" in prerequisites

"""Curriculum Analyzer Agent.

Retrieves similar past questions from the vector store and attaches the
learning objectives and prerequisite skills for the requested grade and type.
"""

import asyncio
import logging
from typing import Any, Dict, List

from ...base.interfaces import EmbeddingProvider, VectorSearch
from ...base.state import EducationalAgent, SimilarQuestion
from ...base.utils import log_agent_action
from ..state import CurriculumContext, WorkflowContext
from .data import SEARCH_KEYWORDS, lookup_curriculum

logger = logging.getLogger(__name__)


def build_search_query(context: WorkflowContext) -> str:
    """Search phrase: type keywords plus grade and difficulty tokens."""
    keywords = SEARCH_KEYWORDS.get(context.question_type, context.question_type.label)
    return f"{keywords} grade {context.grade} {context.difficulty.value}"


class CurriculumAnalyzer(EducationalAgent):
    """Attaches curriculum metadata and vector-retrieved examples."""

    name = "CurriculumAnalyzer"
    description = "Retrieves similar questions and curriculum objectives for the request"

    def __init__(
        self,
        embeddings: EmbeddingProvider,
        vector_search: VectorSearch,
        top_k: int = 5,
        search_timeout: float = 5.0,
        filter_by_type: bool = True,
    ):
        self.embeddings = embeddings
        self.vector_search = vector_search
        self.top_k = top_k
        self.search_timeout = search_timeout
        self.filter_by_type = filter_by_type

    @log_agent_action("CurriculumAnalyzer")
    async def process(self, context: WorkflowContext) -> WorkflowContext:
        context.enter_step(self.name)

        objectives, prerequisites = lookup_curriculum(context.grade, context.question_type)
        similar_questions = await self._find_similar_questions(context)

        context.curriculum_context = CurriculumContext(
            learning_objectives=objectives,
            prerequisite_skills=prerequisites,
            similar_questions=similar_questions,
        )
        logger.info(
            "Curriculum context for grade %d %s: %d objectives, %d similar questions",
            context.grade,
            context.question_type.value,
            len(objectives),
            len(similar_questions),
        )
        return context

    def _build_filters(self, context: WorkflowContext) -> Dict[str, Any]:
        if not self.filter_by_type:
            return {}
        return {"type": context.question_type.value, "grade": context.grade}

    async def _find_similar_questions(self, context: WorkflowContext) -> List[SimilarQuestion]:
        """Vector search; any failure degrades to an empty list."""
        query = build_search_query(context)
        try:
            embedding = await asyncio.wait_for(
                self.embeddings.embed_query(query),
                timeout=self.search_timeout,
            )
            results = await asyncio.wait_for(
                self.vector_search.search(
                    embedding,
                    k=self.top_k,
                    filters=self._build_filters(context) or None,
                ),
                timeout=self.search_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Vector search timed out after %ss for %r", self.search_timeout, query)
            context.add_warning(f"{self.name}: vector search timed out, continuing without examples")
            return []
        except Exception as e:
            logger.warning("Vector search failed for %r: %s", query, e)
            context.add_warning(f"{self.name}: vector search failed ({e}), continuing without examples")
            return []

        ranked = sorted(results, key=lambda item: item.score, reverse=True)
        return ranked[: self.top_k]

"""
Pytest configuration and fixtures.

The agents only talk to collaborators through small protocols, so the tests
replace backends, embeddings and the vector store with scripted doubles.
"""

import asyncio
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mathpractice.agents.base.interfaces import make_random
from mathpractice.agents.base.llm import BackendRegistry
from mathpractice.agents.base.state import DifficultyLevel, QuestionType, SimilarQuestion
from mathpractice.agents.generation.state import (
    GeneratedQuestion,
    QuestionMetadata,
    WorkflowContext,
)

Reply = Union[str, Exception, Callable[[str], str]]


class ScriptedBackend:
    """A ``TextGenerator`` that replays canned replies and records calls."""

    def __init__(self, name: str, replies: Sequence[Reply], model: Optional[str] = None):
        self.name = name
        self.model = model or f"{name}-model"
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> str:
        self.calls.append({"prompt": prompt, "temperature": temperature, "timeout": timeout})
        # The last reply repeats once the script runs out.
        index = min(len(self.calls) - 1, len(self.replies) - 1)
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


class FakeEmbeddings:
    """Deterministic embedding provider."""

    def __init__(self, dimensions: int = 4):
        self.dimensions = dimensions
        self.queries: List[str] = []

    async def embed_query(self, text: str) -> List[float]:
        self.queries.append(text)
        return [0.1] * self.dimensions


class FakeVectorSearch:
    """Returns a fixed result list and records each search."""

    def __init__(self, results: Optional[List[SimilarQuestion]] = None):
        self.results = results or []
        self.calls: List[Dict[str, Any]] = []

    async def search(self, embedding, k=5, filters=None) -> List[SimilarQuestion]:
        self.calls.append({"embedding": embedding, "k": k, "filters": filters})
        return list(self.results)


class FailingVectorSearch:
    """Simulates an unreachable vector store."""

    async def search(self, embedding, k=5, filters=None) -> List[SimilarQuestion]:
        raise ConnectionError("vector store unavailable")


class SlowVectorSearch:
    """Never answers within a short deadline."""

    async def search(self, embedding, k=5, filters=None) -> List[SimilarQuestion]:
        await asyncio.sleep(5)
        return []


def labelled_reply(question: str, answer: str, explanation: str = "Add the two numbers together.") -> str:
    return f"Question: {question}\nAnswer: {answer}\nExplanation: {explanation}"


def make_question(
    text: str,
    answer: float,
    explanation: Optional[str] = "Add the numbers to find the total.",
) -> GeneratedQuestion:
    return GeneratedQuestion(
        text=text,
        answer=answer,
        explanation=explanation,
        confidence=0.8,
        metadata=QuestionMetadata(
            model_used="fast-model",
            backend="fast",
            generation_time_ms=5,
            vector_context_used=False,
        ),
    )


def make_context(
    question_type: QuestionType = QuestionType.ADDITION,
    difficulty: DifficultyLevel = DifficultyLevel.EASY,
    grade: int = 3,
    count: int = 2,
) -> WorkflowContext:
    return WorkflowContext(
        question_type=question_type,
        difficulty=difficulty,
        grade=grade,
        count=count,
    )


@pytest.fixture
def similar_questions() -> List[SimilarQuestion]:
    """Three stored questions in ascending score order."""
    return [
        SimilarQuestion(question="What is 12 + 7?", explanation="Add ones then tens.", type="addition", score=0.61),
        SimilarQuestion(question="What is 23 + 14?", explanation="Add tens and ones.", type="addition", score=0.92),
        SimilarQuestion(question="What is 8 + 9?", explanation=None, type="addition", score=0.75),
    ]


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def fake_vector_search(similar_questions) -> FakeVectorSearch:
    return FakeVectorSearch(similar_questions)


@pytest.fixture
def seeded_rng():
    return make_random(1234)


@pytest.fixture
def addition_backends() -> BackendRegistry:
    """Fast and high-capacity backends that both answer with addition questions."""
    fast = ScriptedBackend("fast", [
        labelled_reply("What is 4 + 5?", "9"),
        labelled_reply("What is 6 + 7?", "13"),
        labelled_reply("What is 3 + 8?", "11"),
    ])
    high_capacity = ScriptedBackend("high-capacity", [
        labelled_reply("What is 14 + 15?", "29"),
    ])
    return BackendRegistry(fast=fast, high_capacity=high_capacity)

"""Collaborator interfaces consumed by the agents.

The agents only depend on these protocols; the production implementations
live in ``agents.base.llm`` and ``mathpractice.vector``. Tests pass doubles.
"""

import random
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .state import SimilarQuestion


@runtime_checkable
class TextGenerator(Protocol):
    """A named text-generation backend."""

    name: str
    model: str

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Return the raw completion text for ``prompt``."""
        ...


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Turns text into a fixed-dimension vector."""

    async def embed_query(self, text: str) -> List[float]:
        ...


@runtime_checkable
class VectorSearch(Protocol):
    """Nearest-neighbour lookup over stored practice questions."""

    async def search(
        self,
        embedding: List[float],
        k: int = 5,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[SimilarQuestion]:
        ...


def make_random(seed: Optional[int] = None) -> random.Random:
    """Create an isolated random source; seeded sources are reproducible."""
    return random.Random(seed)

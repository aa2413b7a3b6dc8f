"""Shared enums, base models and the agent base class.

Every generation stage implements ``EducationalAgent.process`` and mutates the
request-scoped workflow context in place.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from ..generation.state import WorkflowContext


class QuestionType(str, Enum):
    """Kinds of practice question the pipeline can produce."""

    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    PATTERN = "pattern"
    FRACTION_ADDITION = "fraction_addition"
    FRACTION_SUBTRACTION = "fraction_subtraction"
    FRACTION_MULTIPLICATION = "fraction_multiplication"
    FRACTION_DIVISION = "fraction_division"
    DECIMAL_ADDITION = "decimal_addition"
    WORD_PROBLEM_MIXED = "word_problem_mixed"
    AREA_CALCULATION = "area_calculation"

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``fraction addition``."""
        return self.value.replace("_", " ")

    @property
    def is_fraction(self) -> bool:
        return self.value.startswith("fraction_")


class DifficultyLevel(str, Enum):
    """Requested difficulty of a batch."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class CamelModel(BaseModel):
    """Base model that serialises to camelCase JSON for the controller layer."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class SimilarQuestion(CamelModel):
    """A read-only vector search hit."""

    question: str
    explanation: Optional[str] = None
    type: str = ""
    score: float = Field(default=0.0, ge=0.0, le=1.0)


class EducationalAgent(ABC):
    """Base class for a stage of the generation workflow."""

    name: str = "EducationalAgent"
    description: str = ""

    @abstractmethod
    async def process(self, context: "WorkflowContext") -> "WorkflowContext":
        """Run this stage against the context and return it."""

"""State definitions for the question generation workflow.

A ``WorkflowContext`` is created once per generation request, mutated in place
by each stage, and discarded once the response has been serialised. It is
never shared between requests.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, model_validator

from ..base.state import CamelModel, DifficultyLevel, QuestionType, SimilarQuestion

Complexity = Literal["simple", "moderate", "complex"]
CognitiveLoad = Literal["low", "medium", "high"]
ContextType = Literal["real-world", "story", "visual", "none"]


class CurriculumContext(CamelModel):
    """Curriculum analysis results."""

    learning_objectives: List[str] = Field(default_factory=list)
    prerequisite_skills: List[str] = Field(default_factory=list)
    similar_questions: List[SimilarQuestion] = Field(default_factory=list)


class NumberRange(CamelModel):
    """Inclusive range of operand values."""

    min: int
    max: int

    @model_validator(mode="after")
    def _check_bounds(self) -> "NumberRange":
        if self.min > self.max:
            raise ValueError(f"number range min {self.min} exceeds max {self.max}")
        return self


class TypeLimits(CamelModel):
    """Operation-specific caps layered on top of the number range."""

    max_divisor: Optional[int] = None
    max_dividend: Optional[int] = None
    max_factor: Optional[int] = None
    max_denominator: Optional[int] = None
    max_numerator: Optional[int] = None


class DifficultySettings(CamelModel):
    """Difficulty calibration results."""

    number_range: NumberRange
    complexity: Complexity
    cognitive_load: CognitiveLoad
    allowed_operations: List[str] = Field(default_factory=list)
    type_limits: TypeLimits = Field(default_factory=TypeLimits)


class QuestionMetadata(CamelModel):
    model_used: str
    backend: str
    generation_time_ms: int
    vector_context_used: bool


class GeneratedQuestion(CamelModel):
    """A parsed question produced by one generation iteration."""

    text: str
    answer: float
    explanation: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)
    metadata: QuestionMetadata


class QualityChecks(CamelModel):
    """Quality validation results for the generated batch."""

    mathematical_accuracy: bool = True
    age_appropriateness: bool = True
    pedagogical_soundness: bool = True
    diversity_score: float = Field(default=1.0, ge=0.0, le=1.0)
    issues: List[str] = Field(default_factory=list)


class EnhancedQuestion(CamelModel):
    """A question after optional story / real-world framing."""

    original_text: str
    enhanced_text: str
    context_type: ContextType
    engagement_score: float = Field(ge=0.0, le=1.0)


class WorkflowStatus(CamelModel):
    """Workflow metadata."""

    current_step: str = "initialized"
    start_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_steps: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class WorkflowContext(CamelModel):
    """Mutable, request-scoped record threaded through every stage."""

    # Input parameters
    question_type: QuestionType
    difficulty: DifficultyLevel
    grade: int
    count: int

    # Stage outputs
    curriculum_context: Optional[CurriculumContext] = None
    difficulty_settings: Optional[DifficultySettings] = None
    questions: List[GeneratedQuestion] = Field(default_factory=list)
    quality_checks: Optional[QualityChecks] = None
    enhanced_questions: List[EnhancedQuestion] = Field(default_factory=list)

    workflow: WorkflowStatus = Field(default_factory=WorkflowStatus)

    @property
    def has_vector_context(self) -> bool:
        return bool(self.curriculum_context and self.curriculum_context.similar_questions)

    def enter_step(self, step: str) -> None:
        self.workflow.current_step = step

    def complete_step(self, step: str) -> None:
        self.workflow.completed_steps.append(step)

    def add_error(self, source: str, message: str) -> None:
        self.workflow.errors.append(f"{source}: {message}")

    def add_warning(self, message: str) -> None:
        self.workflow.warnings.append(message)


# =============================================================================
# Requests
# =============================================================================

class WorksheetRequest(CamelModel):
    """A plain practice-sheet request."""

    kind: Literal["worksheet"] = "worksheet"
    question_type: QuestionType
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    grade: int = Field(ge=1, le=12)
    count: int = Field(default=5, ge=1, le=20)
    enhance: bool = True


class Persona(CamelModel):
    """Learner profile attached to personalised requests."""

    user_id: str = ""
    grade: int = Field(ge=1, le=12)
    learning_style: str = "visual"
    interests: List[str] = Field(default_factory=list)
    cultural_context: str = ""


class PersonaRequest(CamelModel):
    """A request built from a learner persona and a subject/topic."""

    kind: Literal["persona"] = "persona"
    subject: str = "mathematics"
    topic: str = ""
    question_type: QuestionType
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    count: int = Field(default=5, ge=1, le=20)
    persona: Persona
    enhance: bool = True


GenerationRequest = Annotated[
    Union[WorksheetRequest, PersonaRequest],
    Field(discriminator="kind"),
]

_request_adapter: TypeAdapter = TypeAdapter(GenerationRequest)


def parse_generation_request(data: Dict[str, Any]) -> Union[WorksheetRequest, PersonaRequest]:
    """Validate a deserialised request body; ``kind`` defaults to worksheet."""
    payload = dict(data)
    payload.setdefault("kind", "worksheet")
    return _request_adapter.validate_python(payload)


def create_workflow_context(request: Union[WorksheetRequest, PersonaRequest]) -> WorkflowContext:
    """
    Create the initial context for a request.

    This is the only place that distinguishes request shapes; every stage
    downstream sees the same ``WorkflowContext``.
    """
    if isinstance(request, PersonaRequest):
        grade = request.persona.grade
    elif isinstance(request, WorksheetRequest):
        grade = request.grade
    else:
        raise TypeError(f"Unsupported generation request: {type(request).__name__}")

    return WorkflowContext(
        question_type=request.question_type,
        difficulty=request.difficulty,
        grade=grade,
        count=request.count,
    )

"""Submission and result models for answer validation."""

from datetime import datetime, timezone
from typing import List

from pydantic import Field

from ..base.state import CamelModel

MAX_QUESTION_SCORE = 10
CORRECT_THRESHOLD = 8
IMPROVEMENT_THRESHOLD = 6


class StudentAnswer(CamelModel):
    question_id: str = ""
    question_text: str = ""
    student_answer: str = ""


class AnswerSubmission(CamelModel):
    """A student's answers for one practice session."""

    session_id: str = ""
    student_id: str = ""
    student_email: str = ""
    answers: List[StudentAnswer] = Field(default_factory=list)
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class QuestionValidationResult(CamelModel):
    question_id: str
    question_text: str
    student_answer: str
    score: float = Field(ge=0, le=MAX_QUESTION_SCORE)
    max_score: int = MAX_QUESTION_SCORE
    feedback: str
    is_correct: bool


class QualityMetrics(CamelModel):
    model_used: str
    validation_time_ms: int


class ValidationResult(CamelModel):
    """Graded submission returned to the caller."""

    success: bool = True
    session_id: str
    total_score: float
    max_score: int
    percentage_score: int
    questions: List[QuestionValidationResult]
    overall_feedback: str
    strengths: List[str] = Field(default_factory=list)
    areas_for_improvement: List[str] = Field(default_factory=list)
    quality_metrics: QualityMetrics

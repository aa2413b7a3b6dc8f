"""Answer Validation Agent for partial-credit grading."""

from .agent import (
    AnswerValidationAgent,
    analyze_performance,
    build_answer_validation_agent,
    extract_concept,
    parse_grading_response,
    validate_submission,
)
from .state import AnswerSubmission, QuestionValidationResult, StudentAnswer, ValidationResult

__all__ = [
    "AnswerValidationAgent",
    "build_answer_validation_agent",
    "analyze_performance",
    "extract_concept",
    "parse_grading_response",
    "validate_submission",
    "AnswerSubmission",
    "QuestionValidationResult",
    "StudentAnswer",
    "ValidationResult",
]

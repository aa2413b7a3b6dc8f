"""Answer Validation Agent.

Grades free-text student answers with partial credit (0-10 per question)
using the high-capacity backend, then summarises the submission with overall
feedback, strengths and areas for improvement.

A submission is graded completely or not at all: any invalid input, backend
failure, timeout or unparseable grade raises.
"""

import json
import logging
import math
import time
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from ...core.config import Settings, get_settings
from ...core.exceptions import (
    BackendTimeoutError,
    GradingParseError,
    GradingTimeoutError,
    InvalidSubmissionError,
)
from ..base.interfaces import TextGenerator
from ..base.llm import BackendRegistry, build_backends
from ..base.utils import elapsed_ms, truncate_text
from .prompts import (
    DEFAULT_IMPROVEMENT_AREA,
    DEFAULT_STRENGTH,
    FEEDBACK_BANDS,
    GRADING_PROMPT,
    OVERALL_FEEDBACK,
)
from .state import (
    CORRECT_THRESHOLD,
    IMPROVEMENT_THRESHOLD,
    MAX_QUESTION_SCORE,
    AnswerSubmission,
    QualityMetrics,
    QuestionValidationResult,
    StudentAnswer,
    ValidationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_GRADING_TIMEOUT = 120.0
DEFAULT_GRADING_TEMPERATURE = 0.3

# (keywords, concept) checked in order; the first match wins.
CONCEPT_KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    (("addition", "+", "add"), "Addition operations"),
    (("subtraction", "-", "subtract"), "Subtraction operations"),
    (("multiplication", "×", "multiply"), "Multiplication operations"),
    (("division", "÷", "divide"), "Division operations"),
    (("water cycle", "evaporation"), "Water cycle understanding"),
]


def validate_submission(submission: AnswerSubmission) -> None:
    """Raise ``InvalidSubmissionError`` if a required field is missing."""
    if not submission.session_id.strip():
        raise InvalidSubmissionError("Session ID is required")
    if not submission.student_id.strip():
        raise InvalidSubmissionError("Student ID is required")
    if not submission.student_email.strip():
        raise InvalidSubmissionError("Student email is required")
    if not submission.answers:
        raise InvalidSubmissionError("No answers provided in submission")

    for answer in submission.answers:
        if not (answer.question_id.strip() and answer.question_text.strip() and answer.student_answer.strip()):
            raise InvalidSubmissionError(
                "Each answer must have questionId, questionText, and studentAnswer"
            )


def build_grading_prompt(answer: StudentAnswer) -> str:
    return GRADING_PROMPT.format(
        question_text=answer.question_text,
        student_answer=answer.student_answer,
    )


def parse_grading_response(response: str) -> Dict[str, Any]:
    """
    Extract and validate the first JSON object in a grading reply.

    Returns:
        Dict with ``score`` (float), ``feedback`` (str) and ``is_correct`` (bool)

    Raises:
        GradingParseError: no JSON object, or a field is missing or invalid
    """
    start = response.find("{")
    if start == -1:
        raise GradingParseError("No JSON found in LLM response", raw_response=response)

    try:
        parsed, _ = json.JSONDecoder().raw_decode(response[start:])
    except json.JSONDecodeError as e:
        raise GradingParseError(f"Invalid JSON in LLM response: {e.msg}", raw_response=response) from e

    if not isinstance(parsed, dict):
        raise GradingParseError("No JSON object found in LLM response", raw_response=response)

    score = parsed.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= MAX_QUESTION_SCORE:
        raise GradingParseError("Invalid score in LLM response", raw_response=response)

    feedback = parsed.get("feedback")
    if not isinstance(feedback, str) or not feedback:
        raise GradingParseError("Invalid feedback in LLM response", raw_response=response)

    is_correct = parsed.get("isCorrect")
    if not isinstance(is_correct, bool):
        raise GradingParseError("Invalid isCorrect in LLM response", raw_response=response)

    return {"score": float(score), "feedback": feedback, "is_correct": is_correct}


def percentage_of(total_score: float, max_score: int) -> int:
    """Percentage rounded half up."""
    return int(math.floor(total_score / max_score * 100 + 0.5))


def build_overall_feedback(results: List[QuestionValidationResult], percentage: int) -> str:
    correct = sum(1 for result in results if result.is_correct)
    for minimum, opening, closing in FEEDBACK_BANDS:
        if percentage >= minimum:
            return OVERALL_FEEDBACK.format(
                opening=opening,
                percentage=percentage,
                correct=correct,
                total=len(results),
                closing=closing,
            )
    return ""


def extract_concept(question_text: str) -> Optional[str]:
    lowered = question_text.lower()
    for keywords, concept in CONCEPT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return concept

    words = question_text.split(" ")
    if len(words) > 3:
        return f"Understanding of {' '.join(words[:3])}"
    return None


def analyze_performance(results: List[QuestionValidationResult]) -> Tuple[List[str], List[str]]:
    """Strengths come from scores >= 8, improvement areas from scores < 6."""
    strengths: List[str] = []
    areas: List[str] = []

    for result in results:
        if result.score >= CORRECT_THRESHOLD:
            target = strengths
        elif result.score < IMPROVEMENT_THRESHOLD:
            target = areas
        else:
            continue
        concept = extract_concept(result.question_text)
        if concept and concept not in target:
            target.append(concept)

    if not strengths and any(result.score >= IMPROVEMENT_THRESHOLD for result in results):
        strengths.append(DEFAULT_STRENGTH)
    if not areas and any(result.score < CORRECT_THRESHOLD for result in results):
        areas.append(DEFAULT_IMPROVEMENT_AREA)

    return strengths, areas


class AnswerValidationAgent:
    """AI grading with partial credit scoring and constructive feedback."""

    name = "AnswerValidationAgent"
    description = "AI validation with partial credit scoring and constructive feedback"

    def __init__(
        self,
        backend: TextGenerator,
        timeout: float = DEFAULT_GRADING_TIMEOUT,
        temperature: float = DEFAULT_GRADING_TEMPERATURE,
    ):
        self.backend = backend
        self.timeout = timeout
        self.temperature = temperature

    async def validate_answers(
        self,
        submission: Union[AnswerSubmission, Dict[str, Any]],
    ) -> ValidationResult:
        """
        Grade every answer in a submission.

        Answers are graded one after another. The first failure aborts the
        whole submission.

        Raises:
            InvalidSubmissionError: before any backend call, for malformed input
            GradingTimeoutError: a grading call exceeded its deadline
            GradingParseError: the grading reply could not be parsed
            BackendError: the backend was unreachable or returned an error
        """
        started = time.perf_counter()

        if not isinstance(submission, AnswerSubmission):
            try:
                submission = AnswerSubmission.model_validate(submission)
            except ValidationError as e:
                raise InvalidSubmissionError(f"Malformed submission: {e}") from e
        validate_submission(submission)

        results = []
        for answer in submission.answers:
            results.append(await self._validate_single_answer(answer))

        total_score = sum(result.score for result in results)
        max_score = len(results) * MAX_QUESTION_SCORE
        percentage = percentage_of(total_score, max_score)
        strengths, areas = analyze_performance(results)

        validation_time_ms = elapsed_ms(started)
        logger.info(
            "Answer validation complete: model=%s time=%dms questions=%d score=%d%%",
            self.backend.model,
            validation_time_ms,
            len(results),
            percentage,
        )

        return ValidationResult(
            success=True,
            session_id=submission.session_id,
            total_score=total_score,
            max_score=max_score,
            percentage_score=percentage,
            questions=results,
            overall_feedback=build_overall_feedback(results, percentage),
            strengths=strengths,
            areas_for_improvement=areas,
            quality_metrics=QualityMetrics(
                model_used=self.backend.model,
                validation_time_ms=validation_time_ms,
            ),
        )

    async def _validate_single_answer(self, answer: StudentAnswer) -> QuestionValidationResult:
        prompt = build_grading_prompt(answer)

        try:
            response = await self.backend.generate(
                prompt,
                temperature=self.temperature,
                timeout=self.timeout,
            )
        except BackendTimeoutError as e:
            logger.error("Grading timed out for question %s", answer.question_id)
            raise GradingTimeoutError(answer.question_id, self.timeout, self.backend.model) from e

        try:
            parsed = parse_grading_response(response or "")
        except GradingParseError:
            logger.error(
                "Failed to parse grading response for question %s: %s",
                answer.question_id,
                truncate_text(response or "", 200),
            )
            raise

        is_correct = parsed["score"] >= CORRECT_THRESHOLD
        if is_correct != parsed["is_correct"]:
            logger.warning(
                "Grader isCorrect=%s disagrees with score %g for question %s",
                parsed["is_correct"],
                parsed["score"],
                answer.question_id,
            )

        return QuestionValidationResult(
            question_id=answer.question_id,
            question_text=answer.question_text,
            student_answer=answer.student_answer,
            score=parsed["score"],
            feedback=parsed["feedback"],
            is_correct=is_correct,
        )


def build_answer_validation_agent(
    backends: Optional[BackendRegistry] = None,
    settings: Optional[Settings] = None,
) -> AnswerValidationAgent:
    """Wire the agent to the production high-capacity backend."""
    settings = settings or get_settings()
    backends = backends or build_backends(settings)
    return AnswerValidationAgent(
        backends.high_capacity,
        timeout=settings.GRADING_TIMEOUT_SECONDS,
        temperature=settings.GRADING_TEMPERATURE,
    )

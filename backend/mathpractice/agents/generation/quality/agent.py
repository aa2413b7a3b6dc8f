"""Quality Validator Agent.

Checks generated questions for arithmetic accuracy, age appropriateness and
pedagogical soundness, and scores the diversity of the batch. Issues are
reported as workflow warnings; they never remove questions.
"""

import logging
import math
from typing import Dict, List, Optional

from ...base.state import EducationalAgent, QuestionType
from ...base.utils import extract_numbers, format_number, log_agent_action
from ..state import GeneratedQuestion, NumberRange, QualityChecks, WorkflowContext

logger = logging.getLogger(__name__)

ANSWER_TOLERANCE = 0.01
DIVERSITY_THRESHOLD = 0.5
MAX_QUESTION_WORDS = 50

TYPE_KEYWORDS: Dict[QuestionType, List[str]] = {
    QuestionType.ADDITION: ["add", "plus", "sum", "total", "altogether", "+"],
    QuestionType.SUBTRACTION: ["subtract", "minus", "difference", "less", "remove", "left", "-"],
    QuestionType.MULTIPLICATION: ["multiply", "times", "product", "groups of", "each", "×", "*"],
    QuestionType.DIVISION: ["divide", "divided by", "quotient", "share", "equal groups", "each", "÷", "/"],
    QuestionType.FRACTION_ADDITION: ["fraction", "numerator", "denominator", "parts", "/"],
    QuestionType.DECIMAL_ADDITION: ["decimal", "point", "tenths", "hundredths", "."],
}


def expected_answer(numbers: List[float], question_type: QuestionType) -> Optional[float]:
    """Answer implied by the first two operands, when the type allows it."""
    if len(numbers) < 2:
        return None
    a, b = numbers[0], numbers[1]
    if question_type == QuestionType.ADDITION:
        return a + b
    if question_type == QuestionType.SUBTRACTION:
        return a - b
    if question_type == QuestionType.MULTIPLICATION:
        return a * b
    if question_type == QuestionType.DIVISION:
        return a / b if b != 0 else None
    return None


def check_mathematical_accuracy(question: GeneratedQuestion, question_type: QuestionType) -> List[str]:
    numbers = extract_numbers(question.text)
    if len(numbers) < 2 and question_type != QuestionType.PATTERN:
        return ["Question should contain at least two numbers for mathematical operations"]

    expected = expected_answer(numbers, question_type)
    if expected is not None and abs(expected - question.answer) > ANSWER_TOLERANCE:
        return [
            f"Mathematical error: expected answer {format_number(expected)}, "
            f"got {format_number(question.answer)}"
        ]
    return []


def check_age_appropriateness(
    question: GeneratedQuestion,
    grade: int,
    number_range: Optional[NumberRange],
) -> List[str]:
    issues = []
    for number in extract_numbers(question.text):
        shown = format_number(number)
        if number_range and not number_range.min <= number <= number_range.max:
            issues.append(
                f"Number {shown} is outside age-appropriate range "
                f"({number_range.min}-{number_range.max})"
            )
        if grade <= 2 and number > 20:
            issues.append(f"Number {shown} too large for grade {grade}")
        elif grade <= 4 and number > 100:
            issues.append(f"Number {shown} too large for grade {grade}")

    answer_limit = 50 if grade <= 2 else 500 if grade <= 4 else 5000
    if abs(question.answer) > answer_limit:
        issues.append(f"Answer {format_number(question.answer)} may be too large for grade {grade}")
    return issues


def check_pedagogical_soundness(question: GeneratedQuestion, question_type: QuestionType) -> List[str]:
    issues = []
    if len(question.text.split()) > MAX_QUESTION_WORDS:
        issues.append("Question text may be too long and complex")

    if not question.explanation or len(question.explanation) < 5:
        issues.append("Question lacks proper explanation for educational value")

    keywords = TYPE_KEYWORDS.get(question_type)
    if keywords and not any(keyword in question.text.lower() for keyword in keywords):
        issues.append(f"Question content doesn't match {question_type.value} type")
    return issues


def text_similarity(first: str, second: str) -> float:
    """Jaccard similarity of lower-cased word sets."""
    words_first = set(first.lower().split())
    words_second = set(second.lower().split())
    union = words_first | words_second
    if not union:
        return 0.0
    return len(words_first & words_second) / len(union)


def diversity_score(questions: List[GeneratedQuestion]) -> float:
    """0.4 x answer uniqueness + 0.6 x (1 - mean pairwise text similarity)."""
    if len(questions) <= 1:
        return 1.0

    unique_answers = {round(question.answer) for question in questions}
    score = 0.4 * len(unique_answers) / len(questions)

    similarities = [
        text_similarity(questions[i].text, questions[j].text)
        for i in range(len(questions))
        for j in range(i + 1, len(questions))
    ]
    average = sum(similarities) / len(similarities) if similarities else 0.0
    score += 0.6 * (1 - average)

    return max(0.0, min(1.0, score))


def validate_question(
    question: GeneratedQuestion,
    question_type: QuestionType,
    grade: int,
    number_range: Optional[NumberRange],
) -> List[str]:
    issues = []
    if not question.text or len(question.text) < 10:
        issues.append("Question text is too short or missing")
    if not math.isfinite(question.answer):
        issues.append("Answer is not a valid number")

    issues.extend(check_mathematical_accuracy(question, question_type))
    issues.extend(check_age_appropriateness(question, grade, number_range))
    issues.extend(check_pedagogical_soundness(question, question_type))
    return issues


class QualityValidator(EducationalAgent):
    """Sets ``quality_checks`` on the context."""

    name = "QualityValidator"
    description = "Validates question quality for mathematical accuracy and educational appropriateness"

    @log_agent_action("QualityValidator")
    async def process(self, context: WorkflowContext) -> WorkflowContext:
        context.enter_step(self.name)

        if not context.questions:
            context.add_warning("No questions to validate")
            return context

        number_range = context.difficulty_settings.number_range if context.difficulty_settings else None
        checks = QualityChecks()

        for index, question in enumerate(context.questions, start=1):
            issues = validate_question(question, context.question_type, context.grade, number_range)
            if not issues:
                continue

            checks.issues.extend(f"Question {index}: {issue}" for issue in issues)
            if any("Mathematical" in issue or "mathematical" in issue for issue in issues):
                checks.mathematical_accuracy = False
            if any("age" in issue or "grade" in issue for issue in issues):
                checks.age_appropriateness = False
            if any("educational" in issue or "pedagogical" in issue or "match" in issue for issue in issues):
                checks.pedagogical_soundness = False

        checks.diversity_score = diversity_score(context.questions)
        if checks.diversity_score < DIVERSITY_THRESHOLD and len(context.questions) > 1:
            checks.issues.append("Questions lack sufficient diversity")

        context.quality_checks = checks
        for issue in checks.issues:
            context.add_warning(f"{self.name}: {issue}")

        logger.info("Quality checks found %d issue(s)", len(checks.issues))
        return context

"""
Tests for the Quality Validator Agent.
"""

import pytest

from mathpractice.agents.base.state import DifficultyLevel, QuestionType
from mathpractice.agents.generation.calibration import calibrate
from mathpractice.agents.generation.quality import (
    QualityValidator,
    diversity_score,
    text_similarity,
    validate_question,
)

from conftest import make_context, make_question


def grade_three_context(*questions):
    context = make_context(QuestionType.ADDITION, DifficultyLevel.EASY, grade=3, count=len(questions) or 1)
    context.difficulty_settings = calibrate(3, DifficultyLevel.EASY, QuestionType.ADDITION)
    context.questions = list(questions)
    return context


@pytest.mark.asyncio
class TestQualityValidator:
    """Batch checks reported as warnings."""

    async def test_clean_batch(self):
        context = grade_three_context(
            make_question("What is 4 + 5?", 9),
            make_question("What is 6 + 7?", 13),
        )

        context = await QualityValidator().process(context)

        checks = context.quality_checks
        assert checks.mathematical_accuracy
        assert checks.age_appropriateness
        assert checks.pedagogical_soundness
        assert checks.issues == []
        assert checks.diversity_score >= 0.5
        assert context.workflow.warnings == []

    async def test_wrong_answer_is_flagged(self):
        context = grade_three_context(make_question("What is 4 + 5?", 10))

        context = await QualityValidator().process(context)

        assert not context.quality_checks.mathematical_accuracy
        assert context.quality_checks.issues == [
            "Question 1: Mathematical error: expected answer 9, got 10"
        ]
        assert context.workflow.warnings == [
            "QualityValidator: Question 1: Mathematical error: expected answer 9, got 10"
        ]
        # Issues never remove questions.
        assert len(context.questions) == 1

    async def test_numbers_outside_range(self):
        context = grade_three_context(make_question("What is 30 + 5?", 35))

        context = await QualityValidator().process(context)

        assert not context.quality_checks.age_appropriateness
        assert any("outside age-appropriate range (1-25)" in issue for issue in context.quality_checks.issues)

    async def test_repeated_questions_lack_diversity(self):
        question = make_question("What is 4 + 5?", 9)
        context = grade_three_context(question, question, question)

        context = await QualityValidator().process(context)

        assert context.quality_checks.diversity_score < 0.5
        assert "Questions lack sufficient diversity" in context.quality_checks.issues

    async def test_no_questions(self):
        context = grade_three_context()

        context = await QualityValidator().process(context)

        assert context.quality_checks is None
        assert context.workflow.warnings == ["No questions to validate"]


class TestQualityHelpers:
    """Pure scoring helpers."""

    def test_missing_explanation(self):
        issues = validate_question(
            make_question("What is 4 + 5?", 9, explanation=None),
            QuestionType.ADDITION,
            3,
            None,
        )
        assert "Question lacks proper explanation for educational value" in issues

    def test_type_keyword_mismatch(self):
        issues = validate_question(
            make_question("What is 12 divided by 3?", 4),
            QuestionType.MULTIPLICATION,
            4,
            None,
        )
        assert any("doesn't match multiplication type" in issue for issue in issues)

    def test_small_grades_reject_large_numbers(self):
        issues = validate_question(make_question("What is 25 + 3?", 28), QuestionType.ADDITION, 2, None)
        assert "Number 25 too large for grade 2" in issues

    def test_text_similarity(self):
        assert text_similarity("what is four", "What is four") == 1.0
        assert text_similarity("alpha beta", "gamma delta") == 0.0

    def test_single_question_is_fully_diverse(self):
        assert diversity_score([make_question("What is 4 + 5?", 9)]) == 1.0

"""
Tests for the Difficulty Calibrator Agent.
"""

import pytest

from mathpractice.agents.base.state import DifficultyLevel, QuestionType
from mathpractice.agents.generation.calibration import (
    DifficultyCalibrator,
    analyze_complexity,
    calculate_number_range,
    calculate_type_limits,
    calibrate,
    get_allowed_operations,
)

from conftest import make_context

GRADES = range(1, 9)
DIFFICULTIES = [DifficultyLevel.EASY, DifficultyLevel.MEDIUM, DifficultyLevel.HARD]


class TestNumberRange:
    """Grade and difficulty scaling of operand ranges."""

    @pytest.mark.parametrize("difficulty,expected_max", [
        (DifficultyLevel.EASY, 25),
        (DifficultyLevel.MEDIUM, 37),
        (DifficultyLevel.HARD, 50),
    ])
    def test_grade_three_addition(self, difficulty, expected_max):
        number_range = calculate_number_range(3, difficulty, QuestionType.ADDITION)
        assert number_range.min == 1
        assert number_range.max == expected_max

    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_max_never_decreases_with_grade(self, difficulty):
        maxima = [
            calculate_number_range(grade, difficulty, QuestionType.ADDITION).max
            for grade in GRADES
        ]
        assert maxima == sorted(maxima)

    @pytest.mark.parametrize("grade", GRADES)
    def test_easy_never_exceeds_hard(self, grade):
        easy = calculate_number_range(grade, DifficultyLevel.EASY, QuestionType.SUBTRACTION)
        hard = calculate_number_range(grade, DifficultyLevel.HARD, QuestionType.SUBTRACTION)
        assert easy.max <= hard.max

    @pytest.mark.parametrize("grade", GRADES)
    @pytest.mark.parametrize("difficulty", DIFFICULTIES)
    def test_min_not_above_max(self, grade, difficulty):
        number_range = calculate_number_range(grade, difficulty, QuestionType.DIVISION)
        assert number_range.min <= number_range.max

    def test_grades_above_table_use_highest_band(self):
        assert calculate_number_range(12, DifficultyLevel.HARD, QuestionType.ADDITION).max == 2000


class TestTypeLimits:
    """Operation-specific caps."""

    @pytest.mark.parametrize("grade", GRADES)
    def test_divisor_capped_at_twelve(self, grade):
        limits = calculate_type_limits(grade, QuestionType.DIVISION)
        assert 1 <= limits.max_divisor <= 12

    def test_grade_one_divisor_is_small(self):
        assert calculate_type_limits(1, QuestionType.DIVISION).max_divisor == 2

    def test_factor_uses_square_root(self):
        assert calculate_type_limits(4, QuestionType.MULTIPLICATION).max_factor == 10
        assert calculate_type_limits(8, QuestionType.MULTIPLICATION).max_factor == 12

    def test_fraction_caps(self):
        limits = calculate_type_limits(5, QuestionType.FRACTION_ADDITION)
        assert limits.max_denominator == 9
        assert limits.max_numerator == 15

        limits = calculate_type_limits(8, QuestionType.FRACTION_DIVISION)
        assert limits.max_denominator == 12
        assert limits.max_numerator == 20

    def test_addition_has_no_extra_caps(self):
        limits = calculate_type_limits(3, QuestionType.ADDITION)
        assert limits.max_divisor is None
        assert limits.max_factor is None


class TestComplexity:
    """Complexity and cognitive load bands."""

    def test_early_grades_start_simple(self):
        assert analyze_complexity(2, DifficultyLevel.EASY, QuestionType.FRACTION_ADDITION) == ("simple", "low")

    def test_hard_shifts_up(self):
        assert analyze_complexity(1, DifficultyLevel.HARD, QuestionType.ADDITION) == ("moderate", "medium")
        assert analyze_complexity(5, DifficultyLevel.HARD, QuestionType.FRACTION_ADDITION) == ("complex", "high")

    def test_upper_grades_raise_floor(self):
        assert analyze_complexity(6, DifficultyLevel.MEDIUM, QuestionType.ADDITION) == ("moderate", "medium")
        assert analyze_complexity(6, DifficultyLevel.EASY, QuestionType.ADDITION) == ("simple", "low")


class TestAllowedOperations:
    """Grade filtering and difficulty truncation."""

    def test_early_grades_drop_regrouping(self):
        assert get_allowed_operations(2, QuestionType.ADDITION, DifficultyLevel.HARD) == ["single-digit"]

    def test_difficulty_truncates(self):
        assert get_allowed_operations(4, QuestionType.ADDITION, DifficultyLevel.EASY) == ["single-digit"]
        assert get_allowed_operations(4, QuestionType.ADDITION, DifficultyLevel.MEDIUM) == [
            "single-digit",
            "double-digit",
        ]
        assert len(get_allowed_operations(4, QuestionType.ADDITION, DifficultyLevel.HARD)) == 3

    def test_unknown_type_falls_back_to_basic(self):
        assert get_allowed_operations(5, QuestionType.WORD_PROBLEM_MIXED, DifficultyLevel.HARD) == ["basic"]


@pytest.mark.asyncio
class TestDifficultyCalibratorAgent:
    """Agent wiring."""

    async def test_process_sets_settings(self):
        context = make_context(QuestionType.DIVISION, DifficultyLevel.MEDIUM, grade=4)

        context = await DifficultyCalibrator().process(context)

        assert context.difficulty_settings == calibrate(4, DifficultyLevel.MEDIUM, QuestionType.DIVISION)
        assert context.difficulty_settings.type_limits.max_divisor == 12
        assert context.workflow.current_step == "DifficultyCalibrator"
        assert context.workflow.errors == []

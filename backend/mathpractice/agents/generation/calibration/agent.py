"""Difficulty Calibrator Agent.

Pure, deterministic calibration of age-appropriate number ranges, complexity,
cognitive load and allowed operations. Keeps divisors and factors small so
younger students never see problems like division by 100+.
"""

import logging
import math
from typing import Dict, List, Tuple

from ...base.state import DifficultyLevel, EducationalAgent, QuestionType
from ...base.utils import log_agent_action
from ..state import (
    CognitiveLoad,
    Complexity,
    DifficultySettings,
    NumberRange,
    TypeLimits,
    WorkflowContext,
)

logger = logging.getLogger(__name__)

MIN_GRADE = 1
MAX_GRADE = 8

GRADE_BASE_RANGES: Dict[int, Tuple[int, int]] = {
    1: (1, 10),
    2: (1, 20),
    3: (1, 50),
    4: (1, 100),
    5: (1, 200),
    6: (1, 500),
    7: (1, 1000),
    8: (1, 2000),
}

DIFFICULTY_MULTIPLIERS: Dict[DifficultyLevel, float] = {
    DifficultyLevel.EASY: 0.5,
    DifficultyLevel.MEDIUM: 0.75,
    DifficultyLevel.HARD: 1.0,
}

MAX_DIVISOR = 12
MAX_FACTOR = 12
MAX_DENOMINATOR = 12
MAX_NUMERATOR = 20

COMPLEXITY_LEVELS: Tuple[Complexity, ...] = ("simple", "moderate", "complex")
COGNITIVE_LOAD_LEVELS: Tuple[CognitiveLoad, ...] = ("low", "medium", "high")

TYPE_COMPLEXITY: Dict[QuestionType, Complexity] = {
    QuestionType.ADDITION: "simple",
    QuestionType.SUBTRACTION: "simple",
    QuestionType.MULTIPLICATION: "moderate",
    QuestionType.DIVISION: "moderate",
    QuestionType.PATTERN: "moderate",
    QuestionType.FRACTION_ADDITION: "complex",
    QuestionType.FRACTION_SUBTRACTION: "complex",
    QuestionType.FRACTION_MULTIPLICATION: "complex",
    QuestionType.FRACTION_DIVISION: "complex",
    QuestionType.DECIMAL_ADDITION: "complex",
    QuestionType.WORD_PROBLEM_MIXED: "complex",
    QuestionType.AREA_CALCULATION: "moderate",
}

# Ordered simplest first; difficulty truncation keeps a prefix.
BASE_OPERATIONS: Dict[QuestionType, List[str]] = {
    QuestionType.ADDITION: ["single-digit", "double-digit", "carrying"],
    QuestionType.SUBTRACTION: ["single-digit", "double-digit", "borrowing"],
    QuestionType.MULTIPLICATION: ["single-digit", "by-10", "double-digit"],
    QuestionType.DIVISION: ["by-single-digit", "remainder", "exact-division"],
    QuestionType.PATTERN: ["counting-on", "skip-counting", "growing-patterns"],
    QuestionType.FRACTION_ADDITION: ["proper-fractions", "like-denominators", "unlike-denominators"],
    QuestionType.FRACTION_SUBTRACTION: ["proper-fractions", "like-denominators", "unlike-denominators"],
    QuestionType.FRACTION_MULTIPLICATION: ["fraction-by-whole", "fraction-by-fraction", "mixed-numbers"],
    QuestionType.FRACTION_DIVISION: ["fraction-by-whole", "fraction-by-fraction", "mixed-numbers"],
    QuestionType.DECIMAL_ADDITION: ["tenths", "hundredths", "decimal-operations"],
    QuestionType.AREA_CALCULATION: ["rectangles", "squares", "composite-shapes"],
}

# Operations that need regrouping or place value beyond grade 2.
_EARLY_GRADE_EXCLUDED = ("double-digit", "borrowing", "carrying")

_OPERATIONS_BY_DIFFICULTY: Dict[DifficultyLevel, int] = {
    DifficultyLevel.EASY: 1,
    DifficultyLevel.MEDIUM: 2,
}


def clamp_grade(grade: int) -> int:
    return max(MIN_GRADE, min(MAX_GRADE, grade))


def base_range(grade: int) -> Tuple[int, int]:
    return GRADE_BASE_RANGES[clamp_grade(grade)]


def calculate_number_range(
    grade: int,
    difficulty: DifficultyLevel,
    question_type: QuestionType,
) -> NumberRange:
    """Operand range for a grade, shrunk by difficulty."""
    low, high = base_range(grade)
    adjusted_max = math.floor(high * DIFFICULTY_MULTIPLIERS[difficulty])

    if question_type == QuestionType.DIVISION:
        adjusted_max = min(adjusted_max, high)

    return NumberRange(min=low, max=max(low, adjusted_max))


def calculate_type_limits(grade: int, question_type: QuestionType) -> TypeLimits:
    """Operation-specific caps: small divisors, factors and denominators."""
    _, high = base_range(grade)

    if question_type == QuestionType.DIVISION:
        return TypeLimits(
            max_divisor=max(1, min(MAX_DIVISOR, high // 4)),
            max_dividend=high,
        )
    if question_type == QuestionType.MULTIPLICATION:
        return TypeLimits(max_factor=max(1, min(MAX_FACTOR, math.isqrt(high))))
    if question_type.is_fraction:
        return TypeLimits(
            max_denominator=min(MAX_DENOMINATOR, grade + 4),
            max_numerator=min(MAX_NUMERATOR, grade * 3),
        )
    return TypeLimits()


def _shift(levels: Tuple[str, ...], current: str, steps: int) -> str:
    index = levels.index(current) + steps
    return levels[max(0, min(len(levels) - 1, index))]


def analyze_complexity(
    grade: int,
    difficulty: DifficultyLevel,
    question_type: QuestionType,
) -> Tuple[Complexity, CognitiveLoad]:
    """Complexity and cognitive load after grade band and difficulty shifts."""
    complexity: Complexity = TYPE_COMPLEXITY.get(question_type, "moderate")
    cognitive_load: CognitiveLoad = "medium"

    if grade <= 2:
        complexity = "simple"
        cognitive_load = "low"
    elif grade >= 6:
        if complexity == "simple":
            complexity = "moderate"
        cognitive_load = "medium"

    if difficulty == DifficultyLevel.HARD:
        complexity = _shift(COMPLEXITY_LEVELS, complexity, 1)
        cognitive_load = _shift(COGNITIVE_LOAD_LEVELS, cognitive_load, 1)
    elif difficulty == DifficultyLevel.EASY:
        complexity = _shift(COMPLEXITY_LEVELS, complexity, -1)
        cognitive_load = _shift(COGNITIVE_LOAD_LEVELS, cognitive_load, -1)

    return complexity, cognitive_load


def get_allowed_operations(
    grade: int,
    question_type: QuestionType,
    difficulty: DifficultyLevel,
) -> List[str]:
    """Allowed operations, filtered by grade then truncated by difficulty."""
    operations = list(BASE_OPERATIONS.get(question_type, ["basic"]))

    if grade < 3:
        operations = [
            op for op in operations
            if not any(excluded in op for excluded in _EARLY_GRADE_EXCLUDED)
        ]

    limit = _OPERATIONS_BY_DIFFICULTY.get(difficulty)
    if limit is not None:
        operations = operations[:limit]

    return operations or ["basic"]


def calibrate(
    grade: int,
    difficulty: DifficultyLevel,
    question_type: QuestionType,
) -> DifficultySettings:
    """Full calibration for one request."""
    complexity, cognitive_load = analyze_complexity(grade, difficulty, question_type)
    return DifficultySettings(
        number_range=calculate_number_range(grade, difficulty, question_type),
        complexity=complexity,
        cognitive_load=cognitive_load,
        allowed_operations=get_allowed_operations(grade, question_type, difficulty),
        type_limits=calculate_type_limits(grade, question_type),
    )


class DifficultyCalibrator(EducationalAgent):
    """Sets ``difficulty_settings`` on the context."""

    name = "DifficultyCalibrator"
    description = "Calibrates difficulty settings to ensure age-appropriate mathematical challenges"

    @log_agent_action("DifficultyCalibrator")
    async def process(self, context: WorkflowContext) -> WorkflowContext:
        context.enter_step(self.name)
        try:
            context.difficulty_settings = calibrate(
                context.grade,
                context.difficulty,
                context.question_type,
            )
        except ValueError as e:
            logger.error("Difficulty calibration failed: %s", e)
            context.add_error(self.name, str(e))
            return context

        settings = context.difficulty_settings
        logger.debug(
            "Calibrated grade %d %s %s: range=%d-%d complexity=%s load=%s",
            context.grade,
            context.difficulty.value,
            context.question_type.value,
            settings.number_range.min,
            settings.number_range.max,
            settings.complexity,
            settings.cognitive_load,
        )
        return context

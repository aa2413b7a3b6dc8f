"""Prompts for the Question Generator Agent."""

from typing import List

from ...base.state import QuestionType
from ..state import WorkflowContext

MAX_PROMPT_EXAMPLES = 3

TASK_PROMPT = "Generate a grade {grade} {difficulty} difficulty {type_label} math question.\n\n"

EXAMPLES_HEADER = (
    "Here are examples of real questions for this grade and topic. "
    "Match this style and complexity, but create a new question "
    "(do not copy an example):\n\n"
)

DIVISION_NOTE = (
    "IMPORTANT: For division problems, keep divisors small (at most {max_divisor}) "
    "so the question is age-appropriate.\n"
)

RESPONSE_FORMAT = """Format your response as:
Question: [your question here]
Answer: [numeric answer]
Explanation: [brief explanation of the solution method]"""


def _objectives_section(context: WorkflowContext) -> str:
    curriculum = context.curriculum_context
    if not curriculum or not curriculum.learning_objectives:
        return ""
    lines = ["Learning Objectives:"]
    lines.extend(f"- {objective}" for objective in curriculum.learning_objectives)
    return "\n".join(lines) + "\n\n"


def _examples_section(context: WorkflowContext) -> str:
    if not context.has_vector_context:
        return ""
    section = EXAMPLES_HEADER
    examples = context.curriculum_context.similar_questions[:MAX_PROMPT_EXAMPLES]
    for index, example in enumerate(examples, start=1):
        section += f"Example {index}: {example.question}\n"
        if example.explanation:
            section += f"Explanation: {example.explanation}\n"
        section += "\n"
    return section


def _constraints_section(context: WorkflowContext) -> str:
    settings = context.difficulty_settings
    if not settings:
        return ""

    section = (
        f"Number Range: Use numbers between {settings.number_range.min} "
        f"and {settings.number_range.max}\n"
    )

    limits = settings.type_limits
    if context.question_type == QuestionType.DIVISION and limits.max_divisor:
        section += DIVISION_NOTE.format(max_divisor=limits.max_divisor)
    if limits.max_factor:
        section += f"Keep each factor at or below {limits.max_factor}.\n"
    if limits.max_denominator:
        section += (
            f"Use denominators no larger than {limits.max_denominator} "
            f"and numerators no larger than {limits.max_numerator}.\n"
        )

    if settings.allowed_operations:
        section += f"Allowed Operations: {', '.join(settings.allowed_operations)}\n"

    return section + "\n"


def _requirements_section(context: WorkflowContext, previous_questions: List[str]) -> str:
    type_label = context.question_type.label
    lines = [
        "Requirements:",
        f"- Is appropriate for grade {context.grade} students",
        f"- Has {context.difficulty.value} difficulty level",
        f"- Focuses on {type_label} skills",
        "- Uses age-appropriate numbers and context",
        "- Has a single numeric answer",
    ]
    if previous_questions:
        lines.append(
            f"- Is different from the previous {len(previous_questions)} question(s) in this set:"
        )
        lines.extend(f"  * {text}" for text in previous_questions)
    return "\n".join(lines) + "\n\n"


def build_generation_prompt(context: WorkflowContext, previous_questions: List[str]) -> str:
    """Compose the context-aware prompt for one generation iteration."""
    prompt = TASK_PROMPT.format(
        grade=context.grade,
        difficulty=context.difficulty.value,
        type_label=context.question_type.label,
    )
    prompt += _objectives_section(context)
    prompt += _examples_section(context)
    prompt += _constraints_section(context)
    prompt += _requirements_section(context, previous_questions)
    prompt += RESPONSE_FORMAT
    return prompt

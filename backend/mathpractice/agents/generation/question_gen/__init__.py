"""Question Generator Agent - prompt composition, routing and parsing."""

from .agent import QuestionGenerator, calculate_confidence
from .parsing import (
    ParsedQuestion,
    ParseResult,
    parse_equation,
    parse_labelled,
    parse_question_response,
    parse_raw,
)
from .prompts import build_generation_prompt

__all__ = [
    "QuestionGenerator",
    "calculate_confidence",
    "build_generation_prompt",
    "ParsedQuestion",
    "ParseResult",
    "parse_equation",
    "parse_labelled",
    "parse_question_response",
    "parse_raw",
]

"""Parsers that turn a free-text model reply into a question.

Each layer is a pure function returning a ``ParseResult``. The layers are
tried in order (labelled lines, bare equation, raw text) until one succeeds.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

_ANSWER_NUMBER = re.compile(r"[+-]?\d*\.?\d+")
_EQUATION = re.compile(
    r"((\d+(?:\.\d+)?)\s*[+\-*/×÷]\s*(\d+(?:\.\d+)?))\s*=\s*(-?\d+(?:\.\d+)?)"
)
_LINE_DECORATION = "*#>_ \t"


@dataclass(frozen=True)
class ParsedQuestion:
    question: str
    answer: float
    explanation: Optional[str] = None
    strategy: str = ""


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one parsing layer."""

    ok: bool
    value: Optional[ParsedQuestion] = None
    reason: str = ""

    @classmethod
    def success(cls, value: ParsedQuestion) -> "ParseResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "ParseResult":
        return cls(ok=False, reason=reason)


Parser = Callable[[str], ParseResult]


def _label_value(line: str, label: str) -> Optional[str]:
    """Return the text after ``label:`` if the line starts with it."""
    cleaned = line.strip().lstrip(_LINE_DECORATION)
    prefix = f"{label}:"
    if not cleaned.lower().startswith(prefix):
        return None
    return cleaned[len(prefix):].strip().lstrip("*").strip()


def parse_labelled(text: str) -> ParseResult:
    """Scan ``Question:`` / ``Answer:`` / ``Explanation:`` lines (any case)."""
    question = ""
    answer = 0.0
    explanation = ""

    for line in text.splitlines():
        if not line.strip():
            continue

        value = _label_value(line, "question")
        if value is not None:
            question = value
            continue

        value = _label_value(line, "answer")
        if value is not None:
            match = _ANSWER_NUMBER.search(value)
            if match:
                answer = float(match.group(0))
            continue

        value = _label_value(line, "explanation")
        if value is not None:
            explanation = value

    if not question:
        return ParseResult.failure("no 'Question:' line")

    return ParseResult.success(ParsedQuestion(
        question=question,
        answer=answer,
        explanation=explanation or None,
        strategy="labelled",
    ))


def parse_equation(text: str) -> ParseResult:
    """Rebuild a minimal question from ``<num> <op> <num> = <num>``."""
    match = _EQUATION.search(text)
    if not match:
        return ParseResult.failure("no equation found")

    return ParseResult.success(ParsedQuestion(
        question=f"What is {match.group(1)}?",
        answer=float(match.group(4)),
        strategy="equation",
    ))


def parse_raw(text: str) -> ParseResult:
    """Last resort: the whole reply is the question, answer 0."""
    stripped = text.strip()
    if not stripped:
        return ParseResult.failure("empty response")
    return ParseResult.success(ParsedQuestion(question=stripped, answer=0.0, strategy="raw"))


PARSERS: Sequence[Parser] = (parse_labelled, parse_equation, parse_raw)


def parse_question_response(text: str, parsers: Sequence[Parser] = PARSERS) -> ParseResult:
    """Run the parsing layers in order and return the first success."""
    reasons = []
    for parser in parsers:
        result = parser(text)
        if result.ok:
            return result
        reasons.append(result.reason)
    return ParseResult.failure("; ".join(reasons))

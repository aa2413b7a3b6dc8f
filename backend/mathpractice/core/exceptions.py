"""Exception types raised by the practice agents.

Generation failures are recorded on the workflow context and never raised to
the caller. Grading failures are raised: a submission is graded completely or
not at all.
"""

from typing import Optional


class PracticeError(Exception):
    """Base class for all errors raised by this package."""


class BackendError(PracticeError):
    """A text-generation backend failed (transport error or non-2xx status)."""

    def __init__(self, message: str, backend: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.backend = backend
        self.status_code = status_code


class BackendTimeoutError(BackendError):
    """A backend call did not finish before its deadline."""

    def __init__(self, backend: str, timeout: float):
        super().__init__(
            f"{backend} backend timed out after {timeout:g} seconds",
            backend=backend,
        )
        self.timeout = timeout


class GradingError(PracticeError):
    """Base class for failures that abort answer validation."""


class InvalidSubmissionError(GradingError):
    """The answer submission is malformed."""


class GradingTimeoutError(GradingError):
    """Grading a single answer exceeded the grading deadline."""

    def __init__(self, question_id: str, timeout: float, model: str = ""):
        super().__init__(
            f"Grading request for question {question_id} timed out after "
            f"{timeout:g} seconds. Model: {model or 'unknown'}"
        )
        self.question_id = question_id
        self.timeout = timeout
        self.model = model


class GradingParseError(GradingError):
    """The grading model returned output that is not a valid grade."""

    def __init__(self, reason: str, raw_response: str = ""):
        super().__init__(f"Failed to parse LLM response: {reason}")
        self.reason = reason
        self.raw_response = raw_response

"""Question Generator Agent.

Generates the requested number of questions one at a time, using the
retrieved examples and calibrated constraints in the prompt and routing each
call to the fast or high-capacity backend.
"""

import logging
import time
from typing import Optional

from ...base.llm import BackendRegistry
from ...base.state import EducationalAgent
from ...base.utils import elapsed_ms, log_agent_action
from ..state import GeneratedQuestion, QuestionMetadata, WorkflowContext
from .parsing import ParsedQuestion, parse_question_response
from .prompts import build_generation_prompt

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5


def calculate_confidence(context: WorkflowContext, parsed: ParsedQuestion) -> float:
    """Heuristic confidence in [0, 1] for a parsed question."""
    confidence = BASE_CONFIDENCE

    if context.has_vector_context:
        confidence += 0.2
    if context.difficulty_settings is not None:
        confidence += 0.1
    if parsed.explanation and len(parsed.explanation) > 10:
        confidence += 0.1
    if 0 < parsed.answer < 10000:
        confidence += 0.1

    return min(1.0, round(confidence, 4))


class QuestionGenerator(EducationalAgent):
    """Appends generated questions to ``context.questions``."""

    name = "QuestionGenerator"
    description = "Generates questions using vector context and complexity-based model routing"

    def __init__(self, backends: BackendRegistry, timeout: Optional[float] = None):
        self.backends = backends
        self.timeout = timeout

    @log_agent_action("QuestionGenerator")
    async def process(self, context: WorkflowContext) -> WorkflowContext:
        context.enter_step(self.name)

        for index in range(context.count):
            try:
                question = await self._generate_single_question(context)
            except Exception as e:
                # one failed iteration must not abort the batch
                logger.error("Question %d/%d failed: %s", index + 1, context.count, e)
                context.add_error(self.name, f"question {index + 1} failed: {e}")
                continue
            context.questions.append(question)

        if len(context.questions) < context.count:
            logger.warning(
                "Generated %d of %d requested questions",
                len(context.questions),
                context.count,
            )
        return context

    async def _generate_single_question(self, context: WorkflowContext) -> GeneratedQuestion:
        previous = [question.text for question in context.questions]
        prompt = build_generation_prompt(context, previous)

        complexity = context.difficulty_settings.complexity if context.difficulty_settings else None
        backend = self.backends.route(complexity, context.difficulty)

        started = time.perf_counter()
        raw = await backend.generate(prompt, timeout=self.timeout)
        generation_time_ms = elapsed_ms(started)

        result = parse_question_response(raw or "")
        if not result.ok:
            raise ValueError(f"unparseable response from {backend.name} backend: {result.reason}")

        parsed = result.value
        logger.debug("Parsed question via %s strategy: %s", parsed.strategy, parsed.question)

        return GeneratedQuestion(
            text=parsed.question,
            answer=parsed.answer,
            explanation=parsed.explanation,
            confidence=calculate_confidence(context, parsed),
            metadata=QuestionMetadata(
                model_used=backend.model,
                backend=backend.name,
                generation_time_ms=generation_time_ms,
                vector_context_used=context.has_vector_context,
            ),
        )

"""Context Enhancer Agent.

Optionally reframes bare arithmetic questions as short stories or real-world
scenarios so they read better for younger students. All randomness comes
from an injected ``random.Random`` so a seeded source reproduces a batch.
"""

import logging
import random
import re
from typing import Callable, List, Optional

from ...base.interfaces import make_random
from ...base.state import EducationalAgent, QuestionType
from ...base.utils import extract_numbers, format_number, log_agent_action
from ..state import ContextType, EnhancedQuestion, GeneratedQuestion, WorkflowContext
from .templates import (
    CHARACTERS,
    DEFAULT_ENHANCEMENT_PROBABILITY,
    ENHANCEMENT_PROBABILITY,
    REAL_WORLD_TEMPLATES,
    RELATABLE_WORDS,
    STORY_INDICATORS,
    STORY_POOLS,
    STORY_TEMPLATES,
    VISUAL_TEMPLATE,
)

logger = logging.getLogger(__name__)

StyleChooser = Callable[[random.Random, int], ContextType]

PASSTHROUGH_ENGAGEMENT = 0.5
_CHARACTER_PATTERN = re.compile(r"\b[A-Z][a-z]+\b")


def choose_style_by_grade(rng: random.Random, grade: int) -> ContextType:
    """Younger grades lean towards stories, older ones towards real-world use."""
    if grade <= 2:
        return "story" if rng.random() < 0.7 else "real-world"
    if grade <= 4:
        return "story" if rng.random() < 0.5 else "real-world"
    return "real-world" if rng.random() < 0.8 else "story"


def has_story_context(text: str) -> bool:
    lowered = text.lower()
    return any(indicator in lowered for indicator in STORY_INDICATORS)


def calculate_engagement(original_text: str, enhanced_text: str, grade: int) -> float:
    score = 0.5

    if len(enhanced_text) > len(original_text) * 1.5:
        score += 0.2
    if _CHARACTER_PATTERN.search(enhanced_text):
        score += 0.2
    if any(word in enhanced_text.lower() for word in RELATABLE_WORDS):
        score += 0.2
    if grade <= 3 and "story" in enhanced_text:
        score += 0.1

    return min(1.0, round(score, 4))


class ContextEnhancer(EducationalAgent):
    """Fills ``context.enhanced_questions``, one entry per generated question."""

    name = "ContextEnhancer"
    description = "Enhances questions with engaging, age-appropriate real-world context"

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        style_chooser: Optional[StyleChooser] = None,
    ):
        self.rng = rng or make_random()
        self.style_chooser = style_chooser or choose_style_by_grade

    @log_agent_action("ContextEnhancer")
    async def process(self, context: WorkflowContext) -> WorkflowContext:
        context.enter_step(self.name)

        if not context.questions:
            context.add_warning("No questions to enhance")
            return context

        context.enhanced_questions = [
            self.enhance_question(question, context.question_type, context.grade)
            for question in context.questions
        ]

        enhanced = sum(1 for item in context.enhanced_questions if item.context_type != "none")
        logger.info("Enhanced %d of %d questions", enhanced, len(context.questions))
        return context

    def enhance_question(
        self,
        question: GeneratedQuestion,
        question_type: QuestionType,
        grade: int,
    ) -> EnhancedQuestion:
        if not self._should_enhance(question.text, question_type):
            return self._passthrough(question.text)

        numbers = extract_numbers(question.text)
        if len(numbers) < 2:
            return self._passthrough(question.text)

        style = self.style_chooser(self.rng, grade)
        enhanced_text = self._render(question.text, question_type, style, numbers)
        if style == "none" or enhanced_text == question.text:
            return self._passthrough(question.text)

        return EnhancedQuestion(
            original_text=question.text,
            enhanced_text=enhanced_text,
            context_type=style,
            engagement_score=calculate_engagement(question.text, enhanced_text, grade),
        )

    def _should_enhance(self, text: str, question_type: QuestionType) -> bool:
        # Already framed as a word problem; wrapping it again reads badly.
        if has_story_context(text):
            return False
        probability = ENHANCEMENT_PROBABILITY.get(question_type, DEFAULT_ENHANCEMENT_PROBABILITY)
        return self.rng.random() < probability

    def _render(
        self,
        text: str,
        question_type: QuestionType,
        style: ContextType,
        numbers: List[float],
    ) -> str:
        a, b = format_number(numbers[0]), format_number(numbers[1])

        if style == "visual":
            return VISUAL_TEMPLATE.format(text=text)

        if style == "story" and question_type in STORY_TEMPLATES:
            values = {"name": self.rng.choice(CHARACTERS), "a": a, "b": b}
            for key, pool in STORY_POOLS[question_type].items():
                pick = self.rng.choice(pool)
                if isinstance(pick, tuple):
                    values[f"{key}_plural"], values[key] = pick
                else:
                    values[key] = pick
            return STORY_TEMPLATES[question_type].format(**values)

        if style == "real-world" and question_type in REAL_WORLD_TEMPLATES:
            return self.rng.choice(REAL_WORLD_TEMPLATES[question_type]).format(a=a, b=b)

        return text

    @staticmethod
    def _passthrough(text: str) -> EnhancedQuestion:
        return EnhancedQuestion(
            original_text=text,
            enhanced_text=text,
            context_type="none",
            engagement_score=PASSTHROUGH_ENGAGEMENT,
        )

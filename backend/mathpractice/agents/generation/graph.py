"""Question Generation Workflow Graph Definition.

Runs a generation request through the agent pipeline:
1. Curriculum analysis (objectives + similar questions)
2. Difficulty calibration
3. Question generation
4. Quality validation
5. Context enhancement (optional per request)
6. Finalize
"""

import logging
import random
from typing import Any, Dict, Optional, Union

from langgraph.graph import END, StateGraph
from typing_extensions import TypedDict

from ...core.config import Settings, get_settings
from ...core.logging import configure_logging
from ...observability.langsmith import build_run_config, initialize_langsmith
from ...vector.embeddings import EmbeddingService
from ...vector.question_store import ChromaQuestionStore
from ..base.interfaces import EmbeddingProvider, VectorSearch, make_random
from ..base.llm import BackendRegistry, build_backends
from ..base.state import EducationalAgent
from .calibration import DifficultyCalibrator
from .curriculum import CurriculumAnalyzer
from .enhancement import ContextEnhancer
from .quality import QualityValidator
from .question_gen import QuestionGenerator
from .state import (
    PersonaRequest,
    WorkflowContext,
    WorksheetRequest,
    create_workflow_context,
    parse_generation_request,
)

logger = logging.getLogger(__name__)

RequestLike = Union[WorksheetRequest, PersonaRequest, Dict[str, Any]]


class GenerationState(TypedDict):
    """Graph state: the request-scoped context plus per-request switches."""

    context: WorkflowContext
    enhance: bool


class GenerationWorkflow:
    """
    Question Generation Workflow Graph.

    Every node runs one agent against the shared ``WorkflowContext`` and
    records the node name in ``workflow.completed_steps``. A stage that
    raises is recorded in ``workflow.errors`` and the pipeline carries on,
    so a run always returns a context.
    """

    def __init__(
        self,
        backends: BackendRegistry,
        embeddings: EmbeddingProvider,
        vector_search: VectorSearch,
        rng: Optional[random.Random] = None,
        top_k: int = 5,
        search_timeout: float = 5.0,
        generation_timeout: Optional[float] = None,
        app_name: str = "mathpractice",
    ):
        """
        Initialize the Generation Workflow.

        Args:
            backends: Fast and high-capacity text generators
            embeddings: Embedding provider for the curriculum search phrase
            vector_search: Similar-question lookup
            rng: Random source for context enhancement
            top_k: Number of similar questions to retrieve
            search_timeout: Deadline for embedding + vector search, seconds
            generation_timeout: Deadline per generation call, seconds
            app_name: Application name recorded in run metadata
        """
        self.curriculum_analyzer = CurriculumAnalyzer(
            embeddings,
            vector_search,
            top_k=top_k,
            search_timeout=search_timeout,
        )
        self.difficulty_calibrator = DifficultyCalibrator()
        self.question_generator = QuestionGenerator(backends, timeout=generation_timeout)
        self.quality_validator = QualityValidator()
        self.context_enhancer = ContextEnhancer(rng=rng)
        self.app_name = app_name
        self.graph = self._build_graph()

    def _build_graph(self) -> StateGraph:
        """Build the generation graph."""
        graph = StateGraph(GenerationState)

        # Add nodes
        graph.add_node("curriculum_analysis", self._stage("curriculum_analysis", self.curriculum_analyzer))
        graph.add_node("difficulty_calibration", self._stage("difficulty_calibration", self.difficulty_calibrator))
        graph.add_node("question_generation", self._stage("question_generation", self.question_generator))
        graph.add_node("quality_validation", self._stage("quality_validation", self.quality_validator))
        graph.add_node("context_enhancement", self._stage("context_enhancement", self.context_enhancer))
        graph.add_node("finalize", self._finalize_node)

        # Set entry point
        graph.set_entry_point("curriculum_analysis")

        # Linear pipeline with an optional enhancement step
        graph.add_edge("curriculum_analysis", "difficulty_calibration")
        graph.add_edge("difficulty_calibration", "question_generation")
        graph.add_edge("question_generation", "quality_validation")
        graph.add_conditional_edges(
            "quality_validation",
            self._should_enhance,
            {
                "enhance": "context_enhancement",
                "skip": "finalize",
            }
        )
        graph.add_edge("context_enhancement", "finalize")
        graph.add_edge("finalize", END)

        return graph.compile()

    @staticmethod
    def _stage(step: str, agent: EducationalAgent):
        """Wrap an agent as a graph node."""
        async def node(state: GenerationState) -> Dict[str, Any]:
            context = state["context"]
            try:
                context = await agent.process(context)
            except Exception as e:
                logger.error("%s failed: %s", agent.name, e)
                context.add_error(agent.name, str(e))
            context.complete_step(step)
            return {"context": context}

        node.__name__ = f"{step}_node"
        return node

    @staticmethod
    async def _finalize_node(state: GenerationState) -> Dict[str, Any]:
        context = state["context"]
        context.enter_step("completed")
        context.complete_step("finalize")
        logger.info(
            "Generation finished: %d/%d questions, %d error(s), %d warning(s)",
            len(context.questions),
            context.count,
            len(context.workflow.errors),
            len(context.workflow.warnings),
        )
        return {"context": context}

    def _should_enhance(self, state: GenerationState) -> str:
        """Determine if the enhancement step runs for this request."""
        if state.get("enhance", True):
            return "enhance"
        return "skip"

    async def invoke(
        self,
        state: GenerationState,
        config: Optional[Dict[str, Any]] = None,
    ) -> GenerationState:
        """
        Invoke the generation pipeline.

        Args:
            state: Initial graph state
            config: Optional runnable configuration

        Returns:
            Final graph state
        """
        return await self.graph.ainvoke(state, config=config or {})

    async def run(self, request: RequestLike) -> WorkflowContext:
        """
        Generate questions for a request.

        Args:
            request: A worksheet or persona request, or its deserialised body

        Returns:
            The final, possibly degraded, workflow context
        """
        if isinstance(request, dict):
            request = parse_generation_request(request)

        context = create_workflow_context(request)
        config = build_run_config(
            "question_generation",
            tags=[request.kind, context.question_type.value, context.difficulty.value],
            metadata={"app": self.app_name, "grade": context.grade, "count": context.count},
        )
        final_state = await self.invoke(
            {"context": context, "enhance": request.enhance},
            config=config,
        )
        return final_state["context"]


def build_generation_workflow(settings: Optional[Settings] = None) -> GenerationWorkflow:
    """
    Build the workflow wired to the production collaborators.

    Args:
        settings: Application settings (uses default if None)

    Returns:
        Compiled GenerationWorkflow instance
    """
    settings = settings or get_settings()
    configure_logging(settings)
    initialize_langsmith(settings)

    return GenerationWorkflow(
        backends=build_backends(settings),
        embeddings=EmbeddingService(settings),
        vector_search=ChromaQuestionStore(settings),
        rng=make_random(settings.ENHANCEMENT_SEED),
        top_k=settings.VECTOR_SEARCH_TOP_K,
        search_timeout=settings.VECTOR_SEARCH_TIMEOUT_SECONDS,
        generation_timeout=settings.GENERATION_TIMEOUT_SECONDS,
        app_name=settings.APP_NAME,
    )

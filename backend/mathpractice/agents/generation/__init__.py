"""Question Generation Workflow.

Pipeline: CurriculumAnalyzer -> DifficultyCalibrator -> QuestionGenerator ->
QualityValidator -> ContextEnhancer, orchestrated as a LangGraph graph.
"""

from .graph import GenerationWorkflow, build_generation_workflow
from .state import (
    GenerationRequest,
    Persona,
    PersonaRequest,
    WorkflowContext,
    WorksheetRequest,
    create_workflow_context,
    parse_generation_request,
)

__all__ = [
    "GenerationWorkflow",
    "build_generation_workflow",
    "GenerationRequest",
    "Persona",
    "PersonaRequest",
    "WorkflowContext",
    "WorksheetRequest",
    "create_workflow_context",
    "parse_generation_request",
]

"""Workflow state, configuration and orchestration."""

from skknpro.pipeline.config import (
    ConfigError,
    PipelineConfig,
    load_pipeline_config,
    resolve_request_settings,
)
from skknpro.pipeline.orchestrator import (
    ConfigurationError,
    InvalidInputError,
    PipelineError,
    PipelineOrchestrator,
)
from skknpro.pipeline.state import (
    PROGRESS_LABELS,
    WORKFLOW_PHASES,
    Phase,
    StageRecord,
    Workflow,
    WorkflowKind,
    WorkflowTransitionError,
    WorkflowView,
)
from skknpro.pipeline.user_config import load_user_config

__all__ = [
    "PROGRESS_LABELS",
    "WORKFLOW_PHASES",
    "ConfigError",
    "ConfigurationError",
    "InvalidInputError",
    "Phase",
    "PipelineConfig",
    "PipelineError",
    "PipelineOrchestrator",
    "StageRecord",
    "Workflow",
    "WorkflowKind",
    "WorkflowTransitionError",
    "WorkflowView",
    "load_pipeline_config",
    "load_user_config",
    "resolve_request_settings",
]

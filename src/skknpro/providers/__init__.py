"""LLM provider integration: attempt plans, single calls and fallback."""

from skknpro.providers.base import (
    AttemptError,
    ContentPart,
    Failure,
    FailureKind,
    InlineAttachment,
    PipelineExhaustedError,
    ProviderError,
    ResponseFormat,
    StageKind,
    StageRequest,
    StageResult,
    Success,
    TextPart,
    classify_provider_error,
    describe_failure,
)
from skknpro.providers.credentials import is_demo_credential, mask_credential
from skknpro.providers.factory import create_chat_model
from skknpro.providers.fallback import FallbackExecutor, FallbackOutcome
from skknpro.providers.invoker import CompletionInvoker
from skknpro.providers.model_plans import MODEL_PIPELINES, SELECTABLE_MODELS, resolve_attempt_plan
from skknpro.providers.settings import SAMPLING_PRESETS, SamplingConfig, get_sampling
from skknpro.providers.structured_output import StructuredOutputError, parse_structured_output

__all__ = [
    "MODEL_PIPELINES",
    "SAMPLING_PRESETS",
    "SELECTABLE_MODELS",
    "AttemptError",
    "CompletionInvoker",
    "ContentPart",
    "Failure",
    "FailureKind",
    "FallbackExecutor",
    "FallbackOutcome",
    "InlineAttachment",
    "PipelineExhaustedError",
    "ProviderError",
    "ResponseFormat",
    "SamplingConfig",
    "StageKind",
    "StageRequest",
    "StageResult",
    "StructuredOutputError",
    "Success",
    "TextPart",
    "classify_provider_error",
    "create_chat_model",
    "describe_failure",
    "get_sampling",
    "is_demo_credential",
    "mask_credential",
    "parse_structured_output",
    "resolve_attempt_plan",
]

"""Single completion attempt against one concrete model."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import asdict
from typing import TYPE_CHECKING, Any, Protocol

from skknpro.observability.logging import get_logger
from skknpro.providers.base import (
    Failure,
    FailureKind,
    StageResult,
    Success,
    classify_provider_error,
)
from skknpro.providers.content import extract_text, summarize_parts, to_langchain_messages
from skknpro.providers.factory import create_chat_model

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from skknpro.observability import LLMLogger
    from skknpro.providers.base import StageRequest

log = get_logger(__name__)


class SupportsAinvoke(Protocol):
    async def ainvoke(self, input: list[BaseMessage], /) -> Any: ...  # noqa: A002


# (model_id, credential, request) -> chat model for exactly that attempt
ChatModelFactory = Callable[[str, str, "StageRequest"], SupportsAinvoke]


class CompletionInvoker:
    """Issue one LLM call per :meth:`invoke` and classify the outcome.

    Never retries: a failure is returned, not raised, so the caller can
    decide whether to move on to another model.

    Attributes:
        calls: Number of outbound calls made so far.
    """

    def __init__(
        self,
        credential: str,
        model_factory: ChatModelFactory | None = None,
        llm_logger: LLMLogger | None = None,
    ) -> None:
        """Initialize the invoker.

        Args:
            credential: API key used for every call.
            model_factory: Builds the chat model per attempt. Defaults to
                the Gemini factory; tests inject scripted models here.
            llm_logger: Optional JSONL recorder for every attempt.
        """
        self._credential = credential
        self._model_factory: ChatModelFactory = model_factory or create_chat_model
        self._llm_logger = llm_logger
        self.calls = 0

    async def invoke(self, model_id: str, request: StageRequest) -> StageResult:
        """Run one attempt.

        Args:
            model_id: Concrete model id to call.
            request: Fully built request.

        Returns:
            Success with non-empty text, or a classified Failure. A model
            that cannot even be constructed is a Failure for that model id.
        """
        messages = to_langchain_messages(request)

        self.calls += 1
        start_time = time.perf_counter()
        log.debug("attempt_start", stage=str(request.stage), model=model_id)
        try:
            chat_model = self._model_factory(model_id, self._credential, request)
            response = await chat_model.ainvoke(messages)
        except Exception as e:
            duration = time.perf_counter() - start_time
            kind = classify_provider_error(e)
            failure = Failure(
                model=model_id,
                kind=kind,
                message=str(e) or type(e).__name__,
                duration_seconds=duration,
            )
            log.warning(
                "attempt_failed",
                stage=str(request.stage),
                model=model_id,
                kind=str(kind),
                error=failure.message,
                duration=f"{duration:.2f}s",
            )
            self._record(request, failure)
            return failure

        duration = time.perf_counter() - start_time
        text = extract_text(getattr(response, "content", response)).strip()
        result: StageResult
        if not text:
            result = Failure(
                model=model_id,
                kind=FailureKind.EMPTY_RESPONSE,
                message="Empty response from AI",
                duration_seconds=duration,
            )
            log.warning("attempt_empty", stage=str(request.stage), model=model_id)
        else:
            result = Success(model=model_id, text=text, duration_seconds=duration)
            log.info(
                "attempt_succeeded",
                stage=str(request.stage),
                model=model_id,
                chars=len(text),
                duration=f"{duration:.2f}s",
            )

        self._record(request, result)
        return result

    def _record(self, request: StageRequest, result: StageResult) -> None:
        if self._llm_logger is None:
            return

        entry = self._llm_logger.create_entry(
            stage=str(request.stage),
            model=result.model,
            system_instruction=request.system_instruction,
            parts=summarize_parts(request.parts),
            content=result.text if isinstance(result, Success) else "",
            duration_seconds=result.duration_seconds,
            response_format=str(request.response_format),
            sampling=asdict(request.sampling),
            failure_kind=str(result.kind) if isinstance(result, Failure) else None,
            error=result.message if isinstance(result, Failure) else None,
        )
        self._llm_logger.log(entry)

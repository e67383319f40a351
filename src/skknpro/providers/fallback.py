"""Sequential model fallback for one logical request."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from skknpro.observability.logging import get_logger
from skknpro.providers.base import (
    Failure,
    PipelineExhaustedError,
    StageRequest,
    StageResult,
    Success,
    exhaustion_failure,
)

if TYPE_CHECKING:
    from skknpro.providers.invoker import CompletionInvoker

log = get_logger(__name__)

# Builds a fresh request for the given model id
RequestFactory = Callable[[str], StageRequest]


@dataclass
class FallbackOutcome:
    """Everything a fallback run produced.

    Attributes:
        plan: The attempt plan that was walked.
        attempts: One result per model actually called, in order.
    """

    plan: list[str]
    attempts: list[StageResult] = field(default_factory=list)

    @property
    def success(self) -> Success | None:
        for attempt in self.attempts:
            if isinstance(attempt, Success):
                return attempt
        return None

    @property
    def succeeded(self) -> bool:
        return self.success is not None

    @property
    def failures(self) -> list[Failure]:
        return [a for a in self.attempts if isinstance(a, Failure)]

    @property
    def attempted_models(self) -> list[str]:
        return [a.model for a in self.attempts]

    @property
    def result(self) -> StageResult:
        """The first success, or an aggregate failure over every attempt."""
        return self.success or exhaustion_failure(self.failures)

    def unwrap(self) -> Success:
        """Return the success or raise the aggregate error.

        Raises:
            PipelineExhaustedError: If no attempt succeeded.
        """
        success = self.success
        if success is None:
            raise PipelineExhaustedError(self.failures)
        return success


class FallbackExecutor:
    """Walk an attempt plan until one model answers.

    Attempts are strictly sequential; a later model is only called when
    every earlier one has failed.
    """

    def __init__(self, invoker: CompletionInvoker) -> None:
        self._invoker = invoker

    async def run(
        self,
        plan: Sequence[str],
        request: RequestFactory | StageRequest,
    ) -> FallbackOutcome:
        """Try each model in order, stopping at the first success.

        Args:
            plan: Non-empty ordered model ids.
            request: A request factory called once per attempt, or a
                request reused as-is for every attempt.

        Returns:
            FallbackOutcome with every attempt made.

        Raises:
            ValueError: If the plan is empty.
        """
        if not plan:
            raise ValueError("attempt plan must contain at least one model id")

        factory: RequestFactory
        if isinstance(request, StageRequest):
            fixed = request
            factory = lambda _model_id: fixed  # noqa: E731
        else:
            factory = request

        outcome = FallbackOutcome(plan=list(plan))
        start_time = time.perf_counter()

        for position, model_id in enumerate(plan, start=1):
            stage_request = factory(model_id)
            result = await self._invoker.invoke(model_id, stage_request)
            outcome.attempts.append(result)

            if isinstance(result, Success):
                log.info(
                    "fallback_succeeded",
                    stage=str(stage_request.stage),
                    model=model_id,
                    attempt=position,
                    plan_size=len(plan),
                )
                return outcome

            if position < len(plan):
                log.info(
                    "fallback_next_model",
                    failed_model=model_id,
                    kind=str(result.kind),
                    next_model=plan[position],
                )

        log.error(
            "fallback_exhausted",
            attempted=outcome.attempted_models,
            last_error=outcome.failures[-1].message,
            duration=f"{time.perf_counter() - start_time:.2f}s",
        )
        return outcome

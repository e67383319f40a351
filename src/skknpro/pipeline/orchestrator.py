"""Pipeline orchestrator: runs each workflow through the demo-or-fallback branch."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from skknpro.models.appraisal import AppraisalResult
from skknpro.models.title_analysis import TitleAnalysis
from skknpro.observability.logging import get_logger
from skknpro.pipeline.config import PipelineConfig
from skknpro.pipeline.state import (
    Phase,
    ProgressCallback,
    StageRecord,
    Workflow,
    WorkflowKind,
    WorkflowView,
)
from skknpro.prompts.builders import (
    build_appraisal_request,
    build_connection_test_request,
    build_evaluation_request,
    build_full_report_request,
    build_outline_request,
    build_part1_request,
    build_part23_request,
    build_plagiarism_request,
    build_title_analysis_request,
)
from skknpro.providers.base import (
    AttemptError,
    PipelineExhaustedError,
    ProviderError,
    StageKind,
    Success,
)
from skknpro.providers.credentials import is_demo_credential, mask_credential
from skknpro.providers.demo import DemoResponder
from skknpro.providers.fallback import FallbackExecutor, FallbackOutcome
from skknpro.providers.invoker import CompletionInvoker
from skknpro.providers.model_plans import resolve_attempt_plan
from skknpro.providers.structured_output import StructuredOutputError, parse_structured_output

if TYPE_CHECKING:
    from skknpro.models.inputs import (
        AppraisalInput,
        RequestSettings,
        Submission,
        TitleTopic,
        TopicForm,
        WriterInput,
    )
    from skknpro.observability.llm_logger import LLMLogger
    from skknpro.prompts.compiler import PromptCompiler
    from skknpro.providers.base import StageRequest
    from skknpro.providers.invoker import ChatModelFactory

log = get_logger(__name__)

MISSING_CREDENTIAL_MESSAGE = "Vui lòng nhập API Key."
MISSING_TITLE_MESSAGE = "Vui lòng nhập tên đề tài."
MISSING_CONTENT_MESSAGE = "Vui lòng nhập nội dung SKKN hoặc tải file lên."
SHARED_CREDENTIAL_MESSAGE = (
    "⚠️ Key hệ thống gặp sự cố. Vui lòng nhập API KEY CÁ NHÂN.\n(Chi tiết: {details})"
)

StructuredResult = TitleAnalysis | AppraisalResult


class PipelineError(Exception):
    """Raised when a workflow cannot start.

    Attributes:
        workflow: Workflow that refused to start.
        message: User-facing message, shown verbatim.
    """

    def __init__(self, workflow: str, message: str) -> None:
        self.workflow = workflow
        self.message = message
        super().__init__(message)


class ConfigurationError(PipelineError):
    """No usable credential and no shared default."""


class InvalidInputError(PipelineError):
    """Required task input is missing."""


class PipelineOrchestrator:
    """Run SKKN workflows.

    Every stage goes through one branch: a demo credential is answered by
    the DemoResponder, anything else by the FallbackExecutor over the
    resolved attempt plan. Best-effort workflows (generation, title
    analysis, appraisal, writing) drop to demo output when the plan is
    exhausted; evaluation and plagiarism checks end in the Error phase.

    Each call creates its own Workflow, so concurrent calls share nothing
    but the invoker's call counter.

    Attributes:
        settings: Credential and model choice for every request.
        config: Pipeline configuration.
        plan: Attempt plan resolved from the settings.
    """

    def __init__(
        self,
        settings: RequestSettings,
        config: PipelineConfig | None = None,
        model_factory: ChatModelFactory | None = None,
        llm_logger: LLMLogger | None = None,
        demo: DemoResponder | None = None,
        compiler: PromptCompiler | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Per-request credential and model selector.
            config: Pipeline configuration; defaults when omitted.
            model_factory: Chat-model factory passed to the invoker.
            llm_logger: Optional recorder for every completion attempt.
            demo: Demo responder; a default one when omitted.
            compiler: Prompt compiler; the packaged templates when omitted.
        """
        self.settings = settings
        self.config = config or PipelineConfig()
        self.plan = resolve_attempt_plan(settings.resolved_selector)
        self._credential = settings.effective_credential
        self._invoker = CompletionInvoker(self._credential, model_factory, llm_logger)
        self._executor = FallbackExecutor(self._invoker)
        self._demo = demo or DemoResponder()
        self._compiler = compiler

        log.debug(
            "orchestrator_init",
            credential=mask_credential(self._credential),
            shared_credential=settings.uses_system_credential,
            demo=self.is_demo,
            plan=self.plan,
        )

    @property
    def is_demo(self) -> bool:
        """True when no live calls will be made."""
        return is_demo_credential(self._credential)

    @property
    def llm_calls(self) -> int:
        return self._invoker.calls

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    async def generate_report(
        self, form: TopicForm, on_progress: ProgressCallback | None = None
    ) -> WorkflowView:
        """Three-stage draft: outline, sections I-II, remaining sections.

        Each stage feeds the next. A hard failure stops the run in the
        Error phase with the text produced so far still visible.

        Raises:
            InvalidInputError: If the title is empty.
            ConfigurationError: If there is no credential at all.
        """
        kind = WorkflowKind.GENERATE
        if not form.title.strip():
            raise InvalidInputError(kind, MISSING_TITLE_MESSAGE)
        self._require_credential(kind)

        workflow = Workflow(kind, on_progress)
        try:
            workflow.advance(Phase.GENERATING_OUTLINE)
            outline = await self._complete_text(
                workflow,
                StageKind.OUTLINE,
                lambda: build_outline_request(form, self._compiler),
                form,
                best_effort=True,
            )
            workflow.append(f"### DÀN Ý DỰ KIẾN...\n\n{outline}\n\n---\n\n")

            workflow.advance(Phase.GENERATING_PART1)
            part1 = await self._complete_text(
                workflow,
                StageKind.PART_1,
                lambda: build_part1_request(outline, self._compiler),
                form,
                best_effort=True,
            )
            workflow.append(f"# {form.title.upper()}\n\n{part1}\n\n")

            workflow.advance(Phase.GENERATING_PART23)
            part23 = await self._complete_text(
                workflow,
                StageKind.PART_2_3,
                lambda: build_part23_request(outline, part1, form, self._compiler),
                form,
                best_effort=True,
            )
            workflow.append(part23)
        except ProviderError as e:
            workflow.fail(self._user_message(e))
            return workflow.view()

        workflow.complete(workflow.accumulated_text)
        return workflow.view()

    async def evaluate(
        self, submission: Submission, on_progress: ProgressCallback | None = None
    ) -> WorkflowView:
        """Score a finished report against the rubric.

        Raises:
            InvalidInputError: If there is neither text nor an attachment.
            ConfigurationError: If there is no credential at all.
        """
        return await self._review(
            WorkflowKind.EVALUATE,
            Phase.EVALUATING,
            StageKind.EVALUATION,
            lambda: build_evaluation_request(submission, self._compiler),
            submission,
            on_progress,
        )

    async def check_plagiarism(
        self, submission: Submission, on_progress: ProgressCallback | None = None
    ) -> WorkflowView:
        """Estimate originality and point out risky passages.

        Raises:
            InvalidInputError: If there is neither text nor an attachment.
            ConfigurationError: If there is no credential at all.
        """
        return await self._review(
            WorkflowKind.PLAGIARISM,
            Phase.CHECKING_PLAGIARISM,
            StageKind.PLAGIARISM,
            lambda: build_plagiarism_request(submission, self._compiler),
            submission,
            on_progress,
        )

    async def analyze_title(
        self, topic: TitleTopic, on_progress: ProgressCallback | None = None
    ) -> WorkflowView:
        """Score a proposed title; the view's ``result`` is a TitleAnalysis.

        Raises:
            InvalidInputError: If the title is empty.
        """
        kind = WorkflowKind.TITLE_ANALYSIS
        if not topic.title.strip():
            raise InvalidInputError(kind, MISSING_TITLE_MESSAGE)

        return await self._run_structured(
            Workflow(kind, on_progress),
            Phase.ANALYZING_TITLE,
            StageKind.TITLE_ANALYSIS,
            lambda: build_title_analysis_request(topic, self._compiler),
            topic,
            TitleAnalysis,
        )

    async def appraise(
        self, task: AppraisalInput, on_progress: ProgressCallback | None = None
    ) -> WorkflowView:
        """Appraise a report for its award tier; ``result`` is an AppraisalResult.

        Raises:
            InvalidInputError: If the report text is empty.
        """
        kind = WorkflowKind.APPRAISAL
        if not task.content.strip():
            raise InvalidInputError(kind, MISSING_CONTENT_MESSAGE)

        limit = self.config.appraisal_char_limit
        return await self._run_structured(
            Workflow(kind, on_progress),
            Phase.APPRAISING,
            StageKind.APPRAISAL,
            lambda: build_appraisal_request(task, limit, self._compiler),
            task,
            AppraisalResult,
        )

    async def write_report(
        self, task: WriterInput, on_progress: ProgressCallback | None = None
    ) -> WorkflowView:
        """Write a complete report in one call.

        Raises:
            InvalidInputError: If the title is empty.
        """
        kind = WorkflowKind.WRITER
        if not task.title.strip():
            raise InvalidInputError(kind, MISSING_TITLE_MESSAGE)

        workflow = Workflow(kind, on_progress)
        workflow.advance(Phase.WRITING_REPORT)
        try:
            text = await self._complete_text(
                workflow,
                StageKind.FULL_REPORT,
                lambda: build_full_report_request(task, self._compiler),
                task,
                best_effort=True,
            )
        except ProviderError as e:
            workflow.fail(self._user_message(e))
            return workflow.view()

        workflow.append(text)
        workflow.complete(text)
        return workflow.view()

    async def test_connection(self) -> str:
        """Send a greeting to the first model of the plan.

        Demo credentials always succeed without a call.

        Returns:
            The model's reply.

        Raises:
            AttemptError: If the single attempt fails.
        """
        if self.is_demo:
            return self._demo.respond(StageKind.CONNECTION_TEST)

        model_id = self.plan[0]
        result = await self._invoker.invoke(
            model_id, build_connection_test_request(self._compiler)
        )
        if isinstance(result, Success):
            log.info("connection_test_succeeded", model=model_id)
            return result.text

        log.warning("connection_test_failed", model=model_id, kind=str(result.kind))
        raise AttemptError(result)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_credential(self, kind: WorkflowKind) -> None:
        if not self._credential:
            log.warning("credential_missing", workflow=str(kind))
            raise ConfigurationError(kind, MISSING_CREDENTIAL_MESSAGE)

    def _user_message(self, error: Exception) -> str:
        if self.settings.uses_system_credential:
            return SHARED_CREDENTIAL_MESSAGE.format(details=error)
        return str(error)

    async def _review(
        self,
        kind: WorkflowKind,
        phase: Phase,
        stage: StageKind,
        build: Callable[[], StageRequest],
        submission: Submission,
        on_progress: ProgressCallback | None,
    ) -> WorkflowView:
        if submission.is_empty:
            raise InvalidInputError(kind, MISSING_CONTENT_MESSAGE)
        self._require_credential(kind)

        workflow = Workflow(kind, on_progress)
        workflow.advance(phase)
        try:
            text = await self._complete_text(workflow, stage, build, submission, best_effort=False)
        except ProviderError as e:
            workflow.fail(self._user_message(e))
            return workflow.view()

        workflow.append(text)
        workflow.complete(text)
        return workflow.view()

    async def _run_structured(
        self,
        workflow: Workflow,
        phase: Phase,
        stage: StageKind,
        build: Callable[[], StageRequest],
        task: TitleTopic | AppraisalInput,
        schema: type[TitleAnalysis] | type[AppraisalResult],
    ) -> WorkflowView:
        workflow.advance(phase)
        try:
            result = await self._complete_structured(workflow, stage, build, task, schema)
        except (ProviderError, StructuredOutputError) as e:
            workflow.fail(self._user_message(e))
            return workflow.view()

        workflow.complete(result)
        return workflow.view()

    async def _attempt(self, build: Callable[[], StageRequest]) -> FallbackOutcome:
        request = build()
        return await self._executor.run(self.plan, lambda _model_id: request)

    def _record(
        self,
        workflow: Workflow,
        stage: StageKind,
        start_time: float,
        outcome: FallbackOutcome | None = None,
        model: str | None = None,
    ) -> None:
        duration = time.perf_counter() - start_time
        record = StageRecord(
            stage=str(stage),
            attempted_models=tuple(outcome.attempted_models) if outcome else (),
            model=model,
            used_demo=model is None,
            duration_seconds=duration,
        )
        workflow.record(record)
        log.info(
            "stage_complete",
            workflow=str(workflow.kind),
            stage=str(stage),
            model=model,
            demo=record.used_demo,
            attempts=len(record.attempted_models),
            duration=f"{duration:.2f}s",
        )

    def _demo_allowed(self, best_effort: bool) -> bool:
        return best_effort and self.config.demo_on_exhaustion

    async def _complete_text(
        self,
        workflow: Workflow,
        stage: StageKind,
        build: Callable[[], StageRequest],
        task: object,
        *,
        best_effort: bool,
    ) -> str:
        """Obtain one stage's text.

        Raises:
            PipelineExhaustedError: If every model failed and demo output
                is not allowed for this workflow.
        """
        start_time = time.perf_counter()
        log.info("stage_start", workflow=str(workflow.kind), stage=str(stage))

        if self.is_demo:
            text = self._demo.respond(stage, task)
            self._record(workflow, stage, start_time)
            return text

        outcome = await self._attempt(build)
        success = outcome.success
        if success is not None:
            self._record(workflow, stage, start_time, outcome, success.model)
            return success.text

        if not self._demo_allowed(best_effort):
            log.error(
                "stage_failed",
                workflow=str(workflow.kind),
                stage=str(stage),
                attempts=len(outcome.attempts),
            )
            raise PipelineExhaustedError(outcome.failures)

        log.warning(
            "stage_demo_fallback",
            workflow=str(workflow.kind),
            stage=str(stage),
            reason="exhausted",
            attempts=len(outcome.attempts),
        )
        self._record(workflow, stage, start_time, outcome)
        return self._demo.respond(stage, task)

    async def _complete_structured(
        self,
        workflow: Workflow,
        stage: StageKind,
        build: Callable[[], StageRequest],
        task: TitleTopic | AppraisalInput,
        schema: type[TitleAnalysis] | type[AppraisalResult],
    ) -> StructuredResult:
        """Obtain and validate one structured stage result.

        Unparsable output is treated like exhaustion.

        Raises:
            PipelineExhaustedError: If every model failed and demo output
                is not allowed.
            StructuredOutputError: If the answer does not validate and demo
                output is not allowed.
        """
        start_time = time.perf_counter()
        log.info("stage_start", workflow=str(workflow.kind), stage=str(stage))

        if self.is_demo:
            result = self._demo.respond_structured(stage, task)
            self._record(workflow, stage, start_time)
            return result

        outcome = await self._attempt(build)
        success = outcome.success
        if success is None:
            if not self.config.demo_on_exhaustion:
                log.error("stage_failed", workflow=str(workflow.kind), stage=str(stage))
                raise PipelineExhaustedError(outcome.failures)
            reason = "exhausted"
        else:
            try:
                parsed = parse_structured_output(success.text, schema, str(stage))
            except StructuredOutputError:
                if not self.config.demo_on_exhaustion:
                    raise
                reason = "invalid_output"
            else:
                self._record(workflow, stage, start_time, outcome, success.model)
                return parsed

        log.warning(
            "stage_demo_fallback",
            workflow=str(workflow.kind),
            stage=str(stage),
            reason=reason,
            attempts=len(outcome.attempts),
        )
        self._record(workflow, stage, start_time, outcome)
        return self._demo.respond_structured(stage, task)

"""Workflow phases and the per-instance state machine.

Each workflow instance owns its phase, accumulated text and stage records.
Nothing here is shared between instances.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from skknpro.observability.logging import get_logger

log = get_logger(__name__)


class WorkflowKind(StrEnum):
    GENERATE = "generate"
    EVALUATE = "evaluate"
    PLAGIARISM = "plagiarism"
    TITLE_ANALYSIS = "title_analysis"
    APPRAISAL = "appraisal"
    WRITER = "writer"


class Phase(StrEnum):
    IDLE = "idle"
    GENERATING_OUTLINE = "generating_outline"
    GENERATING_PART1 = "generating_part1"
    GENERATING_PART23 = "generating_part23"
    EVALUATING = "evaluating"
    CHECKING_PLAGIARISM = "checking_plagiarism"
    ANALYZING_TITLE = "analyzing_title"
    APPRAISING = "appraising"
    WRITING_REPORT = "writing_report"
    COMPLETED = "completed"
    ERROR = "error"


# Working phases of each workflow, in the order they must be entered
WORKFLOW_PHASES: dict[WorkflowKind, tuple[Phase, ...]] = {
    WorkflowKind.GENERATE: (
        Phase.GENERATING_OUTLINE,
        Phase.GENERATING_PART1,
        Phase.GENERATING_PART23,
    ),
    WorkflowKind.EVALUATE: (Phase.EVALUATING,),
    WorkflowKind.PLAGIARISM: (Phase.CHECKING_PLAGIARISM,),
    WorkflowKind.TITLE_ANALYSIS: (Phase.ANALYZING_TITLE,),
    WorkflowKind.APPRAISAL: (Phase.APPRAISING,),
    WorkflowKind.WRITER: (Phase.WRITING_REPORT,),
}

PROGRESS_LABELS: dict[Phase, str] = {
    Phase.IDLE: "",
    Phase.GENERATING_OUTLINE: "Đang lập dàn ý chi tiết...",
    Phase.GENERATING_PART1: "Đang viết Phần I & II (Thực trạng)...",
    Phase.GENERATING_PART23: "Đang viết Giải pháp & Kết luận...",
    Phase.EVALUATING: "Đang phân tích SKKN để chấm điểm...",
    Phase.CHECKING_PLAGIARISM: "AI đang phát hiện đạo văn & sao chép...",
    Phase.ANALYZING_TITLE: "Đang phân tích tên đề tài...",
    Phase.APPRAISING: "Đang thẩm định SKKN theo tiêu chí cấp giải...",
    Phase.WRITING_REPORT: "Đang viết SKKN hoàn chỉnh...",
    Phase.COMPLETED: "Hoàn thành!",
    Phase.ERROR: "Đã xảy ra lỗi.",
}

# (phase, label) -> None, called on every transition
ProgressCallback = Callable[[Phase, str], None]


class WorkflowTransitionError(Exception):
    """Raised on a phase transition the workflow does not allow."""

    def __init__(self, workflow: WorkflowKind, current: Phase, target: Phase) -> None:
        self.workflow = workflow
        self.current = current
        self.target = target
        super().__init__(f"Workflow '{workflow}' cannot move from '{current}' to '{target}'")


@dataclass(frozen=True)
class StageRecord:
    """How one stage's text was obtained.

    Attributes:
        stage: Stage kind value (e.g. "outline").
        attempted_models: Models called, in order; empty for demo-only stages.
        model: Model that answered, or None when the text is synthetic.
        used_demo: True when the text came from the demo responder.
        duration_seconds: Wall time of the stage.
    """

    stage: str
    attempted_models: tuple[str, ...] = ()
    model: str | None = None
    used_demo: bool = False
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class WorkflowView:
    """Read-only snapshot handed to callers for rendering."""

    workflow: WorkflowKind
    phase: Phase
    progress_label: str
    accumulated_text: str
    error_message: str | None
    used_demo: bool
    stages: tuple[StageRecord, ...] = ()
    result: object | None = None

    @property
    def completed(self) -> bool:
        return self.phase is Phase.COMPLETED

    @property
    def failed(self) -> bool:
        return self.phase is Phase.ERROR


@dataclass
class Workflow:
    """Mutable state of one workflow instance.

    Phases only move forward through :data:`WORKFLOW_PHASES`, then to
    COMPLETED. ERROR is reachable from any working phase and keeps the text
    accumulated so far; :meth:`reset` returns to IDLE from anywhere.
    """

    kind: WorkflowKind
    on_progress: ProgressCallback | None = None
    phase: Phase = Phase.IDLE
    accumulated_text: str = ""
    error_message: str | None = None
    result: object | None = None
    stages: list[StageRecord] = field(default_factory=list)

    @property
    def working_phases(self) -> tuple[Phase, ...]:
        return WORKFLOW_PHASES[self.kind]

    @property
    def used_demo(self) -> bool:
        return any(record.used_demo for record in self.stages)

    def _next_phase(self) -> Phase | None:
        phases = self.working_phases
        if self.phase is Phase.IDLE:
            return phases[0]
        if self.phase in phases:
            index = phases.index(self.phase)
            return phases[index + 1] if index + 1 < len(phases) else Phase.COMPLETED
        return None

    def _transition(self, target: Phase) -> None:
        previous = self.phase
        self.phase = target
        log.debug(
            "workflow_transition",
            workflow=str(self.kind),
            source=str(previous),
            target=str(target),
        )
        if self.on_progress is not None:
            self.on_progress(target, PROGRESS_LABELS[target])

    def advance(self, target: Phase) -> None:
        """Move to the next working phase (or COMPLETED).

        Raises:
            WorkflowTransitionError: If ``target`` is not the next phase.
        """
        if target is Phase.ERROR or target != self._next_phase():
            raise WorkflowTransitionError(self.kind, self.phase, target)
        self._transition(target)

    def complete(self, result: object | None = None) -> None:
        """Finish after the last working phase."""
        self.advance(Phase.COMPLETED)
        self.result = result

    def fail(self, message: str) -> None:
        """Stop with a user-facing error message.

        Raises:
            WorkflowTransitionError: If the workflow is not in a working phase.
        """
        if self.phase not in self.working_phases:
            raise WorkflowTransitionError(self.kind, self.phase, Phase.ERROR)
        self.error_message = message
        self._transition(Phase.ERROR)

    def append(self, text: str) -> None:
        if self.phase not in self.working_phases:
            raise WorkflowTransitionError(self.kind, self.phase, self.phase)
        self.accumulated_text += text

    def record(self, stage_record: StageRecord) -> None:
        self.stages.append(stage_record)

    def reset(self) -> None:
        self.accumulated_text = ""
        self.error_message = None
        self.result = None
        self.stages.clear()
        self._transition(Phase.IDLE)

    def view(self) -> WorkflowView:
        return WorkflowView(
            workflow=self.kind,
            phase=self.phase,
            progress_label=PROGRESS_LABELS[self.phase],
            accumulated_text=self.accumulated_text,
            error_message=self.error_message,
            used_demo=self.used_demo,
            stages=tuple(self.stages),
            result=self.result,
        )

"""Core request/result types and the provider error taxonomy."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from skknpro.providers.settings import SamplingConfig


class StageKind(StrEnum):
    """Every kind of single LLM request the pipeline issues."""

    OUTLINE = "outline"
    PART_1 = "part_1"
    PART_2_3 = "part_2_3"
    EVALUATION = "evaluation"
    PLAGIARISM = "plagiarism"
    TITLE_ANALYSIS = "title_analysis"
    APPRAISAL = "appraisal"
    FULL_REPORT = "full_report"
    CONNECTION_TEST = "connection_test"


class ResponseFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


class FailureKind(StrEnum):
    """Why a single attempt (or a whole plan) failed."""

    EMPTY_RESPONSE = "empty_response"
    QUOTA_EXHAUSTED = "quota_exhausted"
    INVALID_CREDENTIAL = "invalid_credential"
    MODEL_NOT_FOUND = "model_not_found"
    UNKNOWN = "unknown"
    PIPELINE_EXHAUSTED = "pipeline_exhausted"


# ---------------------------------------------------------------------------
# Content parts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextPart:
    """Inline prompt text."""

    text: str


@dataclass(frozen=True)
class InlineAttachment:
    """Binary payload passed next to the prompt, never inlined into it.

    Attributes:
        mime_type: Media type, e.g. ``application/pdf``.
        data: Base64-encoded payload.
        name: Original file name, for logs only.
    """

    mime_type: str
    data: str
    name: str = ""


ContentPart = TextPart | InlineAttachment


@dataclass(frozen=True)
class StageRequest:
    """Everything one completion attempt needs, apart from the model id.

    Attributes:
        stage: Which pipeline stage built the request.
        system_instruction: System prompt ("" for none).
        parts: Ordered content parts for the single user turn.
        response_format: Plain text or JSON.
        sampling: Sampling parameters for the call.
    """

    stage: StageKind
    system_instruction: str
    parts: tuple[ContentPart, ...]
    response_format: ResponseFormat
    sampling: SamplingConfig

    @property
    def text(self) -> str:
        """Concatenated text of all TextParts."""
        return "\n".join(p.text for p in self.parts if isinstance(p, TextPart))

    @property
    def attachments(self) -> tuple[InlineAttachment, ...]:
        return tuple(p for p in self.parts if isinstance(p, InlineAttachment))


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    model: str
    text: str
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class Failure:
    model: str
    kind: FailureKind
    message: str
    duration_seconds: float = 0.0


StageResult = Success | Failure


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class AttemptError(ProviderError):
    """A single attempt failed and the caller asked for it to be raised."""

    def __init__(self, failure: Failure) -> None:
        self.failure = failure
        self.model = failure.model
        self.kind = failure.kind
        super().__init__(failure.model, describe_failure(failure))


def _exhaustion_message(attempts: list[Failure]) -> str:
    last = attempts[-1].message if attempts else "không có model nào được thử"
    return f"Hệ thống đang quá tải (đã thử {len(attempts)} model). Lỗi: {last}"


class PipelineExhaustedError(ProviderError):
    """Every model in an attempt plan failed.

    Attributes:
        attempts: Per-attempt failures in the order they happened.
        attempted_models: Model ids tried, in order.
    """

    def __init__(self, attempts: list[Failure]) -> None:
        self.attempts = list(attempts)
        self.attempted_models = [a.model for a in self.attempts]
        self.summary = _exhaustion_message(self.attempts)
        super().__init__("gemini", self.summary)

    def __str__(self) -> str:
        return self.summary


def exhaustion_failure(attempts: list[Failure]) -> Failure:
    """Fold a list of attempt failures into one aggregate Failure."""
    return Failure(
        model=attempts[-1].model if attempts else "",
        kind=FailureKind.PIPELINE_EXHAUSTED,
        message=_exhaustion_message(list(attempts)),
        duration_seconds=sum(a.duration_seconds for a in attempts),
    )


# ---------------------------------------------------------------------------
# Failure classification
# ---------------------------------------------------------------------------

_HTTP_CODE_KINDS: dict[int, FailureKind] = {
    429: FailureKind.QUOTA_EXHAUSTED,
    401: FailureKind.INVALID_CREDENTIAL,
    403: FailureKind.INVALID_CREDENTIAL,
    404: FailureKind.MODEL_NOT_FOUND,
}

_STATUS_KINDS: dict[str, FailureKind] = {
    "RESOURCE_EXHAUSTED": FailureKind.QUOTA_EXHAUSTED,
    "UNAUTHENTICATED": FailureKind.INVALID_CREDENTIAL,
    "PERMISSION_DENIED": FailureKind.INVALID_CREDENTIAL,
    "NOT_FOUND": FailureKind.MODEL_NOT_FOUND,
}

# Checked in order against the upper-cased message
_MESSAGE_MARKERS: tuple[tuple[str, FailureKind], ...] = (
    ("RESOURCE_EXHAUSTED", FailureKind.QUOTA_EXHAUSTED),
    ("QUOTA", FailureKind.QUOTA_EXHAUSTED),
    ("API_KEY_INVALID", FailureKind.INVALID_CREDENTIAL),
    ("API KEY NOT VALID", FailureKind.INVALID_CREDENTIAL),
    ("INVALID_ARGUMENT", FailureKind.INVALID_CREDENTIAL),
    ("NOT_FOUND", FailureKind.MODEL_NOT_FOUND),
    ("IS NOT FOUND", FailureKind.MODEL_NOT_FOUND),
)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _structured_kind(exc: BaseException) -> FailureKind | None:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and value in _HTTP_CODE_KINDS:
            return _HTTP_CODE_KINDS[value]

    status = getattr(exc, "status", None)
    if isinstance(status, str) and status.upper() in _STATUS_KINDS:
        return _STATUS_KINDS[status.upper()]
    return None


def classify_provider_error(exc: BaseException) -> FailureKind:
    """Map a provider exception to a FailureKind.

    Structured codes (``code``/``status_code``/``status`` attributes found
    anywhere along the cause chain) win over message matching. Anything
    unrecognised is UNKNOWN.

    Args:
        exc: Exception raised by the SDK during one attempt.

    Returns:
        The classified failure kind.
    """
    chain = list(_exception_chain(exc))

    for link in chain:
        kind = _structured_kind(link)
        if kind is not None:
            return kind

    for link in chain:
        message = str(link).upper()
        for marker, kind in _MESSAGE_MARKERS:
            if marker in message:
                return kind

    return FailureKind.UNKNOWN


def describe_failure(failure: Failure) -> str:
    """User-facing (Vietnamese) description of a failure."""
    if failure.kind is FailureKind.QUOTA_EXHAUSTED:
        return "API Key đã hết quota. Vui lòng dùng key khác hoặc chờ reset."
    if failure.kind is FailureKind.INVALID_CREDENTIAL:
        return "API Key không hợp lệ. Vui lòng kiểm tra lại."
    if failure.kind is FailureKind.MODEL_NOT_FOUND:
        return f'Model "{failure.model}" không tồn tại. Vui lòng chọn model khác.'
    if failure.kind is FailureKind.EMPTY_RESPONSE:
        return "API trả về rỗng. Vui lòng thử lại."
    if failure.kind is FailureKind.PIPELINE_EXHAUSTED:
        return failure.message
    return f"Lỗi kết nối: {failure.message}"

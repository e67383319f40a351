"""Tests for request types, failure classification and provider errors."""

from __future__ import annotations

import pytest

from skknpro.providers import (
    AttemptError,
    Failure,
    FailureKind,
    InlineAttachment,
    PipelineExhaustedError,
    ProviderError,
    ResponseFormat,
    StageKind,
    StageRequest,
    TextPart,
    classify_provider_error,
    describe_failure,
    get_sampling,
)
from skknpro.providers.base import exhaustion_failure
from tests.fixtures.scripted_llm import ProviderFailure


class StatusError(Exception):
    def __init__(self, message: str, status: str) -> None:
        super().__init__(message)
        self.status = status


# --- classify_provider_error ---


@pytest.mark.parametrize(
    ("code", "kind"),
    [
        (429, FailureKind.QUOTA_EXHAUSTED),
        (401, FailureKind.INVALID_CREDENTIAL),
        (403, FailureKind.INVALID_CREDENTIAL),
        (404, FailureKind.MODEL_NOT_FOUND),
    ],
)
def test_structured_code_wins(code: int, kind: FailureKind) -> None:
    """Integer codes classify even when the message says nothing useful."""
    assert classify_provider_error(ProviderFailure("boom", code=code)) is kind


def test_status_attribute_is_used() -> None:
    error = StatusError("request failed", status="resource_exhausted")

    assert classify_provider_error(error) is FailureKind.QUOTA_EXHAUSTED


def test_structured_code_beats_message() -> None:
    """A 404 code is not overridden by a quota-looking message."""
    error = ProviderFailure("quota exceeded for project", code=404)

    assert classify_provider_error(error) is FailureKind.MODEL_NOT_FOUND


@pytest.mark.parametrize(
    ("message", "kind"),
    [
        ("429 RESOURCE_EXHAUSTED", FailureKind.QUOTA_EXHAUSTED),
        ("You exceeded your current quota", FailureKind.QUOTA_EXHAUSTED),
        ("400 API_KEY_INVALID", FailureKind.INVALID_CREDENTIAL),
        ("API key not valid. Please pass a valid API key.", FailureKind.INVALID_CREDENTIAL),
        ("400 INVALID_ARGUMENT", FailureKind.INVALID_CREDENTIAL),
        ("models/gemini-9 is not found for API version v1beta", FailureKind.MODEL_NOT_FOUND),
        ("404 NOT_FOUND", FailureKind.MODEL_NOT_FOUND),
        ("connection reset by peer", FailureKind.UNKNOWN),
    ],
)
def test_message_markers(message: str, kind: FailureKind) -> None:
    assert classify_provider_error(RuntimeError(message)) is kind


def test_cause_chain_is_searched() -> None:
    """A wrapped SDK error still classifies by its cause."""
    try:
        try:
            raise ProviderFailure("inner", code=429)
        except ProviderFailure as inner:
            raise RuntimeError("wrapper") from inner
    except RuntimeError as outer:
        assert classify_provider_error(outer) is FailureKind.QUOTA_EXHAUSTED


def test_bool_code_is_ignored() -> None:
    error = ProviderFailure("something odd")
    error.code = True  # type: ignore[assignment]

    assert classify_provider_error(error) is FailureKind.UNKNOWN


# --- describe_failure / errors ---


def test_describe_failure_messages() -> None:
    quota = Failure(model="m", kind=FailureKind.QUOTA_EXHAUSTED, message="x")
    missing = Failure(model="gemini-9", kind=FailureKind.MODEL_NOT_FOUND, message="x")
    unknown = Failure(model="m", kind=FailureKind.UNKNOWN, message="socket closed")

    assert "hết quota" in describe_failure(quota)
    assert '"gemini-9"' in describe_failure(missing)
    assert describe_failure(unknown) == "Lỗi kết nối: socket closed"


def test_attempt_error_carries_failure() -> None:
    failure = Failure(model="gemini-1.5-pro", kind=FailureKind.INVALID_CREDENTIAL, message="x")
    error = AttemptError(failure)

    assert isinstance(error, ProviderError)
    assert error.model == "gemini-1.5-pro"
    assert error.kind is FailureKind.INVALID_CREDENTIAL
    assert "[gemini-1.5-pro]" in str(error)


def test_pipeline_exhausted_error_summary() -> None:
    attempts = [
        Failure(model="a", kind=FailureKind.QUOTA_EXHAUSTED, message="first"),
        Failure(model="b", kind=FailureKind.UNKNOWN, message="last problem"),
    ]
    error = PipelineExhaustedError(attempts)

    assert error.attempted_models == ["a", "b"]
    assert str(error) == "Hệ thống đang quá tải (đã thử 2 model). Lỗi: last problem"


def test_exhaustion_failure_aggregates() -> None:
    attempts = [
        Failure(model="a", kind=FailureKind.UNKNOWN, message="x", duration_seconds=1.0),
        Failure(model="b", kind=FailureKind.UNKNOWN, message="y", duration_seconds=2.0),
    ]
    aggregate = exhaustion_failure(attempts)

    assert aggregate.kind is FailureKind.PIPELINE_EXHAUSTED
    assert aggregate.model == "b"
    assert aggregate.duration_seconds == pytest.approx(3.0)
    assert "đã thử 2 model" in aggregate.message


# --- StageRequest ---


def test_stage_request_text_and_attachments() -> None:
    pdf = InlineAttachment(mime_type="application/pdf", data="JVBERi0=", name="a.pdf")
    request = StageRequest(
        stage=StageKind.EVALUATION,
        system_instruction="sys",
        parts=(pdf, TextPart("rubric")),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling("generation"),
    )

    assert request.text == "rubric"
    assert request.attachments == (pdf,)

"""Tests for sequential model fallback."""

from __future__ import annotations

import pytest

from skknpro.providers import (
    CompletionInvoker,
    Failure,
    FailureKind,
    FallbackExecutor,
    PipelineExhaustedError,
    ResponseFormat,
    StageKind,
    StageRequest,
    TextPart,
    get_sampling,
)
from tests.fixtures.scripted_llm import (
    LIVE_KEY,
    ProviderFailure,
    ScriptedChatModel,
    ScriptedModels,
)

PLAN = ["m1", "m2", "m3"]


def _request(text: str = "Viết phần I") -> StageRequest:
    return StageRequest(
        stage=StageKind.PART_1,
        system_instruction="sys",
        parts=(TextPart(text),),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling("generation"),
    )


def _executor(scripted: ScriptedModels) -> FallbackExecutor:
    return FallbackExecutor(CompletionInvoker(LIVE_KEY, scripted.factory))


@pytest.mark.asyncio
async def test_first_model_success_makes_one_call(scripted_models: ScriptedModels) -> None:
    scripted_models.script("m1", "phần I")

    outcome = await _executor(scripted_models).run(PLAN, _request())

    assert outcome.succeeded
    assert outcome.unwrap().text == "phần I"
    assert scripted_models.called_models == ["m1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("winner", [1, 2, 3])
async def test_model_k_success_makes_k_calls(
    scripted_models: ScriptedModels, winner: int
) -> None:
    """Models before the winner fail; models after it are never called."""
    for model_id in PLAN[: winner - 1]:
        scripted_models.script(model_id, ProviderFailure("429 RESOURCE_EXHAUSTED"))
    scripted_models.script(PLAN[winner - 1], "ok")
    for model_id in PLAN[winner:]:
        scripted_models.script(model_id, "never used")

    outcome = await _executor(scripted_models).run(PLAN, _request())

    assert scripted_models.called_models == PLAN[:winner]
    assert outcome.attempted_models == PLAN[:winner]
    assert len(outcome.failures) == winner - 1
    assert outcome.success is not None
    assert outcome.success.model == PLAN[winner - 1]


@pytest.mark.asyncio
async def test_empty_response_moves_to_next_model(scripted_models: ScriptedModels) -> None:
    scripted_models.script("m1", "")
    scripted_models.script("m2", "ok")

    outcome = await _executor(scripted_models).run(PLAN, _request())

    assert outcome.failures[0].kind is FailureKind.EMPTY_RESPONSE
    assert outcome.unwrap().model == "m2"


@pytest.mark.asyncio
async def test_all_failures_aggregate(scripted_models: ScriptedModels) -> None:
    scripted_models.script("m1", ProviderFailure("quota", code=429))
    scripted_models.script("m2", ProviderFailure("bad key", code=401))
    scripted_models.script("m3", ProviderFailure("network down"))

    outcome = await _executor(scripted_models).run(PLAN, _request())

    assert not outcome.succeeded
    assert outcome.attempted_models == PLAN
    result = outcome.result
    assert isinstance(result, Failure)
    assert result.kind is FailureKind.PIPELINE_EXHAUSTED
    assert result.message == "Hệ thống đang quá tải (đã thử 3 model). Lỗi: network down"

    with pytest.raises(PipelineExhaustedError) as exc_info:
        outcome.unwrap()
    assert exc_info.value.attempted_models == PLAN


@pytest.mark.asyncio
async def test_model_construction_error_moves_to_next_model(
    scripted_models: ScriptedModels,
) -> None:
    scripted_models.script("m2", "phần I")

    def factory(model_id: str, credential: str, request: StageRequest) -> ScriptedChatModel:
        if model_id == "m1":
            raise ValueError("bad model kwargs")
        return scripted_models.factory(model_id, credential, request)

    executor = FallbackExecutor(CompletionInvoker(LIVE_KEY, factory))
    outcome = await executor.run(PLAN, _request())

    assert outcome.unwrap().text == "phần I"
    assert outcome.attempted_models == ["m1", "m2"]
    assert outcome.failures[0].kind is FailureKind.UNKNOWN
    assert outcome.failures[0].message == "bad model kwargs"
    assert scripted_models.called_models == ["m2"]


@pytest.mark.asyncio
async def test_request_factory_called_per_attempt(scripted_models: ScriptedModels) -> None:
    scripted_models.script("m2", "ok")
    seen: list[str] = []

    def build(model_id: str) -> StageRequest:
        seen.append(model_id)
        return _request(f"for {model_id}")

    await _executor(scripted_models).run(PLAN, build)

    assert seen == ["m1", "m2"]
    assert [r.text for r in scripted_models.requests] == ["for m1", "for m2"]


@pytest.mark.asyncio
async def test_static_request_is_reused(scripted_models: ScriptedModels) -> None:
    scripted_models.script("m3", "ok")
    request = _request()

    await _executor(scripted_models).run(PLAN, request)

    assert scripted_models.requests == [request, request, request]


@pytest.mark.asyncio
async def test_empty_plan_is_rejected(scripted_models: ScriptedModels) -> None:
    with pytest.raises(ValueError, match="at least one model"):
        await _executor(scripted_models).run([], _request())
    assert scripted_models.calls == []

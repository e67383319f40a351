"""Tests for attempt-plan resolution."""

from __future__ import annotations

import pytest

from skknpro.providers.model_plans import (
    CUSTOM,
    EXPERT,
    FAST,
    LOGICAL_MODES,
    MODEL_PIPELINES,
    SELECTABLE_MODELS,
    SMART,
    resolve_attempt_plan,
)


@pytest.mark.parametrize("selector", list(MODEL_PIPELINES))
def test_known_selectors_give_non_empty_unique_plans(selector: str) -> None:
    """Every known selector resolves to a non-empty list without duplicates."""
    plan = resolve_attempt_plan(selector)

    assert plan
    assert len(plan) == len(set(plan))
    assert plan == list(MODEL_PIPELINES[selector])


def test_fast_plan_order() -> None:
    """Fast mode tries the experimental flash model first."""
    assert resolve_attempt_plan(FAST) == [
        "gemini-2.0-flash-exp",
        "gemini-1.5-flash",
        "gemini-1.5-flash-latest",
    ]


def test_smart_plan_starts_with_pro_model() -> None:
    """Smart mode leads with its high-quality model, unlike fast mode."""
    smart = resolve_attempt_plan(SMART)
    fast = resolve_attempt_plan(FAST)

    assert smart[0] == "gemini-1.5-pro"
    assert smart[0] != fast[0]


def test_expert_plan_starts_with_latest_pro() -> None:
    assert resolve_attempt_plan(EXPERT)[0] == "gemini-1.5-pro-latest"


def test_legacy_alias_has_two_entries() -> None:
    """Old single-model settings keep their two-entry lists."""
    assert resolve_attempt_plan("gemini-1.5-pro") == ["gemini-1.5-pro", "gemini-1.5-pro-latest"]


def test_unknown_model_id_is_tried_first_then_fast() -> None:
    """An explicit id comes first, followed by the fast plan."""
    plan = resolve_attempt_plan("gemini-exp-1206")

    assert plan[0] == "gemini-exp-1206"
    assert plan[1:] == list(MODEL_PIPELINES[FAST])


def test_explicit_id_already_in_fast_plan_is_not_duplicated() -> None:
    plan = resolve_attempt_plan("gemini-1.5-flash-latest")

    assert plan[0] == "gemini-1.5-flash-latest"
    assert plan.count("gemini-1.5-flash-latest") == 1
    assert len(plan) == 3


@pytest.mark.parametrize("selector", ["", "   ", None, CUSTOM])
def test_empty_selector_means_fast(selector: str | None) -> None:
    assert resolve_attempt_plan(selector) == list(MODEL_PIPELINES[FAST])


def test_selector_whitespace_is_trimmed() -> None:
    assert resolve_attempt_plan("  smart  ") == resolve_attempt_plan(SMART)


def test_logical_modes_are_all_resolvable() -> None:
    assert all(mode in MODEL_PIPELINES for mode in LOGICAL_MODES)


def test_selectable_models_offer_custom() -> None:
    selectors = [selector for selector, _ in SELECTABLE_MODELS]

    assert CUSTOM in selectors
    assert selectors[:3] == [FAST, SMART, EXPERT]

"""Resolution of a model selector into an ordered attempt plan."""

from __future__ import annotations

from collections.abc import Iterable

from skknpro.observability.logging import get_logger

log = get_logger(__name__)

FAST = "fast"
SMART = "smart"
EXPERT = "expert"
CUSTOM = "custom"

# Logical modes, then legacy single-model aliases kept for old settings files
MODEL_PIPELINES: dict[str, tuple[str, ...]] = {
    FAST: ("gemini-2.0-flash-exp", "gemini-1.5-flash", "gemini-1.5-flash-latest"),
    SMART: ("gemini-1.5-pro", "gemini-2.0-flash-exp", "gemini-1.5-flash"),
    EXPERT: ("gemini-1.5-pro-latest", "gemini-1.5-pro", "gemini-2.0-flash-exp"),
    "gemini-1.5-flash": ("gemini-1.5-flash", "gemini-1.5-flash-latest"),
    "gemini-1.5-pro": ("gemini-1.5-pro", "gemini-1.5-pro-latest"),
    "gemini-2.0-flash-exp": ("gemini-2.0-flash-exp", "gemini-1.5-flash"),
}

LOGICAL_MODES: tuple[str, ...] = (FAST, SMART, EXPERT)

# (selector, label) pairs offered to callers building a model picker
SELECTABLE_MODELS: tuple[tuple[str, str], ...] = (
    (FAST, "⚡ Nhanh (Flash)"),
    (SMART, "🧠 Thông minh (Pro + Flash)"),
    (EXPERT, "💎 Chuyên gia (Pro Latest)"),
    ("gemini-2.0-flash", "⚡ Gemini 2.0 Flash"),
    ("gemini-1.5-flash", "⚡ Gemini 1.5 Flash"),
    ("gemini-1.5-pro-latest", "💎 Gemini 1.5 Pro Latest"),
    (CUSTOM, "🔧 Model tùy chỉnh..."),
)


def _dedupe(model_ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    plan: list[str] = []
    for model_id in model_ids:
        if model_id and model_id not in seen:
            seen.add(model_id)
            plan.append(model_id)
    return plan


def resolve_attempt_plan(selector: str | None) -> list[str]:
    """Turn a logical mode or explicit model id into an attempt plan.

    Known modes and aliases map to their fixed lists. Any other string is
    taken as an explicit model id and tried first, followed by the fast
    plan. An empty selector means the fast plan.

    Args:
        selector: Mode name, legacy alias, or explicit model id.

    Returns:
        Non-empty, duplicate-free list of model ids in preference order.
    """
    normalized = (selector or "").strip()
    if not normalized or normalized == CUSTOM:
        return list(MODEL_PIPELINES[FAST])

    if normalized in MODEL_PIPELINES:
        return _dedupe(MODEL_PIPELINES[normalized])

    plan = _dedupe([normalized, *MODEL_PIPELINES[FAST]])
    log.debug("model_selector_explicit", selector=normalized, plan=plan)
    return plan

"""Sampling presets per analysis type.

Rigorous scoring runs cold and narrow; free-form writing keeps the
provider defaults. Presets are named so callers never pass raw numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from skknpro.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SamplingConfig:
    """Sampling parameters for one request. None means provider default.

    Raises:
        ValueError: On out-of-range values.
    """

    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None

    def __post_init__(self) -> None:
        if self.temperature is not None and self.temperature < 0:
            raise ValueError(f"temperature must be >= 0, got {self.temperature}")
        if self.top_p is not None and not 0 <= self.top_p <= 1:
            raise ValueError(f"top_p must be in [0, 1], got {self.top_p}")
        if self.top_k is not None and self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SamplingConfig:
        """Create from a mapping, accepting both snake and camel keys."""
        return cls(
            temperature=data.get("temperature"),
            top_p=data.get("top_p", data.get("topP")),
            top_k=data.get("top_k", data.get("topK")),
        )

    def to_model_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the chat model, unset values dropped."""
        kwargs: dict[str, Any] = {}
        for key in ("temperature", "top_p", "top_k"):
            value = getattr(self, key)
            if value is None:
                log.debug("param_is_none", param=key, action="skipping")
                continue
            kwargs[key] = value
        return kwargs


TITLE_ANALYSIS = "title_analysis"
APPRAISAL = "appraisal"
GENERATION = "generation"

SAMPLING_PRESETS: dict[str, SamplingConfig] = {
    TITLE_ANALYSIS: SamplingConfig(temperature=0.4, top_p=0.8, top_k=40),
    APPRAISAL: SamplingConfig(temperature=0.3, top_p=0.85, top_k=50),
    GENERATION: SamplingConfig(),
}


def get_sampling(profile: str) -> SamplingConfig:
    """Look up a named preset.

    Raises:
        KeyError: For unknown profile names.
    """
    try:
        return SAMPLING_PRESETS[profile]
    except KeyError:
        raise KeyError(
            f"Unknown sampling profile '{profile}'. Known: {', '.join(sorted(SAMPLING_PRESETS))}"
        ) from None

"""Pipeline configuration loading and per-request settings resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

from ruamel.yaml import YAML, YAMLError

from skknpro.models.inputs import RequestSettings
from skknpro.prompts.builders import DEFAULT_APPRAISAL_CHAR_LIMIT
from skknpro.providers.model_plans import FAST

CONFIG_FILENAME = "skknpro.yaml"

# Environment overrides
ENV_API_KEY = "SKKN_API_KEY"
ENV_SYSTEM_API_KEY = "SKKN_SYSTEM_API_KEY"
ENV_MODEL = "SKKN_MODEL"
ENV_GOOGLE_API_KEY = "GOOGLE_API_KEY"


@dataclass
class PipelineConfig:
    """Settings that apply to every workflow an orchestrator runs.

    Attributes:
        model_selector: Mode name, legacy alias, explicit model id or ``custom``.
        custom_model: Model id used when the selector is ``custom``.
        log_llm_calls: Record every attempt to ``logs/llm_calls.jsonl``.
        appraisal_char_limit: Report text beyond this is cut before appraisal.
        demo_on_exhaustion: Best-effort workflows answer with demo output
            instead of an error when every model fails.
    """

    model_selector: str = FAST
    custom_model: str = ""
    log_llm_calls: bool = False
    appraisal_char_limit: int = DEFAULT_APPRAISAL_CHAR_LIMIT
    demo_on_exhaustion: bool = True

    def __post_init__(self) -> None:
        if self.appraisal_char_limit < 1:
            raise ValueError(
                f"appraisal_char_limit must be positive, got {self.appraisal_char_limit}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PipelineConfig:
        """Create config from a mapping; unknown keys are ignored.

        Raises:
            ValueError: If a value has the wrong type or range.
        """
        limit = data.get("appraisal_char_limit", DEFAULT_APPRAISAL_CHAR_LIMIT)
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValueError(f"appraisal_char_limit must be an integer, got {limit!r}")

        flags: dict[str, bool] = {}
        for name, default in (("log_llm_calls", False), ("demo_on_exhaustion", True)):
            value = data.get(name, default)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")
            flags[name] = value

        return cls(
            model_selector=str(data.get("model_selector") or FAST),
            custom_model=str(data.get("custom_model") or ""),
            log_llm_calls=flags["log_llm_calls"],
            appraisal_char_limit=limit,
            demo_on_exhaustion=flags["demo_on_exhaustion"],
        )


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config at {path}: {reason}")


def load_pipeline_config(
    project_path: Path,
    defaults: dict[str, Any] | None = None,
) -> PipelineConfig:
    """Load ``{project_path}/skknpro.yaml`` over optional defaults.

    A missing file yields the defaults alone.

    Args:
        project_path: Directory holding the config file.
        defaults: Lower-priority values, typically the user-level config.

    Returns:
        PipelineConfig instance.

    Raises:
        ConfigError: If the file is empty, not a mapping, not valid YAML,
            or holds invalid values.
    """
    config_path = project_path / CONFIG_FILENAME
    data: dict[str, Any] = dict(defaults or {})

    if config_path.exists():
        yaml = YAML(typ="safe")
        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.load(f)
        except (OSError, YAMLError) as e:
            raise ConfigError(config_path, str(e)) from e

        if loaded is None:
            raise ConfigError(config_path, "Empty file")
        if not isinstance(loaded, dict):
            raise ConfigError(config_path, "Top level must be a mapping")
        data.update(loaded)

    try:
        return PipelineConfig.from_dict(data)
    except ValueError as e:
        raise ConfigError(config_path, str(e)) from e


def resolve_request_settings(
    config: PipelineConfig,
    credential: str | None = None,
    model_selector: str | None = None,
) -> RequestSettings:
    """Combine explicit values, environment and config into RequestSettings.

    Resolution order (highest priority first):
    1. Explicit arguments (CLI flags)
    2. SKKN_API_KEY / SKKN_MODEL environment variables
    3. The pipeline config
    4. GOOGLE_API_KEY, as the last credential source

    The shared default credential only ever comes from SKKN_SYSTEM_API_KEY.
    """
    return RequestSettings(
        credential=(
            credential or os.getenv(ENV_API_KEY) or os.getenv(ENV_GOOGLE_API_KEY) or ""
        ),
        model_selector=model_selector or os.getenv(ENV_MODEL) or config.model_selector,
        custom_model=config.custom_model,
        system_credential=os.getenv(ENV_SYSTEM_API_KEY) or "",
    )

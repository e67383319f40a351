"""Global user configuration loading.

Reads user-level defaults from ~/.config/skknpro/config.yaml. This is the
lowest-priority source, below CLI flags, environment variables and the
project's skknpro.yaml.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from skknpro.observability.logging import get_logger

log = get_logger(__name__)

# XDG-compliant default config directory
_DEFAULT_CONFIG_DIR = Path.home() / ".config" / "skknpro"


def load_user_config(config_dir: Path | None = None) -> dict[str, Any] | None:
    """Load the user's default settings.

    Unreadable or malformed files are logged and ignored rather than
    blocking the run.

    Args:
        config_dir: Override config directory (for testing).
            Defaults to ~/.config/skknpro/.

    Returns:
        Raw settings mapping, or None if there is nothing usable.
    """
    config_dir = config_dir or _DEFAULT_CONFIG_DIR
    config_path = config_dir / "config.yaml"

    if not config_path.exists():
        return None

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except OSError as e:
        log.warning("user_config_load_failed", path=str(config_path), error=str(e))
        return None
    except YAMLError as e:
        log.warning("user_config_parse_failed", path=str(config_path), error=str(e))
        return None

    if not isinstance(data, dict) or not data:
        return None

    log.debug("user_config_loaded", path=str(config_path), keys=len(data))
    return dict(data)

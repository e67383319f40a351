"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from skknpro.models import RequestSettings
from tests.fixtures.scripted_llm import LIVE_KEY, ScriptedModels


@pytest.fixture
def scripted_models() -> ScriptedModels:
    """Fresh scripted chat-model factory; nothing queued yet."""
    return ScriptedModels()


@pytest.fixture
def live_settings() -> RequestSettings:
    """Settings with a credential that passes the demo check."""
    return RequestSettings(credential=LIVE_KEY)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent

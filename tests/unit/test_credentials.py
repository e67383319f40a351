"""Tests for credential classification and masking."""

from __future__ import annotations

import pytest

from skknpro.providers.credentials import (
    DEMO_SENTINELS,
    MIN_CREDENTIAL_LENGTH,
    is_demo_credential,
    mask_credential,
)


@pytest.mark.parametrize("credential", sorted(DEMO_SENTINELS))
def test_sentinels_are_demo(credential: str) -> None:
    assert is_demo_credential(credential)


def test_none_is_demo() -> None:
    assert is_demo_credential(None)


@pytest.mark.parametrize("length", range(1, MIN_CREDENTIAL_LENGTH))
def test_short_credentials_are_demo(length: int) -> None:
    """Anything below the minimum length is a test value."""
    assert is_demo_credential("k" * length)


@pytest.mark.parametrize("length", [MIN_CREDENTIAL_LENGTH, MIN_CREDENTIAL_LENGTH + 1, 39])
def test_long_enough_credentials_are_live(length: int) -> None:
    assert not is_demo_credential("k" * length)


def test_placeholder_is_demo() -> None:
    assert is_demo_credential("PLACEHOLDER_API_KEY")


def test_mask_credential_keeps_only_edges() -> None:
    masked = mask_credential("AIzaSyABCDEFGHIJKLMNOPQRSTUVWXYZ")

    assert masked.startswith("AIza")
    assert masked.endswith("WXYZ")
    assert "ABCDEFGH" not in masked


def test_mask_credential_short_and_empty() -> None:
    assert mask_credential("") == "<none>"
    assert mask_credential(None) == "<none>"
    assert mask_credential("abc") == "***"

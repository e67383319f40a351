"""Classification of caller-supplied credentials as live or demo."""

from __future__ import annotations

# Values the UI ships as placeholders; never worth a network call
DEMO_SENTINELS: frozenset[str] = frozenset({"", "demo", "test", "PLACEHOLDER_API_KEY"})

# Real Gemini keys are ~39 chars; anything this short is a test value
MIN_CREDENTIAL_LENGTH = 20


def is_demo_credential(credential: str | None) -> bool:
    """Return True when a credential cannot be used for live calls.

    Args:
        credential: Raw credential string as supplied by the caller.

    Returns:
        True if missing, shorter than MIN_CREDENTIAL_LENGTH, or one of the
        DEMO_SENTINELS.
    """
    if not credential:
        return True
    return credential in DEMO_SENTINELS or len(credential) < MIN_CREDENTIAL_LENGTH


def mask_credential(credential: str | None) -> str:
    """Render a credential safe for logs."""
    if not credential:
        return "<none>"
    if len(credential) <= 8:
        return "*" * len(credential)
    return f"{credential[:4]}…{credential[-4:]}"

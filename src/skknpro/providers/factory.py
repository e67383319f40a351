"""Factory for Gemini chat models.

Every attempt gets a freshly configured model: the credential, model id,
sampling and response format are all fixed at construction time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from skknpro.observability.logging import get_logger
from skknpro.providers.base import ProviderError, ResponseFormat

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from skknpro.providers.base import StageRequest

log = get_logger(__name__)

PROVIDER = "google_genai"
PROVIDER_PACKAGE = "langchain-google-genai"

_MIME_TYPES: dict[ResponseFormat, str] = {
    ResponseFormat.TEXT: "text/plain",
    ResponseFormat.JSON: "application/json",
}


def create_chat_model(model_id: str, credential: str, request: StageRequest) -> BaseChatModel:
    """Create a LangChain chat model for one attempt.

    Args:
        model_id: Concrete Gemini model id.
        credential: API key for this attempt.
        request: Request whose sampling and response format apply.

    Returns:
        Configured BaseChatModel.

    Raises:
        ProviderError: If no credential is available or the integration
            package is missing.
    """
    kwargs = _build_model_kwargs(credential, request)

    try:
        chat_model = _init_chat_model_safe(model_id, **kwargs)
    except ImportError as e:
        log.error("provider_import_error", provider=PROVIDER, package=PROVIDER_PACKAGE)
        raise ProviderError(
            PROVIDER,
            f"{PROVIDER_PACKAGE} not installed. Run: pip install {PROVIDER_PACKAGE}",
        ) from e

    log.debug("chat_model_created", model=model_id, response_format=str(request.response_format))
    return chat_model


def _build_model_kwargs(credential: str, request: StageRequest) -> dict[str, Any]:
    if not credential:
        log.error("provider_config_error", provider=PROVIDER, missing="api_key")
        raise ProviderError(PROVIDER, "API key required. Set SKKN_API_KEY or GOOGLE_API_KEY.")

    kwargs: dict[str, Any] = {
        "api_key": credential,
        # One attempt per call; moving to the next model is the retry policy
        "max_retries": 0,
        "response_mime_type": _MIME_TYPES[request.response_format],
    }
    kwargs.update(request.sampling.to_model_kwargs())
    return kwargs


def _init_chat_model_safe(model: str, **kwargs: Any) -> BaseChatModel:
    """Call init_chat_model, letting ImportError surface for the caller to map."""
    from langchain.chat_models import init_chat_model

    result: BaseChatModel = init_chat_model(model=model, model_provider=PROVIDER, **kwargs)
    return result

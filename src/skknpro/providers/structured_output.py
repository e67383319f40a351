"""Parsing adapter for JSON-shaped stage responses.

The provider returns text. Models frequently wrap JSON in markdown fences
or add a sentence before it, so fences and surrounding prose are stripped
here, before schema validation, and nowhere else.
"""

from __future__ import annotations

import json
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from skknpro.observability.logging import get_logger

log = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)```", re.DOTALL)


class StructuredOutputError(Exception):
    """Raised when a structured response cannot be parsed or validated.

    Attributes:
        stage: Stage whose response failed.
        raw_content: The text the model returned.
    """

    def __init__(self, stage: str, message: str, raw_content: str) -> None:
        self.stage = stage
        self.raw_content = raw_content
        super().__init__(f"Structured output for '{stage}' invalid: {message}")


def strip_code_fences(text: str) -> str:
    """Return the JSON payload of a response, minus fences and prose.

    Args:
        text: Raw response text.

    Returns:
        The fenced block if there is one, else the span from the first
        ``{`` to the last ``}``, else the stripped text.
    """
    if not text:
        return "{}"

    fence_match = _FENCE_PATTERN.search(text)
    if fence_match:
        return fence_match.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return text.strip()


def format_validation_errors(error: ValidationError) -> str:
    """Flatten pydantic errors into ``loc: msg`` lines."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"]) or "<root>"
        lines.append(f"{loc}: {item['msg']}")
    return "; ".join(lines)


def parse_structured_output(text: str, schema: type[ModelT], stage: str) -> ModelT:
    """Parse a model response into ``schema``.

    Args:
        text: Raw response text.
        schema: Pydantic model describing the expected layout.
        stage: Stage name, for error messages and logs.

    Returns:
        Validated model instance.

    Raises:
        StructuredOutputError: If the payload is not JSON or does not
            validate against the schema.
    """
    payload = strip_code_fences(text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        log.warning("structured_output_not_json", stage=stage, error=str(e))
        raise StructuredOutputError(stage, f"not valid JSON ({e.msg})", text) from e

    if not isinstance(data, dict):
        kind = type(data).__name__
        raise StructuredOutputError(stage, f"expected a JSON object, got {kind}", text)

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        details = format_validation_errors(e)
        log.warning("structured_output_invalid", stage=stage, errors=details)
        raise StructuredOutputError(stage, details, text) from e

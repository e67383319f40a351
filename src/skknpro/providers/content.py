"""Conversion between our content parts and LangChain message content.

Gemini may answer with ``AIMessage.content`` as a list of content-block
dicts rather than a plain string, and multimodal requests need attachments
expressed as LangChain data blocks. Both directions live here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from skknpro.providers.base import InlineAttachment, TextPart

if TYPE_CHECKING:
    from skknpro.providers.base import ContentPart, StageRequest


def extract_text(content: str | list[Any]) -> str:
    """Extract plain text from an LLM message content field.

    Handles two formats:
    - ``str``: returned as-is.
    - ``list``: content blocks; text is taken from blocks with
      ``type == "text"`` (and bare strings), joined with newlines.

    Blocks without text (thinking, tool use) contribute nothing, so a
    response made only of those yields ``""`` and is treated as empty.
    """
    if isinstance(content, str):
        return content

    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            text = block.get("text")
            if isinstance(text, str):
                parts.append(text)
    return "\n".join(parts)


def to_content_blocks(parts: tuple[ContentPart, ...]) -> str | list[dict[str, Any]]:
    """Render content parts as LangChain human-message content.

    A single text part stays a plain string. Anything else becomes a list
    of standard data blocks, attachments as base64 ``file`` blocks.
    """
    if len(parts) == 1 and isinstance(parts[0], TextPart):
        return parts[0].text

    blocks: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, TextPart):
            blocks.append({"type": "text", "text": part.text})
        elif isinstance(part, InlineAttachment):
            blocks.append(
                {
                    "type": "file",
                    "source_type": "base64",
                    "mime_type": part.mime_type,
                    "data": part.data,
                }
            )
    return blocks


def to_langchain_messages(request: StageRequest) -> list[BaseMessage]:
    """Build the message list for one attempt."""
    messages: list[BaseMessage] = []
    if request.system_instruction:
        messages.append(SystemMessage(content=request.system_instruction))
    content = to_content_blocks(request.parts)
    messages.append(HumanMessage(content=content))  # type: ignore[arg-type]
    return messages


def summarize_parts(parts: tuple[ContentPart, ...]) -> list[dict[str, Any]]:
    """Log-friendly view of content parts; attachment bytes are not copied."""
    summary: list[dict[str, Any]] = []
    for part in parts:
        if isinstance(part, TextPart):
            summary.append({"type": "text", "text": part.text})
        else:
            summary.append(
                {
                    "type": "attachment",
                    "name": part.name,
                    "mime_type": part.mime_type,
                    "base64_length": len(part.data),
                }
            )
    return summary

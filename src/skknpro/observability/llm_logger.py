"""JSONL log of completion attempts.

One line per attempt (successful or not) in ``logs/llm_calls.jsonl``.
Prompts and responses are stored in full; credentials never are.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class LLMLogEntry:
    """A single completion attempt."""

    timestamp: str
    stage: str
    model: str

    # Request
    system_instruction: str
    parts: list[dict[str, Any]]
    response_format: str
    sampling: dict[str, Any]

    # Outcome
    content: str
    duration_seconds: float
    failure_kind: str | None = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.failure_kind is None


class LLMLogger:
    """Append-only JSONL writer for completion attempts.

    Attributes:
        log_path: Path to the JSONL file.
        enabled: When False, nothing is created or written.
    """

    def __init__(self, project_path: Path, enabled: bool = True) -> None:
        self.enabled = enabled
        self.log_path = project_path / "logs" / "llm_calls.jsonl"
        if enabled:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, entry: LLMLogEntry) -> None:
        if not self.enabled:
            return

        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(asdict(entry), ensure_ascii=False) + "\n")

    @staticmethod
    def create_entry(
        stage: str,
        model: str,
        system_instruction: str,
        parts: list[dict[str, Any]],
        content: str,
        duration_seconds: float,
        response_format: str = "text",
        sampling: dict[str, Any] | None = None,
        failure_kind: str | None = None,
        error: str | None = None,
        **metadata: Any,
    ) -> LLMLogEntry:
        """Build an entry stamped with the current UTC time.

        Args:
            stage: Stage that issued the request (e.g. "outline").
            model: Concrete model id attempted.
            system_instruction: System instruction sent with the request.
            parts: Content parts, attachments already summarised.
            content: Response text ("" for failures).
            duration_seconds: Wall time of the attempt.
            response_format: "text" or "json".
            sampling: Sampling parameters actually sent.
            failure_kind: FailureKind value when the attempt failed.
            error: Provider error message when the attempt failed.
            **metadata: Extra context stored verbatim.

        Returns:
            LLMLogEntry ready for :meth:`log`.
        """
        return LLMLogEntry(
            timestamp=datetime.now(UTC).isoformat(),
            stage=stage,
            model=model,
            system_instruction=system_instruction,
            parts=parts,
            response_format=response_format,
            sampling=dict(sampling or {}),
            content=content,
            duration_seconds=duration_seconds,
            failure_kind=failure_kind,
            error=error,
            metadata=dict(metadata),
        )

    def read_entries(self) -> list[LLMLogEntry]:
        """Read back every entry written so far."""
        if not self.log_path.exists():
            return []

        entries = []
        with self.log_path.open(encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    entries.append(LLMLogEntry(**json.loads(line)))
        return entries

"""Observability: structured logging and the completion-attempt log."""

from skknpro.observability.llm_logger import LLMLogEntry, LLMLogger
from skknpro.observability.logging import (
    close_file_logging,
    configure_logging,
    get_logger,
    get_logs_dir,
)

__all__ = [
    "LLMLogEntry",
    "LLMLogger",
    "close_file_logging",
    "configure_logging",
    "get_logger",
    "get_logs_dir",
]

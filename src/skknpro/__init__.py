"""SKKN Pro: staged LLM pipeline for drafting and appraising SKKN reports."""

__version__ = "0.3.0"

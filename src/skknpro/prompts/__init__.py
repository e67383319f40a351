"""Prompt templates, compilation and per-stage request builders."""

from skknpro.prompts.builders import (
    build_appraisal_request,
    build_connection_test_request,
    build_evaluation_request,
    build_full_report_request,
    build_outline_request,
    build_part1_request,
    build_part23_request,
    build_plagiarism_request,
    build_title_analysis_request,
    get_default_compiler,
    truncate_content,
)
from skknpro.prompts.compiler import CompiledPrompt, PromptCompileError, PromptCompiler
from skknpro.prompts.loader import (
    PromptLoader,
    PromptTemplate,
    TemplateNotFoundError,
    TemplateParseError,
)

__all__ = [
    "CompiledPrompt",
    "PromptCompileError",
    "PromptCompiler",
    "PromptLoader",
    "PromptTemplate",
    "TemplateNotFoundError",
    "TemplateParseError",
    "build_appraisal_request",
    "build_connection_test_request",
    "build_evaluation_request",
    "build_full_report_request",
    "build_outline_request",
    "build_part1_request",
    "build_part23_request",
    "build_plagiarism_request",
    "build_title_analysis_request",
    "get_default_compiler",
    "truncate_content",
]

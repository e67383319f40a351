"""Prompt compiler: ``{{ variable }}`` substitution over loaded templates."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from skknpro.prompts.loader import (
    PromptLoader,
    PromptTemplate,
    TemplateNotFoundError,
    TemplateParseError,
)

# Templates ship inside the package
DEFAULT_PROMPTS_PATH = Path(__file__).parent


@dataclass(frozen=True)
class CompiledPrompt:
    """A compiled prompt ready to become a StageRequest."""

    system: str
    user: str
    template_name: str


class PromptCompileError(Exception):
    """Raised when prompt compilation fails."""

    def __init__(self, template_name: str, message: str) -> None:
        self.template_name = template_name
        super().__init__(f"Failed to compile template '{template_name}': {message}")


class PromptCompiler:
    """Compile prompts from templates with variable substitution.

    Substitution is a single pass: values are inserted verbatim and never
    re-scanned, so user text containing braces is left untouched. A
    placeholder with no value in the context is an error.

    Attributes:
        prompts_path: Directory containing templates/.
    """

    _VAR_PATTERN = re.compile(r"\{\{\s*(\w+(?:\.\w+)*)\s*\}\}")

    def __init__(self, prompts_path: Path | None = None) -> None:
        self.prompts_path = prompts_path or DEFAULT_PROMPTS_PATH
        self._loader = PromptLoader(self.prompts_path)

    def _resolve_variable(self, path: str, context: dict[str, Any]) -> str:
        """Resolve a dotted variable path from context.

        Raises:
            KeyError: If the path cannot be resolved.
        """
        value: Any = context
        for part in path.split("."):
            if isinstance(value, dict):
                if part not in value:
                    raise KeyError(f"Key '{part}' not found in context path '{path}'")
                value = value[part]
            elif hasattr(value, part):
                value = getattr(value, part)
            else:
                raise KeyError(f"Cannot resolve '{part}' in context path '{path}'")

        if isinstance(value, (list, dict)):
            return json.dumps(value, indent=2, ensure_ascii=False)
        return str(value)

    def _substitute(self, template_name: str, text: str, context: dict[str, Any]) -> str:
        def replace_match(match: re.Match[str]) -> str:
            try:
                return self._resolve_variable(match.group(1), context)
            except KeyError as e:
                raise PromptCompileError(template_name, str(e.args[0])) from e

        return self._VAR_PATTERN.sub(replace_match, text)

    def _load(self, template_name: str) -> PromptTemplate:
        try:
            return self._loader.load(template_name)
        except (TemplateNotFoundError, TemplateParseError) as e:
            raise PromptCompileError(template_name, str(e)) from e

    def compile(
        self,
        template_name: str,
        context: dict[str, Any] | None = None,
    ) -> CompiledPrompt:
        """Compile a template's system and user text.

        A template with a ``system_template`` reference and no system text
        of its own borrows the referenced template's system text.

        Args:
            template_name: Name of the template (e.g. ``outline``).
            context: Values for ``{{ var }}`` placeholders.

        Returns:
            CompiledPrompt.

        Raises:
            PromptCompileError: If a template is missing or invalid, or a
                placeholder has no value.
        """
        context = context or {}
        template = self._load(template_name)

        system_text = template.system
        if not system_text and template.system_template:
            system_text = self._load(template.system_template).system

        return CompiledPrompt(
            system=self._substitute(template_name, system_text, context).strip(),
            user=self._substitute(template_name, template.user, context).strip(),
            template_name=template_name,
        )

    def compile_fragment(
        self,
        template_name: str,
        fragment: str,
        context: dict[str, Any] | None = None,
    ) -> str:
        """Compile one named fragment of a template.

        Raises:
            PromptCompileError: If the template or fragment doesn't exist.
        """
        template = self._load(template_name)
        if fragment not in template.fragments:
            raise PromptCompileError(
                template_name,
                f"unknown fragment '{fragment}' (have: {', '.join(sorted(template.fragments))})",
            )
        return self._substitute(template_name, template.fragments[fragment], context or {})

    def list_templates(self) -> list[str]:
        return self._loader.list_templates()

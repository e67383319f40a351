"""Template loading for the prompt compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

from ruamel.yaml import YAML, YAMLError


@dataclass
class PromptTemplate:
    """A loaded prompt template.

    Attributes:
        name: Template name (file stem unless overridden).
        system: System instruction text, may contain ``{{ var }}``.
        user: User-turn text, may contain ``{{ var }}``.
        system_template: Name of another template whose ``system`` is
            reused when this one has none of its own.
        fragments: Named snippets a builder picks from (tier-specific
            requirements, content wrappers).
    """

    name: str
    description: str = ""
    system: str = ""
    user: str = ""
    system_template: str = ""
    fragments: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], name: str) -> PromptTemplate:
        fragments = data.get("fragments") or {}
        if not isinstance(fragments, dict):
            raise TemplateParseError(name, "'fragments' must be a mapping")
        return cls(
            name=str(data.get("name", name)),
            description=str(data.get("description", "")),
            system=str(data.get("system", "")),
            user=str(data.get("user", "")),
            system_template=str(data.get("system_template", "")),
            fragments={str(k): str(v) for k, v in fragments.items()},
        )


class TemplateNotFoundError(Exception):
    """Raised when a template file cannot be found."""

    def __init__(self, template_name: str, path: Path) -> None:
        self.template_name = template_name
        self.path = path
        super().__init__(f"Template not found: {template_name} at {path}")


class TemplateParseError(Exception):
    """Raised when a template file cannot be parsed."""

    def __init__(self, template_name: str, reason: str) -> None:
        self.template_name = template_name
        self.reason = reason
        super().__init__(f"Failed to parse template '{template_name}': {reason}")


class PromptLoader:
    """Load prompt templates from ``{prompts_path}/templates/*.yaml``.

    Loaded templates are cached per loader.
    """

    def __init__(self, prompts_path: Path) -> None:
        self.prompts_path = prompts_path
        self.templates_path = prompts_path / "templates"
        self._yaml = YAML(typ="safe")
        self._cache: dict[str, PromptTemplate] = {}

    def _get_template_path(self, template_name: str) -> Path:
        return self.templates_path / f"{template_name}.yaml"

    def load(self, template_name: str) -> PromptTemplate:
        """Load a template by name.

        Args:
            template_name: File stem under templates/.

        Returns:
            Loaded PromptTemplate.

        Raises:
            TemplateNotFoundError: If the template file doesn't exist.
            TemplateParseError: If the file is empty, not a mapping, or
                not valid YAML.
        """
        if template_name in self._cache:
            return self._cache[template_name]

        path = self._get_template_path(template_name)
        if not path.exists():
            raise TemplateNotFoundError(template_name, path)

        try:
            with path.open("r", encoding="utf-8") as f:
                data = self._yaml.load(f)
        except YAMLError as e:
            raise TemplateParseError(template_name, str(e)) from e

        if data is None:
            raise TemplateParseError(template_name, "Empty file")
        if not isinstance(data, dict):
            raise TemplateParseError(template_name, "Top level must be a mapping")

        template = PromptTemplate.from_dict(data, template_name)
        self._cache[template_name] = template
        return template

    def exists(self, template_name: str) -> bool:
        return self._get_template_path(template_name).exists()

    def list_templates(self) -> list[str]:
        """Names of available templates, sorted."""
        if not self.templates_path.exists():
            return []
        return sorted(p.stem for p in self.templates_path.glob("*.yaml") if p.is_file())

    def clear_cache(self) -> None:
        self._cache.clear()

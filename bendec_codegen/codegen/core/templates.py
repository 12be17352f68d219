"""
Jinja2 environment for declaration templates.

Each language generator ships a directory of ``*.j2`` templates and may add
filters of its own (the C++ generator adds ``hex`` for enum values).
"""

from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import jinja2
from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined

from .errors import GeneratorError


class TemplateError(GeneratorError):
    """Exception raised when a template cannot be loaded or rendered."""

    pass


def indent_lines(value: Any, spaces: int = 4) -> str:
    """Indent every non-blank line of ``value`` by ``spaces`` spaces."""
    prefix = " " * spaces
    return "\n".join(
        prefix + line if line.strip() else line for line in str(value).split("\n")
    )


class TemplateEngine:
    """Renders declaration templates from a directory or an in-memory table.

    Undefined variables are errors, and output is never HTML-escaped since
    C++ uses ``<`` and ``&`` freely.
    """

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        filters: Optional[Mapping[str, Callable[..., Any]]] = None,
        templates: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            template_dir: Directory containing ``*.j2`` files
            filters: Extra Jinja2 filters, by name
            templates: In-memory templates, used when no directory is given

        Raises:
            TemplateError: If ``template_dir`` does not exist
        """
        if template_dir is not None:
            template_dir = Path(template_dir)
            if not template_dir.is_dir():
                raise TemplateError(f"Template directory not found: {template_dir}")
            loader: jinja2.BaseLoader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader(dict(templates or {}))

        self.template_dir = template_dir
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["indent"] = indent_lines
        self._env.filters.update(filters or {})

    @property
    def filters(self) -> Dict[str, Callable[..., Any]]:
        return self._env.filters

    def has_template(self, name: str) -> bool:
        return name in self._env.list_templates()

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """
        Render template ``name`` with ``context``.

        Raises:
            TemplateError: If the template is missing, malformed or refers to
                an undefined variable
        """
        try:
            return self._env.get_template(name).render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template {name}: {e}") from e

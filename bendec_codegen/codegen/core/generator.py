"""
Base class for declaration generators and the non-raising entry point.

A generator turns an ordered list of :mod:`schema` definitions into one
source file. :func:`generate_code` wraps a run and reports failure through
:class:`GenerationResult` instead of raising.
"""

import re
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .errors import GeneratorError
from .schema import Kind, TypeDefinition, TypeRegistry, parse_types
from .templates import TemplateEngine

logger = get_logger(__name__)

_BLANK_RUN = re.compile(r"\n{3,}")


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or load_config(self.language_name)
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'cpp')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.h')."""
        pass

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory holding this generator's ``*.j2`` templates."""
        pass

    def template_filters(self) -> Dict[str, Any]:
        """Extra Jinja2 filters for this generator's templates."""
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine, created on first use."""
        if self._template_engine is None:
            self._template_engine = TemplateEngine(
                self.get_template_directory(), filters=self.template_filters()
            )
        return self._template_engine

    @abstractmethod
    def generate(self, types: Sequence[TypeDefinition]) -> str:
        """
        Generate one file declaring every definition in ``types``.

        Args:
            types: Normalized type definitions, in output order

        Returns:
            Generated source text

        Raises:
            GeneratorError: If the definitions cannot be emitted
        """
        pass

    @abstractmethod
    def generate_single_type(
        self, type_def: TypeDefinition, registry: TypeRegistry
    ) -> str:
        """
        Generate the declaration block for one type definition.

        Args:
            type_def: Definition to emit
            registry: TypeRegistry built from the full type list

        Returns:
            Declaration text for this definition only
        """
        pass

    def validate_types(self, types: Sequence[TypeDefinition]) -> List[str]:
        """
        Check type definitions for non-fatal issues.

        Returns:
            Warning messages, empty when nothing looks suspicious
        """
        warnings = []
        seen = set()

        for type_def in types:
            if type_def.name in seen:
                warnings.append(f"Type '{type_def.name}' is defined more than once")
            seen.add(type_def.name)

            if type_def.kind == Kind.STRUCT and not type_def.fields:
                warnings.append(f"Struct '{type_def.name}' has no fields")
            elif type_def.kind == Kind.ENUM and not type_def.variants:
                warnings.append(f"Enum '{type_def.name}' has no variants")
            elif type_def.kind == Kind.UNION and len(type_def.members) > 1:
                # Only the first member seeds the discriminator walk
                warnings.append(
                    f"Union '{type_def.name}': discriminator is resolved "
                    f"through '{type_def.members[0]}' only"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """Keep at most one blank line in a row and end the text with exactly
        one newline.

        Lines are otherwise left alone, so user strings such as the attribute
        come through verbatim.
        """
        code = _BLANK_RUN.sub("\n\n", code)
        return code.rstrip("\n") + "\n"

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render(template_name, context)


@dataclass
class GenerationResult:
    """Outcome of one generation run.

    A failed run has ``success`` False, empty ``code``, and the raised error
    in ``exception`` so callers can inspect its structured fields.
    """

    code: str
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None
    exception: Optional[Exception] = None

    @classmethod
    def failure(
        cls, exception: Exception, message: Optional[str] = None
    ) -> "GenerationResult":
        return cls(
            code="",
            success=False,
            error_message=message or str(exception),
            exception=exception,
        )


def generate_code(
    generator: CodeGenerator, types: Sequence[Any]
) -> GenerationResult:
    """
    Run ``generator`` over ``types`` without raising.

    Args:
        generator: Code generator instance
        types: Type definitions or raw normalized records

    Returns:
        GenerationResult with code, warnings and metadata, or the failure
    """
    try:
        definitions = parse_types(types)
        warnings = generator.validate_types(definitions)
        code = generator.generate(definitions)
    except GeneratorError as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.failure(e, f"Code generation failed: {e}")
    except Exception as e:
        logger.error("Unexpected code generation failure: %s", e, exc_info=True)
        return GenerationResult.failure(e, f"Code generation failed: {e}")

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "type_count": len(definitions),
        "kinds": dict(Counter(t.kind.value for t in definitions)),
    }
    return GenerationResult(code, warnings, metadata)


def write_output(code: str, destination: Union[str, Path]) -> Path:
    """
    Write generated ``code`` to ``destination``, creating parent directories.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")

    logger.info("WRITTEN: %s", path)
    return path

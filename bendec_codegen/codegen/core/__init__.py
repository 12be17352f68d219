"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
    save_config,
)
from .errors import (
    GeneratorError,
    PathResolutionError,
    SchemaError,
    UnresolvedReferenceError,
)
from .generator import CodeGenerator, GenerationResult, generate_code, write_output
from .schema import (
    AliasDef,
    EnumDef,
    Field,
    Kind,
    PrimitiveDef,
    StructDef,
    TypeDefinition,
    TypeRegistry,
    UnionDef,
    parse_type,
    parse_types,
)
from .templates import TemplateEngine, TemplateError, indent_lines

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    "write_output",
    # Errors
    "GeneratorError",
    "SchemaError",
    "UnresolvedReferenceError",
    "PathResolutionError",
    # Schema system - core data structures
    "Kind",
    "Field",
    "PrimitiveDef",
    "AliasDef",
    "StructDef",
    "EnumDef",
    "UnionDef",
    "TypeDefinition",
    "TypeRegistry",
    "parse_type",
    "parse_types",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "save_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "indent_lines",
]

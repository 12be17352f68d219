"""
Bendec code generation module.

Generates layout-exact declarations from binary type definitions.
"""

from .core.config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
    save_config,
)
from .core.errors import (
    GeneratorError,
    PathResolutionError,
    SchemaError,
    UnresolvedReferenceError,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code, write_output
from .core.schema import (
    AliasDef,
    EnumDef,
    Field,
    Kind,
    PrimitiveDef,
    StructDef,
    TypeDefinition,
    TypeRegistry,
    UnionDef,
    parse_types,
)
from .languages.cpp import CppGenerator, render_types, write_types
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)


def generate_types(types, language="cpp", config=None):
    """
    Generate code for ``types`` without raising.

    Args:
        types: TypeDefinitions or normalized JSON records
        language: Target language name or alias
        config: Generator configuration dict, GeneratorConfig or file path

    Returns:
        GenerationResult with generated code, or the error on failure
    """
    try:
        generator = get_generator(language, config)
    except RegistryError as e:
        return GenerationResult.failure(e)
    return generate_code(generator, types)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "CppGenerator",
    "GenerationResult",
    "GeneratorError",
    "SchemaError",
    "UnresolvedReferenceError",
    "PathResolutionError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "Kind",
    "Field",
    "PrimitiveDef",
    "AliasDef",
    "StructDef",
    "EnumDef",
    "UnionDef",
    "TypeDefinition",
    "TypeRegistry",
    "parse_types",
    "generate_code",
    "generate_types",
    "render_types",
    "write_types",
    "get_generator",
    "get_language_info",
    "is_language_supported",
    "list_supported_languages",
    "load_config",
    "save_config",
    "write_output",
]

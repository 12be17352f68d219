"""
C++ code generator implementation.

Generates packed C++ structs, scoped enums and raw unions whose in-memory
layout matches the binary schema exactly.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, load_config
from ...core.errors import GeneratorError, SchemaError, UnresolvedReferenceError
from ...core.generator import CodeGenerator, write_output
from ...core.schema import (
    SIGNED_INTEGERS,
    AliasDef,
    EnumDef,
    Kind,
    PrimitiveDef,
    StructDef,
    TypeDefinition,
    TypeRegistry,
    UnionDef,
    parse_types,
)
from .discriminator import resolve_discriminator
from .types import CppTypeMapper

logger = get_logger(__name__)

# Schema bookkeeping names that must not shadow a C++ keyword.
IGNORED_TYPES = frozenset({"char"})

STREAM_HOOK = "friend std::ostream &operator << (std::ostream &, const {name} &);"


def hex_pad(value: int, width: int) -> str:
    """Render ``value`` as ``0x``-prefixed hex with ``2 * width`` digits."""
    digits = width * 2
    if value < 0:
        return f"-0x{-value:0{digits}x}"
    return f"0x{value:0{digits}x}"


class CppGenerator(CodeGenerator):
    """Code generator for layout-exact C++ declarations."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize C++ generator with configuration."""
        super().__init__(config)

        self.attribute = self.config.attribute
        self.indent_size = self.config.indent_size
        self.strict_references = self.config.strict_references
        self.type_mapper = CppTypeMapper(self.config.type_mapping)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "cpp"

    @property
    def file_extension(self) -> str:
        """Return C++ header extension."""
        return ".h"

    def get_template_directory(self) -> Path:
        return Path(__file__).parent / "templates"

    def template_filters(self) -> Dict[str, Any]:
        return {"hex": hex_pad}

    def build_registry(self, types: Sequence[TypeDefinition]) -> TypeRegistry:
        """Registry of ``types`` plus every name the mapping table provides."""
        return TypeRegistry(types, external=self.type_mapper.overrides.keys())

    def generate(self, types: Sequence[TypeDefinition]) -> str:
        """Generate the complete header for ``types`` in input order."""
        registry = self.build_registry(types)

        blocks = []
        for type_def in types:
            block = self.generate_single_type(type_def, registry)
            if block:
                blocks.append(block)

        logger.debug("Rendered %d declaration blocks", len(blocks))
        code = self.render_template(
            "file.h.j2", {"banner": self.config.banner, "blocks": blocks}
        )
        return self.format_code(code)

    def generate_single_type(
        self, type_def: TypeDefinition, registry: TypeRegistry
    ) -> str:
        """Dispatch one definition to the emitter for its kind."""
        override = self.type_mapper.override_for(type_def.name)
        if override is not None:
            logger.debug("Type %s mapped to %s", type_def.name, override)
            return f"using {type_def.name} = {override};"

        if type_def.name in IGNORED_TYPES:
            return f"// ignored: {type_def.name}"

        kind = type_def.kind
        if kind == Kind.PRIMITIVE:
            return self.emit_primitive(type_def)
        elif kind == Kind.ALIAS:
            return self.emit_alias(type_def, registry)
        elif kind == Kind.STRUCT:
            return self.emit_struct(type_def, registry)
        elif kind == Kind.ENUM:
            return self.emit_enum(type_def, registry)
        elif kind == Kind.UNION:
            return self.emit_union(type_def, registry)

        raise GeneratorError(f"Unsupported kind for {type_def.name}: {kind}")

    # Per-kind emitters

    def emit_primitive(self, type_def: PrimitiveDef) -> str:
        name = self.type_mapper.builtin_name(type_def.name)
        return f"// primitive built-in: {name}"

    def emit_alias(self, type_def: AliasDef, registry: TypeRegistry) -> str:
        self._check_reference(type_def.alias, type_def.name, registry)

        name = self.type_mapper.builtin_name(type_def.name)
        target = self.type_mapper.resolve(type_def.alias)
        return f"using {name} = {target};"

    def emit_struct(self, type_def: StructDef, registry: TypeRegistry) -> str:
        name = self.type_mapper.builtin_name(type_def.name)

        members = []
        for field in type_def.fields:
            referrer = f"{type_def.name}.{field.name}"
            self._check_reference(field.type, referrer, registry)
            cpp_type = self.type_mapper.resolve(field.type)
            if field.length:
                members.append(f"{cpp_type} {field.name}[{field.length}];")
            else:
                members.append(f"{cpp_type} {field.name};")

        return self.render_template(
            "struct.h.j2",
            {
                "attribute": self.attribute,
                "name": name,
                "members": members,
                "stream_hook": STREAM_HOOK.format(name=name),
                "indent_size": self.indent_size,
            },
        )

    def emit_enum(self, type_def: EnumDef, registry: TypeRegistry) -> str:
        self._check_reference(type_def.underlying, type_def.name, registry)

        base = registry.integer_base(type_def.underlying)
        if base is not None:
            width = self.type_mapper.integer_width(base)
            for key, value in type_def.variants:
                self._check_range(type_def, base, width, key, value)
        elif self.strict_references:
            raise SchemaError(
                f"Enum {type_def.name} underlying type {type_def.underlying} "
                "is not an integer primitive"
            )
        else:
            logger.warning(
                "Enum %s: cannot size %s, padding values to one byte",
                type_def.name,
                type_def.underlying,
            )
            width = 1

        return self.render_template(
            "enum.h.j2",
            {
                "attribute": self.attribute,
                "name": type_def.name,
                "underlying": self.type_mapper.resolve(type_def.underlying),
                "variants": type_def.variants,
                "width": width,
                "indent_size": self.indent_size,
            },
        )

    def emit_union(self, type_def: UnionDef, registry: TypeRegistry) -> str:
        for member in type_def.members:
            registry.lookup_struct(member, type_def.name)

        # Validates the path only; the emitted union does not encode it.
        resolve_discriminator(type_def, registry, strict=self.strict_references)

        return self.render_template(
            "union.h.j2",
            {
                "attribute": self.attribute,
                "name": type_def.name,
                "members": list(type_def.members),
                "indent_size": self.indent_size,
            },
        )

    # Checks

    def _check_reference(
        self, name: str, referrer: str, registry: TypeRegistry
    ) -> None:
        if name in registry or name in self.type_mapper.overrides:
            return
        if self.strict_references:
            raise UnresolvedReferenceError(name, referrer)
        logger.warning("Passing through unknown type %s (from %s)", name, referrer)

    @staticmethod
    def _check_range(
        type_def: EnumDef, base: str, width: int, key: str, value: int
    ) -> None:
        bits = width * 8
        if base in SIGNED_INTEGERS:
            low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        else:
            low, high = 0, (1 << bits) - 1
        if not low <= value <= high:
            raise SchemaError(
                f"Variant {type_def.name}.{key} = {value} does not fit in {base}"
            )


def _resolve_config(
    options: Optional[Union[GeneratorConfig, Mapping[str, Any]]]
) -> GeneratorConfig:
    if isinstance(options, GeneratorConfig):
        return options
    return load_config("cpp", custom_config=dict(options or {}))


def render_types(
    types: Sequence[Any],
    options: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> str:
    """
    Render C++ declarations for ``types``.

    Args:
        types: TypeDefinitions or normalized JSON records, in output order
        options: GeneratorConfig or dict with ``type_mapping``,
            ``attribute`` and other GeneratorConfig fields

    Returns:
        The generated header text

    Raises:
        GeneratorError: On malformed input, unresolved references or an
            invalid discriminator path. Nothing is rendered in that case.
    """
    generator = CppGenerator(_resolve_config(options))
    return generator.generate(parse_types(types))


def write_types(
    types: Sequence[Any],
    destination: Union[str, Path],
    options: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> Path:
    """
    Render ``types`` and write the result to ``destination``.

    Returns:
        Path of the written file
    """
    return write_output(render_types(types, options), destination)

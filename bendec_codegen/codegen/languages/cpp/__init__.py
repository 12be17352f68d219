"""
C++ code generator module.

Generates packed structs, scoped enums and raw unions from binary type
definitions.
"""

from .discriminator import ResolvedDiscriminator, resolve_discriminator
from .generator import (
    IGNORED_TYPES,
    CppGenerator,
    hex_pad,
    render_types,
    write_types,
)
from .types import CPP_INTEGER_TYPES, DEFAULT_TYPE_MAPPING, CppTypeMapper

__all__ = [
    "CppGenerator",
    "CppTypeMapper",
    "ResolvedDiscriminator",
    "resolve_discriminator",
    "render_types",
    "write_types",
    "hex_pad",
    "CPP_INTEGER_TYPES",
    "DEFAULT_TYPE_MAPPING",
    "IGNORED_TYPES",
]

"""
C++ type name mapping.

Resolves abstract schema type names to their C++ spelling using a layered
table: caller overrides on top of default conventions, then the built-in
fixed-width integer table, then the name itself.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from ...core.schema import INTEGER_WIDTHS

# Fixed-width integer primitives and their <cstdint> spelling.
CPP_INTEGER_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "u8": "uint8_t",
        "u16": "uint16_t",
        "u32": "uint32_t",
        "u64": "uint64_t",
        "i8": "int8_t",
        "i16": "int16_t",
        "i32": "int32_t",
        "i64": "int64_t",
    }
)

# Container conventions applied unless the caller overrides them.
DEFAULT_TYPE_MAPPING: Mapping[str, str] = MappingProxyType(
    {
        "char[]": "char",
    }
)


class CppTypeMapper:
    """Maps schema type names to C++ type names.

    The merged override table is built once in the constructor and exposed
    read-only, so a mapper can be shared between generation calls.
    """

    def __init__(self, type_mapping: Optional[Mapping[str, str]] = None):
        merged: Dict[str, str] = dict(DEFAULT_TYPE_MAPPING)
        if type_mapping:
            merged.update(type_mapping)
        self._overrides: Mapping[str, str] = MappingProxyType(merged)

    @property
    def overrides(self) -> Mapping[str, str]:
        """Merged default and caller overrides."""
        return self._overrides

    def override_for(self, name: str) -> Optional[str]:
        """Return the override table entry for ``name``, if any."""
        return self._overrides.get(name)

    def resolve(self, name: str) -> str:
        """
        Return the C++ spelling of ``name``.

        Unknown names come back unchanged, so user-defined structs, enums
        and unions pass straight through.
        """
        if name in self._overrides:
            return self._overrides[name]
        return CPP_INTEGER_TYPES.get(name, name)

    def builtin_name(self, name: str) -> str:
        """Spelling from the built-in integer table only."""
        return CPP_INTEGER_TYPES.get(name, name)

    @staticmethod
    def integer_width(name: str) -> Optional[int]:
        """Byte width of a built-in integer name, or None."""
        return INTEGER_WIDTHS.get(name)

"""
Core schema representation for code generation.

Holds the normalized type definitions the generators consume, plus an
explicit name registry and a shape check for raw JSON records coming from
the external normalizer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import SchemaError, UnresolvedReferenceError


class Kind(Enum):
    """Category of a type definition."""

    PRIMITIVE = "Primitive"
    ALIAS = "Alias"
    STRUCT = "Struct"
    ENUM = "Enum"
    UNION = "Union"


# Fixed-width integer primitives and their byte widths.
INTEGER_WIDTHS: Dict[str, int] = {
    "u8": 1,
    "u16": 2,
    "u32": 4,
    "u64": 8,
    "i8": 1,
    "i16": 2,
    "i32": 4,
    "i64": 8,
}

SIGNED_INTEGERS = frozenset({"i8", "i16", "i32", "i64"})

# Names every schema may reference without declaring them.
IMPLICIT_PRIMITIVES = frozenset(INTEGER_WIDTHS) | {"char"}


@dataclass(frozen=True)
class Field:
    """A single member of a struct."""

    name: str
    type: str
    length: Optional[int] = None

    @property
    def is_array(self) -> bool:
        return bool(self.length)


@dataclass(frozen=True)
class PrimitiveDef:
    """Built-in scalar understood natively by every target."""

    name: str
    size: Optional[int] = None

    kind = Kind.PRIMITIVE


@dataclass(frozen=True)
class AliasDef:
    """``name`` is a synonym for the representation of ``alias``."""

    name: str
    alias: str

    kind = Kind.ALIAS


@dataclass(frozen=True)
class StructDef:
    """Fixed-layout aggregate, emitted without inter-field padding."""

    name: str
    fields: Tuple[Field, ...] = field(default_factory=tuple)

    kind = Kind.STRUCT

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for member in self.fields:
            if member.name == name:
                return member
        return None


@dataclass(frozen=True)
class EnumDef:
    """Enumeration stored as the ``underlying`` integer primitive."""

    name: str
    underlying: str
    variants: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)

    kind = Kind.ENUM


@dataclass(frozen=True)
class UnionDef:
    """Tagged union of structs.

    ``discriminator`` is the field-name path, starting at a member struct,
    that leads to the field selecting the active member.
    """

    name: str
    discriminator: Tuple[str, ...]
    members: Tuple[str, ...]

    kind = Kind.UNION


TypeDefinition = Union[PrimitiveDef, AliasDef, StructDef, EnumDef, UnionDef]


class TypeRegistry:
    """Name-indexed view over one list of type definitions.

    Lookups are explicit: :meth:`get` reports absence with ``None`` and
    :meth:`lookup` raises :class:`UnresolvedReferenceError`.
    """

    def __init__(
        self, types: Iterable[TypeDefinition], external: Iterable[str] = ()
    ):
        self._types: Dict[str, TypeDefinition] = {}
        self._external = frozenset(external) | IMPLICIT_PRIMITIVES
        for type_def in types:
            # First declaration wins; duplicates are the normalizer's concern.
            self._types.setdefault(type_def.name, type_def)

    def __contains__(self, name: str) -> bool:
        return name in self._types or name in self._external

    def __len__(self) -> int:
        return len(self._types)

    def get(self, name: str) -> Optional[TypeDefinition]:
        """Return the definition for ``name`` or None when absent."""
        if name in self._types:
            return self._types[name]
        if name in self._external:
            return PrimitiveDef(name=name, size=INTEGER_WIDTHS.get(name))
        return None

    def lookup(self, name: str, referrer: Optional[str] = None) -> TypeDefinition:
        """Return the definition for ``name``.

        Raises:
            UnresolvedReferenceError: If ``name`` is not known.
        """
        type_def = self.get(name)
        if type_def is None:
            raise UnresolvedReferenceError(name, referrer)
        return type_def

    def lookup_struct(self, name: str, referrer: Optional[str] = None) -> StructDef:
        """Return the struct named ``name``.

        Raises:
            UnresolvedReferenceError: If ``name`` is unknown.
            SchemaError: If ``name`` is not a struct.
        """
        type_def = self.lookup(name, referrer)
        if not isinstance(type_def, StructDef):
            where = f" (referenced by {referrer})" if referrer else ""
            raise SchemaError(
                f"{name}{where} must be a Struct, got {type_def.kind.value}"
            )
        return type_def

    def integer_base(self, name: str) -> Optional[str]:
        """Integer primitive ``name`` ultimately aliases, if any.

        Returns None if the alias chain does not end in an integer primitive.
        """
        seen = set()
        while name not in INTEGER_WIDTHS:
            if name in seen:
                return None
            seen.add(name)
            type_def = self._types.get(name)
            if not isinstance(type_def, AliasDef):
                return None
            name = type_def.alias
        return name


def _require(record: Mapping[str, Any], key: str, index: int) -> Any:
    if key not in record:
        name = record.get("name", f"#{index}")
        raise SchemaError(f"Type definition {name} is missing '{key}'")
    return record[key]


def _parse_kind(value: Any, index: int) -> Kind:
    if isinstance(value, Kind):
        return value
    if isinstance(value, str):
        for kind in Kind:
            if kind.value.lower() == value.lower() or kind.name == value.upper():
                return kind
    raise SchemaError(f"Type definition #{index} has unknown kind: {value!r}")


def _parse_field(raw: Mapping[str, Any], owner: str) -> Field:
    if not isinstance(raw, Mapping) or "name" not in raw or "type" not in raw:
        raise SchemaError(f"Field of {owner} needs 'name' and 'type': {raw!r}")

    length = raw.get("length")
    if length is not None:
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise SchemaError(
                f"Field {owner}.{raw['name']} has invalid length: {length!r}"
            )
    return Field(name=raw["name"], type=raw["type"], length=length)


def _parse_variants(raw: Any, owner: str) -> Tuple[Tuple[str, int], ...]:
    # Accept both [[name, value], ...] and {name: value, ...}
    items = raw.items() if isinstance(raw, Mapping) else raw
    variants = []
    for item in items:
        try:
            key, value = item
        except (TypeError, ValueError):
            raise SchemaError(f"Invalid variant in enum {owner}: {item!r}")
        if isinstance(value, bool) or not isinstance(value, int):
            raise SchemaError(f"Variant {owner}.{key} must have an integer value")
        variants.append((str(key), value))
    return tuple(variants)


def parse_type(record: Mapping[str, Any], index: int = 0) -> TypeDefinition:
    """
    Convert one normalized JSON record to a TypeDefinition.

    Args:
        record: Record with at least ``kind`` and ``name`` keys
        index: Position in the input list, used in error messages

    Returns:
        The matching TypeDefinition dataclass

    Raises:
        SchemaError: If the record is malformed
    """
    if not isinstance(record, Mapping):
        raise SchemaError(f"Type definition #{index} must be an object")

    kind = _parse_kind(_require(record, "kind", index), index)
    name = _require(record, "name", index)

    if kind == Kind.PRIMITIVE:
        return PrimitiveDef(name=name, size=record.get("size"))

    elif kind == Kind.ALIAS:
        return AliasDef(name=name, alias=_require(record, "alias", index))

    elif kind == Kind.STRUCT:
        fields = tuple(_parse_field(f, name) for f in record.get("fields") or [])
        return StructDef(name=name, fields=fields)

    elif kind == Kind.ENUM:
        return EnumDef(
            name=name,
            underlying=_require(record, "underlying", index),
            variants=_parse_variants(record.get("variants") or [], name),
        )

    elif kind == Kind.UNION:
        discriminator = tuple(_require(record, "discriminator", index))
        members = tuple(_require(record, "members", index))
        if not discriminator:
            raise SchemaError(f"Union {name} has an empty discriminator path")
        if not members:
            raise SchemaError(f"Union {name} has no members")
        return UnionDef(name=name, discriminator=discriminator, members=members)

    raise SchemaError(f"Unsupported kind for {name}: {kind}")


def parse_types(records: Iterable[Any]) -> List[TypeDefinition]:
    """
    Convert a list of normalized records into TypeDefinitions.

    Already-built definitions are passed through unchanged.
    """
    types = []
    for index, record in enumerate(records):
        if isinstance(record, (PrimitiveDef, AliasDef, StructDef, EnumDef, UnionDef)):
            types.append(record)
        else:
            types.append(parse_type(record, index))
    return types

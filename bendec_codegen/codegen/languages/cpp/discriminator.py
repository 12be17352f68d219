"""
Union discriminator resolution.

A union's discriminator is named by a path of field names that starts in
one of its member structs. Walking that path validates the schema and
yields the declared type of the tagging field.
"""

from dataclasses import dataclass
from typing import Optional

from ....logging_config import get_logger
from ...core.errors import PathResolutionError
from ...core.schema import Field, StructDef, TypeDefinition, TypeRegistry, UnionDef

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedDiscriminator:
    """Outcome of a discriminator walk.

    ``definition`` is None only in lenient mode, when the final field's type
    is not a known definition.
    """

    union_name: str
    field: Optional[Field]
    definition: Optional[TypeDefinition]

    @property
    def type_name(self) -> str:
        if self.definition is None:
            return self.field.type
        return self.definition.name


def resolve_discriminator(
    union: UnionDef, registry: TypeRegistry, strict: bool = True
) -> ResolvedDiscriminator:
    """
    Follow ``union.discriminator`` starting from the first member struct.

    Only the first member is inspected; the other members are assumed to
    share the same discriminator layout.

    Args:
        union: Union whose discriminator path is resolved
        registry: Registry of every type in the generation run
        strict: When False, the final field may name an unknown type

    Returns:
        ResolvedDiscriminator naming the final field and its type

    Raises:
        PathResolutionError: If a segment is reached while standing on a
            non-struct type, or names no field of the current struct
        UnresolvedReferenceError: If a referenced type is not registered
    """
    current: TypeDefinition = registry.lookup_struct(union.members[0], union.name)
    resolved_field: Optional[Field] = None
    last = len(union.discriminator) - 1

    for index, segment in enumerate(union.discriminator):
        if not isinstance(current, StructDef):
            raise PathResolutionError(
                current.name,
                segment,
                expected="Struct",
                actual=current.kind.value,
                union_name=union.name,
            )

        resolved_field = current.get_field(segment)
        if resolved_field is None:
            raise PathResolutionError(
                current.name, segment, actual=None, union_name=union.name
            )

        referrer = f"{current.name}.{segment}"
        if index == last and not strict:
            found = registry.get(resolved_field.type)
            if found is None:
                logger.warning(
                    "Union %s: discriminator type %s (from %s) is unknown",
                    union.name,
                    resolved_field.type,
                    referrer,
                )
                return ResolvedDiscriminator(union.name, resolved_field, None)
            current = found
        else:
            current = registry.lookup(resolved_field.type, referrer)

    logger.debug(
        "Union %s discriminator %s resolves to %s",
        union.name,
        ".".join(union.discriminator),
        current.name,
    )
    return ResolvedDiscriminator(
        union_name=union.name, field=resolved_field, definition=current
    )

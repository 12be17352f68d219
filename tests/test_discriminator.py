from __future__ import annotations

import unittest

from bendec_codegen.codegen.core.errors import (
    PathResolutionError,
    SchemaError,
    UnresolvedReferenceError,
)
from bendec_codegen.codegen.core.schema import (
    EnumDef,
    Field,
    Kind,
    StructDef,
    TypeRegistry,
    UnionDef,
)
from bendec_codegen.codegen.languages.cpp.discriminator import resolve_discriminator

from samples import COLOR, HEADER, PACKET, SHAPE


class ResolveDiscriminatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = TypeRegistry([HEADER, PACKET, COLOR, SHAPE])

    def test_resolves_primitive_terminal_segment(self) -> None:
        resolved = resolve_discriminator(SHAPE, self.registry)

        self.assertEqual(resolved.union_name, "Shape")
        self.assertEqual(resolved.field, Field("version", "u8"))
        self.assertEqual(resolved.type_name, "u8")
        self.assertEqual(resolved.definition.kind, Kind.PRIMITIVE)

    def test_resolves_to_struct(self) -> None:
        union = UnionDef("Shape", ("header",), ("Packet",))
        resolved = resolve_discriminator(union, self.registry)
        self.assertEqual(resolved.definition.kind, Kind.STRUCT)
        self.assertEqual(resolved.type_name, "Header")

    def test_resolves_to_enum(self) -> None:
        msg_header = StructDef("MsgHeader", (Field("msgType", "MsgType"),))
        msg_type = EnumDef("MsgType", "u16", (("Order", 1),))
        order = StructDef("Order", (Field("header", "MsgHeader"),))
        registry = TypeRegistry([msg_type, msg_header, order])

        union = UnionDef("Message", ("header", "msgType"), ("Order",))
        resolved = resolve_discriminator(union, registry)
        self.assertIs(resolved.definition, msg_type)

    def test_path_through_non_struct_fails(self) -> None:
        union = UnionDef("Shape", ("header", "version", "bits"), ("Packet",))

        with self.assertRaises(PathResolutionError) as ctx:
            resolve_discriminator(union, self.registry)

        error = ctx.exception
        self.assertEqual(error.type_name, "u8")
        self.assertEqual(error.segment, "bits")
        self.assertEqual(error.expected, "Struct")
        self.assertEqual(error.actual, "Primitive")
        self.assertEqual(error.union_name, "Shape")
        self.assertIn("can only contain Structs", str(error))

    def test_path_through_enum_fails(self) -> None:
        holder = StructDef("Holder", (Field("color", "Color"),))
        registry = TypeRegistry([holder, COLOR])
        union = UnionDef("U", ("color", "value"), ("Holder",))

        with self.assertRaises(PathResolutionError) as ctx:
            resolve_discriminator(union, registry)
        self.assertEqual(ctx.exception.type_name, "Color")
        self.assertEqual(ctx.exception.actual, "Enum")

    def test_missing_field_fails(self) -> None:
        union = UnionDef("Shape", ("header", "flags"), ("Packet",))

        with self.assertRaises(PathResolutionError) as ctx:
            resolve_discriminator(union, self.registry)
        self.assertEqual(ctx.exception.type_name, "Header")
        self.assertEqual(ctx.exception.segment, "flags")
        self.assertIsNone(ctx.exception.actual)

    def test_only_first_member_is_walked(self) -> None:
        # Header has no 'header' field, but only Packet seeds the walk.
        union = UnionDef("Shape", ("header", "version"), ("Packet", "Header"))
        resolved = resolve_discriminator(union, self.registry)
        self.assertEqual(resolved.type_name, "u8")

    def test_first_member_must_be_struct(self) -> None:
        union = UnionDef("Bad", ("value",), ("Color",))
        with self.assertRaises(SchemaError):
            resolve_discriminator(union, self.registry)

    def test_unknown_field_type(self) -> None:
        broken = StructDef("Broken", (Field("header", "Ghost"),))
        union = UnionDef("U", ("header", "version"), ("Broken",))
        with self.assertRaises(UnresolvedReferenceError) as ctx:
            resolve_discriminator(union, TypeRegistry([broken]))
        self.assertEqual(ctx.exception.name, "Ghost")

    def test_lenient_allows_unknown_final_type(self) -> None:
        header = StructDef("Hdr", (Field("tag", "MsgType"),))
        message = StructDef("Msg", (Field("header", "Hdr"),))
        union = UnionDef("U", ("header", "tag"), ("Msg",))
        registry = TypeRegistry([header, message])

        with self.assertLogs("bendec_codegen", level="WARNING"):
            resolved = resolve_discriminator(union, registry, strict=False)

        self.assertIsNone(resolved.definition)
        self.assertEqual(resolved.field, Field("tag", "MsgType"))
        self.assertEqual(resolved.type_name, "MsgType")

    def test_lenient_still_requires_struct_hops(self) -> None:
        union = UnionDef("Shape", ("header", "version", "bits"), ("Packet",))
        with self.assertRaises(PathResolutionError):
            resolve_discriminator(union, self.registry, strict=False)

    def test_lenient_unknown_intermediate_type(self) -> None:
        broken = StructDef("Broken", (Field("header", "Ghost"),))
        union = UnionDef("U", ("header", "version"), ("Broken",))
        with self.assertRaises(UnresolvedReferenceError):
            resolve_discriminator(union, TypeRegistry([broken]), strict=False)


if __name__ == "__main__":
    unittest.main()

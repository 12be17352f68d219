from __future__ import annotations

import unittest

from bendec_codegen.codegen.languages.cpp.types import (
    CPP_INTEGER_TYPES,
    DEFAULT_TYPE_MAPPING,
    CppTypeMapper,
)


class CppTypeMapperTests(unittest.TestCase):
    def test_builtin_integers(self) -> None:
        expected = {
            "u8": "uint8_t",
            "u16": "uint16_t",
            "u32": "uint32_t",
            "u64": "uint64_t",
            "i8": "int8_t",
            "i16": "int16_t",
            "i32": "int32_t",
            "i64": "int64_t",
        }
        mapper = CppTypeMapper()
        for name, cpp_name in expected.items():
            with self.subTest(name=name):
                self.assertEqual(mapper.resolve(name), cpp_name)

    def test_unknown_names_pass_through(self) -> None:
        mapper = CppTypeMapper()
        self.assertEqual(mapper.resolve("Header"), "Header")
        self.assertEqual(mapper.resolve("std::string"), "std::string")

    def test_default_container_mapping(self) -> None:
        expected = DEFAULT_TYPE_MAPPING["char[]"]
        self.assertEqual(CppTypeMapper().resolve("char[]"), expected)

    def test_overrides_take_precedence(self) -> None:
        mapper = CppTypeMapper({"u8": "std::uint8_t", "char[]": "std::string"})
        self.assertEqual(mapper.resolve("u8"), "std::uint8_t")
        self.assertEqual(mapper.resolve("char[]"), "std::string")
        self.assertEqual(mapper.resolve("u16"), "uint16_t")

    def test_override_table_is_read_only(self) -> None:
        source = {"Timestamp": "std::uint64_t"}
        mapper = CppTypeMapper(source)

        with self.assertRaises(TypeError):
            mapper.overrides["Timestamp"] = "int"

        source["Timestamp"] = "int"
        self.assertEqual(mapper.resolve("Timestamp"), "std::uint64_t")

    def test_builtin_table_not_affected_by_instances(self) -> None:
        CppTypeMapper({"u8": "char"})
        self.assertEqual(CPP_INTEGER_TYPES["u8"], "uint8_t")
        self.assertEqual(CppTypeMapper().resolve("u8"), "uint8_t")

    def test_builtin_name_ignores_overrides(self) -> None:
        mapper = CppTypeMapper({"u8": "std::uint8_t"})
        self.assertEqual(mapper.builtin_name("u8"), "uint8_t")

    def test_integer_width(self) -> None:
        self.assertEqual(CppTypeMapper.integer_width("u8"), 1)
        self.assertEqual(CppTypeMapper.integer_width("i32"), 4)
        self.assertEqual(CppTypeMapper.integer_width("u64"), 8)
        self.assertIsNone(CppTypeMapper.integer_width("Header"))


if __name__ == "__main__":
    unittest.main()

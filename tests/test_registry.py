from __future__ import annotations

import unittest

from bendec_codegen.codegen import generate_types
from bendec_codegen.codegen.core.config import GeneratorConfig
from bendec_codegen.codegen.languages.cpp import CppGenerator
from bendec_codegen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
)

from samples import RAW_PACKET_TYPES


class GlobalRegistryTests(unittest.TestCase):
    def test_cpp_is_registered(self) -> None:
        self.assertEqual(list_supported_languages(), ["cpp"])
        for name in ("cpp", "CPP", "c++", "cxx"):
            with self.subTest(name=name):
                self.assertTrue(is_language_supported(name))
        self.assertFalse(is_language_supported("go"))

    def test_get_generator_from_alias(self) -> None:
        generator = get_generator("c++", {"attribute": "ALIGNED"})
        self.assertIsInstance(generator, CppGenerator)
        self.assertEqual(generator.attribute, "ALIGNED")

    def test_get_generator_with_config_object(self) -> None:
        config = GeneratorConfig(indent_size=2)
        self.assertIs(get_generator("cpp", config).config, config)

    def test_language_info(self) -> None:
        info = get_language_info("cxx")
        self.assertEqual(info["name"], "cpp")
        self.assertEqual(info["file_extension"], ".h")
        self.assertEqual(info["class"], "CppGenerator")
        self.assertEqual(info["aliases"], ["c++", "cxx"])

    def test_unknown_language(self) -> None:
        with self.assertRaisesRegex(RegistryError, "Available: cpp"):
            get_generator("rust")

    def test_generate_types(self) -> None:
        result = generate_types(RAW_PACKET_TYPES, "cpp", {"attribute": "X"})
        self.assertTrue(result.success)
        self.assertIn("X\nstruct Header {", result.code)

    def test_generate_types_unknown_language(self) -> None:
        result = generate_types(RAW_PACKET_TYPES, "cobol")
        self.assertFalse(result.success)
        self.assertIsInstance(result.exception, RegistryError)


class GeneratorRegistryTests(unittest.TestCase):
    def test_register_requires_code_generator(self) -> None:
        with self.assertRaises(RegistryError):
            GeneratorRegistry().register("x", dict)

    def test_alias_conflicts(self) -> None:
        registry = GeneratorRegistry()
        registry.register("cpp", CppGenerator, aliases=["cxx"])
        with self.assertRaisesRegex(RegistryError, "already points"):
            registry.register("other", CppGenerator, aliases=["cxx"])
        with self.assertRaisesRegex(RegistryError, "conflicts"):
            registry.register("another", CppGenerator, aliases=["cpp"])

    def test_unregister(self) -> None:
        registry = GeneratorRegistry()
        registry.register("cpp", CppGenerator, aliases=["cxx"])
        registry.unregister("cpp")
        self.assertFalse(registry.is_supported("cpp"))
        self.assertFalse(registry.is_supported("cxx"))

    def test_register_twice_keeps_first_unless_replaced(self) -> None:
        class OtherGenerator(CppGenerator):
            pass

        registry = GeneratorRegistry()
        registry.register("cpp", CppGenerator, aliases=["cxx"])
        registry.register("cpp", OtherGenerator)
        self.assertIs(registry.entry("cxx").generator_class, CppGenerator)

        registry.register("cpp", OtherGenerator, aliases=["c++"], replace=True)
        self.assertIs(registry.entry("c++").generator_class, OtherGenerator)
        self.assertFalse(registry.is_supported("cxx"))

    def test_unknown_language_lists_available(self) -> None:
        registry = GeneratorRegistry()
        registry.register("cpp", CppGenerator)
        with self.assertRaisesRegex(RegistryError, "Available: cpp"):
            registry.resolve_language("rust")


if __name__ == "__main__":
    unittest.main()

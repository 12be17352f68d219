from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from bendec_codegen.codegen.core.errors import GeneratorError
from bendec_codegen.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    indent_lines,
)
from bendec_codegen.codegen.languages.cpp import CppGenerator


class IndentLinesTests(unittest.TestCase):
    def test_blank_lines_stay_empty(self) -> None:
        self.assertEqual(indent_lines("a\n\nb", 2), "  a\n\n  b")

    def test_default_width(self) -> None:
        self.assertEqual(indent_lines("x;"), "    x;")


class TemplateEngineTests(unittest.TestCase):
    def test_in_memory_templates(self) -> None:
        engine = TemplateEngine(templates={"t.j2": "{{ a }}<{{ b | indent(2) }}>"})
        self.assertTrue(engine.has_template("t.j2"))
        self.assertEqual(engine.render("t.j2", {"a": "x&y", "b": "z"}), "x&y<  z>")

    def test_extra_filters(self) -> None:
        engine = TemplateEngine(
            templates={"t.j2": "{{ n | twice }}"}, filters={"twice": lambda n: n * 2}
        )
        self.assertEqual(engine.render("t.j2", {"n": 21}), "42")

    def test_undefined_variable(self) -> None:
        engine = TemplateEngine(templates={"t.j2": "{{ missing }}"})
        with self.assertRaisesRegex(TemplateError, "t.j2"):
            engine.render("t.j2", {})

    def test_missing_template(self) -> None:
        with self.assertRaises(TemplateError):
            TemplateEngine(templates={}).render("nope.j2", {})

    def test_render_failure_is_a_generator_error(self) -> None:
        engine = TemplateEngine(templates={"t.j2": "{{ missing }}"})
        with self.assertRaises(GeneratorError):
            engine.render("t.j2", {})

    def test_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaisesRegex(TemplateError, "not found"):
                TemplateEngine(Path(temp_dir) / "absent")

    def test_directory_loader(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            (Path(temp_dir) / "hello.j2").write_text("hi {{ who }}\n", encoding="utf-8")
            engine = TemplateEngine(Path(temp_dir))
            self.assertEqual(engine.render("hello.j2", {"who": "there"}), "hi there")


class CppTemplateTests(unittest.TestCase):
    def test_cpp_templates_ship_with_package(self) -> None:
        engine = CppGenerator().template_engine
        for name in ("file.h.j2", "struct.h.j2", "enum.h.j2", "union.h.j2"):
            with self.subTest(name=name):
                self.assertTrue(engine.has_template(name))
        self.assertIn("hex", engine.filters)


if __name__ == "__main__":
    unittest.main()

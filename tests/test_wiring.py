"""
Context wiring: source reading, compiler detection and path helpers.
"""
from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from _support import DEFAULT_TRIPLE, EXE, FakeShell

from cxe.constants import BLOCK_HEAD, BLOCK_TAIL
from cxe.io.source_reader import SourceReader, find_block
from cxe.parsing.directives import PipelineBuilder
from cxe.parsing.source import UsageError
from cxe.parsing.tokenizer import DirectiveTokenizer
from cxe.processing.envctx import MappingEnvironment
from cxe.runtime.compiler import detect_compiler
from cxe.runtime.wiring import build_context, executable_name, resolve_executable
from cxe.utils.paths import is_absolute, normalize, qualify, quote_arg, source_stem

SOURCE = "int main(void) { return 0; }\n" + BLOCK_HEAD + " -O2 " + BLOCK_TAIL + "\n// tail\n"


# --------------------------------------------------------------------------- #
#  Source reading                                                             #
# --------------------------------------------------------------------------- #
class SourceReaderTests(unittest.TestCase):
    def test_find_block(self) -> None:
        text = "x " + BLOCK_HEAD + " -O2 " + BLOCK_TAIL + " y"
        start, end = find_block(text)
        self.assertEqual(text[start:end], " -O2 ")
        self.assertIsNone(find_block("x " + BLOCK_HEAD + " -O2"))
        self.assertIsNone(find_block("int main;"))

    def test_read_keeps_text_through_block(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "hello.c"
            path.write_text(SOURCE, encoding="utf-8")
            text, span = SourceReader().read(str(path))
        self.assertTrue(text.endswith(BLOCK_TAIL))
        self.assertEqual(text[span[0]:span[1]], " -O2 ")

    def test_read_without_block(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "hello.c"
            path.write_text("int main;\n", encoding="utf-8")
            self.assertEqual(SourceReader().read(str(path)), ("", None))

    def test_bundled_example_builds_for_default_target(self) -> None:
        example = Path(__file__).resolve().parents[1] / "examples" / "hello.c"
        shell = FakeShell(programs={"clang": "/usr/bin/clang"})
        ctx = build_context([EXE, str(example)], environment=MappingEnvironment(), shell=shell)
        pipeline = PipelineBuilder.build_pipeline(
            ctx, environment=MappingEnvironment(), shell=shell, print_usage=lambda: None
        )
        self.assertEqual([list(c) for c in pipeline.pre], [["mkdir", "-p", "../bin/linux"]])
        self.assertEqual(
            pipeline.compile.args,
            ["/usr/bin/clang", "-std=c11", "-Wall", "-Werror", f"--target={DEFAULT_TRIPLE}",
             "-o", "../bin/linux/hello", "hello.c"],
        )

    def test_missing_file(self) -> None:
        with self.assertRaises(UsageError) as cm:
            SourceReader().read("/nonexistent/dir/x.c")
        self.assertEqual(cm.exception.message, "file not found: /nonexistent/dir/x.c")


# --------------------------------------------------------------------------- #
#  Compiler detection                                                         #
# --------------------------------------------------------------------------- #
class CompilerTests(unittest.TestCase):
    def test_cpp_prefers_cxx_then_cc(self) -> None:
        env = MappingEnvironment({"CXX": "/opt/clang++", "CC": "/opt/clang"})
        self.assertEqual(detect_compiler("/w/a.cpp", environment=env, shell=FakeShell()), "/opt/clang++")
        env = MappingEnvironment({"CC": "/opt/clang"})
        self.assertEqual(detect_compiler("/w/a.cc", environment=env, shell=FakeShell()), "/opt/clang")

    def test_c_ignores_cxx(self) -> None:
        env = MappingEnvironment({"CXX": "/opt/clang++"})
        shell = FakeShell(programs={"gcc": "/usr/bin/gcc"})
        self.assertEqual(detect_compiler("/w/a.c", environment=env, shell=shell), "/usr/bin/gcc")

    def test_search_order(self) -> None:
        shell = FakeShell(programs={"clang": "/usr/bin/clang", "gcc": "/usr/bin/gcc"})
        self.assertEqual(detect_compiler("/w/a.c", environment=MappingEnvironment(), shell=shell), "/usr/bin/clang")
        shell = FakeShell(programs={"c++": "/usr/bin/c++"})
        self.assertEqual(detect_compiler("/w/a.cxx", environment=MappingEnvironment(), shell=shell), "/usr/bin/c++")

    def test_paths_are_normalized(self) -> None:
        env = MappingEnvironment({"CC": "C:\\llvm\\bin\\clang.exe"})
        self.assertEqual(detect_compiler("/w/a.c", environment=env, shell=FakeShell()), "C:/llvm/bin/clang.exe")

    def test_not_found(self) -> None:
        self.assertIsNone(detect_compiler("/w/a.c", environment=MappingEnvironment(), shell=FakeShell()))
        self.assertIsNone(detect_compiler("/w/a.txt", environment=MappingEnvironment({"CC": "cc"}), shell=FakeShell()))


# --------------------------------------------------------------------------- #
#  Context                                                                    #
# --------------------------------------------------------------------------- #
class BuildContextTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.shell = FakeShell(programs={"clang": "/usr/bin/clang"})

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, text: str = SOURCE) -> str:
        path = Path(self.tmp) / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    def _build(self, argv):
        return build_context(argv, environment=MappingEnvironment(), shell=self.shell)

    def test_context_fields(self) -> None:
        path = self._write("hello.c")
        ctx = self._build([EXE, path, "-O2"])
        self.assertEqual(ctx.exe_path, EXE)
        self.assertEqual(ctx.exe_name, "cxe")
        self.assertEqual(ctx.cli_text, f"cxe {normalize(path)} -O2")
        self.assertEqual(ctx.src_path, normalize(path))
        self.assertEqual(ctx.src_name, "hello")
        self.assertEqual(ctx.src_dir, normalize(self.tmp))
        self.assertEqual(ctx.compiler_path, "/usr/bin/clang")
        start, end = ctx.block_span
        self.assertEqual(ctx.src_text[start:end], " -O2 ")

    def test_argument_with_quotes_and_space_stays_one_argument(self) -> None:
        path = self._write("hello.c", "int main;\n")
        ctx = self._build([EXE, path, '-DMSG="hi there"', '-DX="a"', "-O2"])
        pipeline = PipelineBuilder.build_pipeline(
            ctx, environment=MappingEnvironment(), shell=self.shell, print_usage=lambda: None
        )
        self.assertEqual(
            pipeline.compile.args,
            ["/usr/bin/clang", '-DMSG="hi there"', '-DX="a"', "-O2", "hello.c"],
        )

    def test_source_path_with_space_is_quoted(self) -> None:
        path = self._write("my file.c")
        ctx = self._build([EXE, path, "-g"])
        self.assertIn(f'"{normalize(path)}"', ctx.cli_text)
        self.assertEqual([t.value for t in DirectiveTokenizer.tokenize_cli(ctx)], ["-g"])

    def test_not_a_source_file(self) -> None:
        with self.assertRaises(UsageError) as cm:
            self._build([EXE, "notes.txt"])
        self.assertIn("expected C/C++ source file", cm.exception.message)
        self.assertEqual(cm.exception.location.column, len("cxe ") + 1)

    def test_missing_source_argument(self) -> None:
        with self.assertRaises(UsageError):
            self._build([EXE])

    def test_no_compiler(self) -> None:
        self.shell = FakeShell()
        with self.assertRaises(UsageError) as cm:
            self._build([EXE, self._write("hello.c")])
        self.assertIn("compiler not found for source file", cm.exception.message)

    def test_executable_lookup(self) -> None:
        shell = FakeShell(programs={"cxe": "/opt/bin/cxe"})
        self.assertEqual(resolve_executable("cxe", shell=shell), "/opt/bin/cxe")
        with self.assertRaises(UsageError) as cm:
            resolve_executable("cxe", shell=FakeShell())
        self.assertEqual(cm.exception.message, 'command not found: "cxe"')

    def test_executable_name(self) -> None:
        self.assertEqual(executable_name("C:/tools/cxe.exe"), "cxe")
        self.assertEqual(executable_name("/usr/bin/cxe"), "cxe")


# --------------------------------------------------------------------------- #
#  Paths                                                                      #
# --------------------------------------------------------------------------- #
class PathTests(unittest.TestCase):
    def test_is_absolute(self) -> None:
        for path in ("/x", "\\x", "c:foo", "C:\\x", "file:/x"):
            self.assertTrue(is_absolute(path), path)
        for path in ("", "rel/x", "dir/a:b", "_a:b"):
            self.assertFalse(is_absolute(path), path)

    def test_qualify(self) -> None:
        self.assertEqual(qualify("C:\\src\\a.c"), "C:/src/a.c")
        self.assertTrue(qualify("a.c").startswith("/"))

    def test_source_stem(self) -> None:
        self.assertEqual(source_stem("/a/b/Main.CPP"), "Main")
        self.assertEqual(source_stem("x.c"), "x")

    def test_quote_arg(self) -> None:
        self.assertEqual(quote_arg("a b"), '"a b"')
        self.assertEqual(quote_arg('"a b"'), '"\\"a b\\""')
        self.assertEqual(quote_arg('-DX="a"'), '-DX=\\"a\\"')
        self.assertEqual(quote_arg("ab"), "ab")


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for the allocation-free scan primitives and the Scanner cursor.
"""
from __future__ import annotations

import unittest

from cxe.parsing import scan
from cxe.parsing.scan import Scanner, is_ident_char, is_ident_start, is_space


# --------------------------------------------------------------------------- #
#  Free functions                                                             #
# --------------------------------------------------------------------------- #
class MatchTests(unittest.TestCase):
    def test_equals_whole_view(self) -> None:
        self.assertTrue(scan.equals("abc", "abc"))
        self.assertFalse(scan.equals("ab", "abc"))
        self.assertTrue(scan.equals("bc", "abcd", 1, 3))

    def test_equals_ignore_case(self) -> None:
        self.assertFalse(scan.equals("ABC", "abc"))
        self.assertTrue(scan.equals("ABC", "abc", ignore_case=True))

    def test_prefix_literal_and_predicate(self) -> None:
        self.assertTrue(scan.prefix("--target", "--target=x"))
        self.assertFalse(scan.prefix("--target=x", "--target"))
        self.assertTrue(scan.prefix(is_space, " a"))
        self.assertFalse(scan.prefix(is_space, ""))

    def test_suffix(self) -> None:
        self.assertTrue(scan.suffix(".cpp", "main.CPP", ignore_case=True))
        self.assertFalse(scan.suffix(".c", "main.C"))
        self.assertFalse(scan.suffix("long.c", ".c"))

    def test_find_and_contains_respect_start(self) -> None:
        triple = "x86_64-pc-windows-msvc"
        self.assertEqual(scan.find("pc", triple), 7)
        self.assertTrue(scan.contains("windows", triple))
        self.assertTrue(scan.contains("win", triple, 10))
        self.assertFalse(scan.contains("win", triple, 11))
        self.assertEqual(scan.find("zz", triple), -1)

    def test_find_ignore_case(self) -> None:
        self.assertEqual(scan.find("WIN", "x-windows", ignore_case=True), 2)
        self.assertEqual(scan.find("WIN", "x-windows"), -1)

    def test_identifier_classes(self) -> None:
        self.assertTrue(is_ident_start("_"))
        self.assertFalse(is_ident_start("1"))
        self.assertTrue(is_ident_char("1"))
        self.assertFalse(is_ident_char("-"))


# --------------------------------------------------------------------------- #
#  Scanner                                                                    #
# --------------------------------------------------------------------------- #
class ScannerTests(unittest.TestCase):
    def test_cursor_moves_only_on_success(self) -> None:
        sc = Scanner("  abc$X")
        self.assertEqual(sc.skip_while(is_space), 2)
        self.assertEqual(sc.pos, 2)
        self.assertTrue(sc.seek("$"))
        self.assertEqual(sc.pos, 5)
        self.assertFalse(sc.seek("#"))
        self.assertEqual(sc.pos, 5)
        self.assertTrue(sc.skip("$"))
        self.assertFalse(sc.skip("$"))
        self.assertEqual(sc.pos, 6)
        self.assertEqual(sc.peek(), "X")

    def test_window_end_is_honoured(self) -> None:
        sc = Scanner("abc def", 0, 3)
        self.assertFalse(sc.seek("d"))
        sc.advance(10)
        self.assertEqual(sc.pos, 3)
        self.assertFalse(sc)
        self.assertEqual(sc.peek(), "")


if __name__ == "__main__":
    unittest.main()

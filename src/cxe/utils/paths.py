# src/cxe/utils/paths.py
"""
paths – Small, centralized path and source-type helpers for cxe.

Provides:
  • normalize(str)          – forward slashes only
  • is_absolute(str)        – POSIX, drive-letter and scheme-style roots
  • qualify(str)            – absolute, normalized path
  • basename(str) / dirname(str)
  • source_stem(str)        – basename without its C/C++ extension
  • is_c_path / is_cpp_path / is_c_cpp_path
  • quote_arg(str)          – escape quotes, wrap whitespace-bearing arguments
"""

from __future__ import annotations

import os

from cxe.constants import C_SUFFIXES, CPP_SUFFIXES
from cxe.parsing import scan


def normalize(path: str) -> str:
    """Return *path* with backslash separators turned into '/'."""
    return (path or "").replace("\\", "/")


def is_absolute(path: str) -> bool:
    """Return True for '/x', '\\x', 'c:...' and 'scheme:/...' style paths."""
    if not path:
        return False
    if path[0] in "/\\":
        return True
    if scan.is_ident_start(path[0]) and path[0] != "_":
        if len(path) > 1 and path[1] == ":":
            return True
        colon = path.find(":")
        if colon < 0:
            return False
        for sep in "/\\":
            slash = path.find(sep)
            if 0 <= slash < colon:
                return False
        return True
    return False


def qualify(path: str) -> str:
    """Return an absolute, normalized form of *path*."""
    path = normalize(path)
    if is_absolute(path):
        return path
    return normalize(os.path.realpath(path))


def basename(path: str) -> str:
    return normalize(path).rsplit("/", 1)[-1]


def dirname(path: str) -> str:
    path = normalize(path)
    return path.rsplit("/", 1)[0] if "/" in path else ""


def is_cpp_path(path: str) -> bool:
    return any(scan.suffix(s, path, ignore_case=True) for s in CPP_SUFFIXES)


def is_c_path(path: str) -> bool:
    return any(scan.suffix(s, path) for s in C_SUFFIXES)


def is_c_cpp_path(path: str) -> bool:
    return is_c_path(path) or is_cpp_path(path)


def source_stem(path: str) -> str:
    """Return the basename of *path* without its C/C++ extension."""
    name = basename(path)
    for s in (*CPP_SUFFIXES, *C_SUFFIXES):
        if scan.suffix(s, name, ignore_case=True):
            return name[: len(name) - len(s)]
    return name


def quote_arg(arg: str) -> str:
    """Render one argv element as a single CLI-text atom.

    Literal double quotes become '\\"' and whitespace-bearing arguments are
    wrapped in double quotes, so tokenizing and unquoting gives *arg* back.
    """
    arg = arg.replace('"', '\\"')
    if not any(scan.is_space(c) for c in arg):
        return arg
    return f'"{arg}"'

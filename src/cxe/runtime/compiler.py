"""Compiler selection for a source file.

C++ sources honor $CXX, then $CC, then the first of clang, gcc, c++ on the
search path. C sources honor $CC, then clang, gcc, cc.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from cxe.utils.paths import is_c_path, is_cpp_path, normalize

_CPP_CANDIDATES: Tuple[Tuple[str, ...], Tuple[str, ...]] = (('CXX', 'CC'), ('clang', 'gcc', 'c++'))
_C_CANDIDATES: Tuple[Tuple[str, ...], Tuple[str, ...]] = (('CC',), ('clang', 'gcc', 'cc'))


def _first(env_names: Sequence[str], programs: Sequence[str], environment, shell) -> Optional[str]:
    for name in env_names:
        value = environment.get(name)
        if value:
            return value
    for prog in programs:
        found = shell.which(prog)
        if found:
            return found
    return None


def detect_compiler(src_path: str, *, environment, shell) -> Optional[str]:
    """Return the normalized compiler path for *src_path*, or None."""
    if is_cpp_path(src_path):
        found = _first(*_CPP_CANDIDATES, environment, shell)
    elif is_c_path(src_path):
        found = _first(*_C_CANDIDATES, environment, shell)
    else:
        found = None
    return normalize(found) if found else None

"""Target-triple resolution through the selected compiler.

The compiler is asked for its effective target (optionally under a
user-supplied `--target=` value). Its trimmed standard output is the
canonical triple, returned as a ready-to-append `--target=<triple>`.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, NoReturn, Optional

from cxe.logging.helpers import get_logger
from cxe.parsing.source import ResolutionError

TARGET_FLAG = '--target'
TARGET_EQ = '--target='
CLANG_QUERY = '-print-effective-triple'
GCC_QUERY = '-dumpmachine'


class TargetResolver:
    def __init__(
        self,
        compiler_path: str,
        shell,
        *,
        gcc_family: bool = False,
        env: Optional[Callable[[], Dict[str, str]]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._cc = compiler_path
        self._shell = shell
        self._query = GCC_QUERY if gcc_family else CLANG_QUERY
        self._env = env
        self._log = logger or get_logger('processing.target')
        self._cache: Dict[Optional[str], str] = {}

    @classmethod
    def from_context(cls, ctx, shell, **kw) -> 'TargetResolver':
        gcc_family = ctx.compiler_is_gcc and not ctx.compiler_is_clang
        return cls(ctx.compiler_path, shell, gcc_family=gcc_family, **kw)

    def query_argv(self, target: Optional[str] = None) -> List[str]:
        argv = [self._cc]
        if target is not None:
            argv.append(TARGET_EQ + target)
        argv.append(self._query)
        return argv

    def resolve(self, target: Optional[str] = None, *, on_error: Optional[Callable[[str], NoReturn]] = None) -> str:
        """Return `--target=<triple>` for *target* (None = compiler default)."""
        cached = self._cache.get(target)
        if cached is not None:
            return cached

        argv = self.query_argv(target)
        status, out = self._shell.capture(argv, env=self._env() if self._env else None)
        if status != 0:
            msg = f"failed to resolve --target: {' '.join(argv)} returned {status}"
            if on_error is not None:
                on_error(msg)
            raise ResolutionError(msg)

        resolved = TARGET_EQ + out.strip()
        self._log.debug('target %s -> %s', target or '<default>', resolved)
        self._cache[target] = resolved
        return resolved

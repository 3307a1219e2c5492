"""
Context wiring.

`build_context` turns argv into the read-only `Context` for one run:
executable path and name, qualified source path and its pieces, the
space-joined CLI text, the directive-bearing source text and the selected
compiler. Invalid invocations raise `UsageError`.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from cxe.core.models import Context, Token, TokenOrigin
from cxe.io.source_reader import SourceReader
from cxe.logging.helpers import get_logger
from cxe.parsing.scan import suffix
from cxe.parsing.source import Location, LocationMapper, UsageError
from cxe.runtime.compiler import detect_compiler
from cxe.utils.paths import (
    basename,
    dirname,
    is_c_cpp_path,
    normalize,
    qualify,
    quote_arg,
    source_stem,
)


def _locate_in_cli(cli_text: str, needle: str) -> Optional[Location]:
    start = cli_text.find(needle)
    if start < 0:
        return None
    tok = Token(TokenOrigin.CLI, start, len(needle), cli_text)
    return LocationMapper(cli_text, '', '').locate(tok)


def resolve_executable(argv0: str, *, shell) -> str:
    path = normalize(argv0)
    if '/' in path:
        return qualify(path)
    found = shell.which(path)
    if not found:
        raise UsageError(f'command not found: "{path}"')
    return normalize(found)


def executable_name(exe_path: str) -> str:
    name = basename(exe_path)
    if suffix('.exe', name):
        name = name[:-len('.exe')]
    return name


def build_context(
    argv: Sequence[str],
    *,
    environment,
    shell,
    reader: Optional[SourceReader] = None,
    logger: Optional[logging.Logger] = None,
) -> Context:
    """Build the run context from a full argv (argv[0] is the executable)."""
    log = logger or get_logger('wiring')
    if len(argv) < 2:
        raise UsageError('expected C/C++ source file')

    exe_path = resolve_executable(argv[0], shell=shell)
    exe_name = executable_name(exe_path)
    cli_text = ' '.join([quote_arg(exe_name), *(quote_arg(a) for a in argv[1:])])

    src_path = qualify(argv[1])
    if not is_c_cpp_path(src_path):
        raise UsageError(f'expected C/C++ source file: {src_path}', _locate_in_cli(cli_text, quote_arg(argv[1])))

    compiler = detect_compiler(src_path, environment=environment, shell=shell)
    if not compiler:
        raise UsageError(
            f'compiler not found for source file: {src_path}', _locate_in_cli(cli_text, quote_arg(argv[1]))
        )

    src_text, span = (reader or SourceReader(logger=log)).read(src_path)

    ctx = Context(
        exe_path=exe_path,
        exe_name=exe_name,
        cli_text=cli_text,
        src_text=src_text,
        src_path=src_path,
        src_name=source_stem(src_path),
        src_dir=dirname(src_path),
        compiler_path=compiler,
        block_span=span,
    )
    log.debug('compiler: %s (clang=%s, gcc=%s)', compiler, ctx.compiler_is_clang, ctx.compiler_is_gcc)
    return ctx

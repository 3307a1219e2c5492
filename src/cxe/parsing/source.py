"""Directive source locations and error helpers.

This module maps tokens back to a presentation-only `Location` (origin
file, full source line, one-based line and column, token length) and
defines the error types raised while building a pipeline. Every error can
render itself as a caret diagnostic:

    hello.c:4:9: error: unresolved environment variable
        -I$VULKAN_SDK/include
          ^~~~~~~~~~~~~~~~~~~~

CLI-origin locations carry no file name, so the first line is just the
message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from cxe.core.models import Context, Token, TokenOrigin
from cxe.parsing.scan import Scanner


@dataclass(frozen=True)
class Location:
    """Resolved position of a token.

    Attributes:
        file:   Source path for directive-block tokens, '' for CLI tokens.
        text:   The full line containing the token, without its newline.
        line:   1-based line number.
        column: 1-based column number.
        length: Token length in characters.
    """
    file: str = ''
    text: str = ''
    line: int = 0
    column: int = 0
    length: int = 0

    def __bool__(self) -> bool:
        return self.line > 0

    def format(self) -> str:
        """Return a 'file:line:col' label, or '' for an unknown location."""
        if not self:
            return ''
        if self.file:
            return f'{self.file}:{self.line}:{self.column}'
        return ''


class LocationMapper:
    """Locate tokens inside the CLI text or the directive-bearing source text."""

    def __init__(self, cli_text: str, src_text: str, src_path: str) -> None:
        self._texts = {TokenOrigin.CLI: cli_text, TokenOrigin.SOURCE: src_text}
        self._src_path = src_path

    @classmethod
    def from_context(cls, ctx: Context) -> 'LocationMapper':
        return cls(ctx.cli_text, ctx.src_text, ctx.src_path)

    def locate(self, tok: Token) -> Location:
        text = self._texts.get(tok.origin, '')
        if tok.start > len(text):
            return Location()

        sc = Scanner(text, 0, tok.start)
        line_start = 0
        line = column = 1
        while sc:
            if sc.skip('\r\n') or sc.skip('\n'):
                line_start = sc.pos
                line += 1
                column = 1
            else:
                sc.advance()
                column += 1

        sc = Scanner(text, tok.start)
        if sc.seek('\n'):
            line_end = sc.pos - 1 if sc.pos > line_start and text[sc.pos - 1] == '\r' else sc.pos
        else:
            line_end = sc.end

        file = self._src_path if tok.origin is TokenOrigin.SOURCE else ''
        return Location(file, text[line_start:line_end], line, column, tok.length)


def format_diagnostic(loc: Optional[Location], message: str, severity: str = 'error') -> str:
    """Render *message* with an optional location header and caret line."""
    loc = loc or Location()
    head = f'{severity}: {message}'
    if loc.file:
        head = f'{loc.format()}: {head}'
    lines = [head]
    if loc and loc.text:
        lines.append(loc.text)
        lines.append(' ' * (loc.column - 1) + '^' + '~' * max(loc.length - 1, 0))
    return '\n'.join(lines)


class CxeError(Exception):
    """Fatal error raised while building a pipeline; maps to exit status 1."""

    exit_code = 1

    def __init__(self, message: str, location: Optional[Location] = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def format(self) -> str:
        return format_diagnostic(self.location, self.message)


class DirectiveSyntaxError(CxeError, ValueError):
    """Raised when a directive stream is malformed."""


class ResolutionError(CxeError):
    """Raised when an environment variable or a target cannot be resolved."""


class UsageError(CxeError):
    """Raised for invalid invocations (output path, source file, compiler)."""

"""
DirectiveTokenizer – canonical tokenizer for the CLI text and directive blocks.

Token rules:
    * Whitespace between tokens is skipped.
    * '#' or '//' at a token boundary starts a comment running to end of line.
    * '{ } [ ] ( )' are single-character tokens.
    * '&&' and '||' are two-character tokens.
    * Anything else is an atom: a maximal run of non-space, non-delimiter
      characters. A double quote opens a quoted run in which whitespace and
      delimiters are kept verbatim; the next double quote not preceded by a
      backslash closes it and also ends the atom.

Tokens are views into the text they were cut from; no text is copied.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from cxe.core.models import Context, Token, TokenOrigin
from cxe.parsing.scan import Scanner, is_space, one_of

_DELIMITERS = '{}[]()'
_OPERATORS = ('&&', '||')
_is_delimiter = one_of(_DELIMITERS)


class _AtomState:
    """Character predicate for atoms; tracks quoting across calls."""

    __slots__ = ('quotes', 'prev')

    def __init__(self) -> None:
        self.quotes = 0
        self.prev = ''

    def __call__(self, c: str) -> bool:
        if self.quotes >= 2:
            return False
        if c == '"':
            if self.prev != '\\':
                self.quotes += 1
            self.prev = c
            return True
        if self.quotes == 1:
            self.prev = c
            return True
        if c in _DELIMITERS or c == '#':
            return False
        self.prev = c
        return not is_space(c)


class DirectiveTokenizer:
    @staticmethod
    def tokenize(
        text: str,
        origin: TokenOrigin,
        start: int = 0,
        end: Optional[int] = None,
    ) -> List[Token]:
        """Split the view text[start:end] into tokens."""
        out: List[Token] = []
        sc = Scanner(text, start, end)

        while sc:
            sc.skip_while(is_space)
            if not sc:
                break
            begin = sc.pos

            if sc.skip('#') or sc.skip('//'):
                if not sc.seek('\n'):
                    sc.pos = sc.end
                sc.skip('\n')
                continue

            if sc.skip(_is_delimiter) or any(sc.skip(op) for op in _OPERATORS):
                out.append(Token(origin, begin, sc.pos - begin, text))
                continue

            sc.skip_while(_AtomState())
            if sc.pos == begin:
                sc.advance()
                continue
            out.append(Token(origin, begin, sc.pos - begin, text))

        return out

    @staticmethod
    def tokenize_cli(ctx: Context) -> List[Token]:
        """Tokenize the CLI text, dropping the executable name and source path."""
        toks = DirectiveTokenizer.tokenize(ctx.cli_text, TokenOrigin.CLI)
        return toks[2:]

    @staticmethod
    def tokenize_block(ctx: Context) -> List[Token]:
        """Tokenize the directive block of the source text (empty if absent)."""
        if not ctx.block_span:
            return []
        start, end = ctx.block_span
        return DirectiveTokenizer.tokenize(ctx.src_text, TokenOrigin.SOURCE, start, end)


def unquote(arg: str) -> str:
    """Drop unescaped double quotes and turn '\\"' into '"'."""
    if '"' not in arg:
        return arg
    out: List[str] = []
    i, n = 0, len(arg)
    while i < n:
        ch = arg[i]
        if ch == '\\' and i + 1 < n and arg[i + 1] == '"':
            out.append('"')
            i += 2
            continue
        if ch != '"':
            out.append(ch)
        i += 1
    return ''.join(out)


class TokenCursor:
    """Position over a token sequence with one-token lookahead.

    Past the last token, `peek` and `read` yield an empty sentinel token
    anchored at the end of the final token instead of failing.
    """

    def __init__(self, tokens: Sequence[Token], *, origin: TokenOrigin = TokenOrigin.CLI, text: str = '') -> None:
        self._toks = tokens
        self._i = 0
        if tokens:
            last = tokens[-1]
            self._nul = Token(last.origin, last.end, 0, last.text)
        else:
            self._nul = Token(origin, len(text), 0, text)

    def __bool__(self) -> bool:
        return self._i < len(self._toks)

    def advance(self) -> bool:
        if self._i < len(self._toks):
            self._i += 1
            return True
        return False

    def peek(self) -> Token:
        return self._toks[self._i] if self._i < len(self._toks) else self._nul

    def read(self) -> Token:
        tok = self.peek()
        self.advance()
        return tok

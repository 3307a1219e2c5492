"""
scan – Allocation-free matching primitives over (text, start, end) views.

Every function here is non-throwing and boolean-returning. A view is a
string plus a half-open [start, end) window; nothing is sliced or copied.
`Scanner` is the mutable cursor counterpart: its `seek`/`skip` methods move
the cursor only on success.

Patterns are either a literal string or a single-character predicate such
as `is_space`. Literal comparisons may be case-sensitive (default) or
case-insensitive (`ignore_case=True`).
"""

from __future__ import annotations

from typing import Callable, Optional, Union

CharPredicate = Callable[[str], bool]
Pattern = Union[str, CharPredicate]


def is_space(c: str) -> bool:
    return c in ' \t\n\r\f\v'


def is_ident_start(c: str) -> bool:
    return c == '_' or ('a' <= c <= 'z') or ('A' <= c <= 'Z')


def is_ident_char(c: str) -> bool:
    return is_ident_start(c) or ('0' <= c <= '9')


def one_of(chars: str) -> CharPredicate:
    """Predicate matching any character in *chars*."""
    return lambda c: c in chars


def _bounds(text: str, start: int, end: Optional[int]) -> tuple[int, int]:
    n = len(text)
    end = n if end is None else min(end, n)
    return max(start, 0), end


def _same(a: str, b: str, ignore_case: bool) -> bool:
    return a == b or (ignore_case and a.lower() == b.lower())


def _match_at(s: str, text: str, pos: int, end: int, ignore_case: bool) -> bool:
    if pos + len(s) > end:
        return False
    if not ignore_case:
        return text.startswith(s, pos, end)
    for i, c in enumerate(s):
        if not _same(c, text[pos + i], True):
            return False
    return True


def equals(s: str, text: str, start: int = 0, end: Optional[int] = None, *, ignore_case: bool = False) -> bool:
    """True iff the whole view equals *s*."""
    start, end = _bounds(text, start, end)
    return end - start == len(s) and _match_at(s, text, start, end, ignore_case)


def prefix(pat: Pattern, text: str, start: int = 0, end: Optional[int] = None, *, ignore_case: bool = False) -> bool:
    """True iff the view begins with *pat* (a literal or a char predicate)."""
    start, end = _bounds(text, start, end)
    if callable(pat):
        return start < end and bool(pat(text[start]))
    return _match_at(pat, text, start, end, ignore_case)


def suffix(s: str, text: str, start: int = 0, end: Optional[int] = None, *, ignore_case: bool = False) -> bool:
    """True iff the view ends with *s*."""
    start, end = _bounds(text, start, end)
    if len(s) > end - start:
        return False
    return _match_at(s, text, end - len(s), end, ignore_case)


def find(pat: Pattern, text: str, start: int = 0, end: Optional[int] = None, *, ignore_case: bool = False) -> int:
    """Offset of the first match of *pat* inside the view, or -1."""
    start, end = _bounds(text, start, end)
    if not callable(pat) and not ignore_case:
        return text.find(pat, start, end) if len(pat) <= end - start else -1
    for pos in range(start, end):
        if prefix(pat, text, pos, end, ignore_case=ignore_case):
            return pos
    return -1


def contains(pat: Pattern, text: str, start: int = 0, end: Optional[int] = None, *, ignore_case: bool = False) -> bool:
    return find(pat, text, start, end, ignore_case=ignore_case) >= 0


class Scanner:
    """Cursor over a text view with consume-on-success semantics."""

    __slots__ = ('text', 'pos', 'end')

    def __init__(self, text: str, pos: int = 0, end: Optional[int] = None) -> None:
        self.text = text
        self.pos, self.end = _bounds(text, pos, end)

    def __bool__(self) -> bool:
        return self.pos < self.end

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < self.end else ''

    def prefix(self, pat: Pattern, *, ignore_case: bool = False) -> bool:
        return prefix(pat, self.text, self.pos, self.end, ignore_case=ignore_case)

    def seek(self, pat: Pattern, *, ignore_case: bool = False) -> bool:
        """Move to the next match of *pat*; the cursor stays put on failure."""
        pos = find(pat, self.text, self.pos, self.end, ignore_case=ignore_case)
        if pos < 0:
            return False
        self.pos = pos
        return True

    def skip(self, pat: Pattern, *, ignore_case: bool = False) -> bool:
        """Consume *pat* if the cursor sits on it."""
        if not self.prefix(pat, ignore_case=ignore_case):
            return False
        self.pos += 1 if callable(pat) else len(pat)
        return True

    def skip_while(self, pred: CharPredicate) -> int:
        """Consume characters while *pred* holds; return how many were eaten."""
        n = 0
        while self.skip(pred):
            n += 1
        return n

    def advance(self, n: int = 1) -> None:
        self.pos = min(self.pos + n, self.end)

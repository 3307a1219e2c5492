"""
conditionals – AST, parser and evaluator for `-if ( ... )` tests.

Grammar (right-recursive; no precedence between `&&` and `||`):

    conditional := ')'                       → error: empty test
                 | literal ')'               → some argument equals `literal`
                 | literal tail
                 | prefix '[' ']' tail       → some argument starts with `prefix`
                 | prefix '[' sub ']' tail   → ... and its remainder contains `sub`
    tail        := ('&&' | 'and') conditional
                 | ('||' | 'or')  conditional
                 | ')'

Parsing consumes the whole test up to its closing ')' before anything is
evaluated. Evaluation short-circuits, so the right side of `&&` only runs
when the left side holds and the right side of `||` only when it fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NoReturn, Optional, Union

from cxe.core.models import Token
from cxe.parsing import scan
from cxe.parsing.flags import AND_OPS, OR_OPS
from cxe.parsing.tokenizer import TokenCursor


@dataclass(frozen=True)
class Literal:
    text: Token


@dataclass(frozen=True)
class PrefixTest:
    prefix: Token
    substring: Optional[Token] = None


@dataclass(frozen=True)
class And:
    left: 'Condition'
    right: 'Condition'


@dataclass(frozen=True)
class Or:
    left: 'Condition'
    right: 'Condition'


Condition = Union[Literal, PrefixTest, And, Or]

# fail(token, message) never returns.
Fail = Callable[[Token, str], NoReturn]
# find(match, token) returns the first argument matching the token text, or None.
Find = Callable[[Callable[[str, str], bool], Token], Optional[str]]

_EXPECT_TAIL = 'expected "&&"/"and", "||"/"or", or ")"'


def _is(tok: Token, choices) -> bool:
    return tok.value in choices


def parse_conditional(cursor: TokenCursor, fail: Fail) -> Condition:
    """Parse a conditional whose '(' has already been consumed."""
    a = cursor.read()
    if a == ')' or not a:
        fail(a, 'expected conditional expression')

    b = cursor.read()
    if b == ')':
        return Literal(a)
    if _is(b, AND_OPS):
        return And(Literal(a), parse_conditional(cursor, fail))
    if _is(b, OR_OPS):
        return Or(Literal(a), parse_conditional(cursor, fail))
    if b != '[':
        fail(b, 'expected "[", "&&"/"and", "||"/"or", or ")"')

    c = cursor.read()
    if c == ']':
        node: Condition = PrefixTest(a)
    else:
        d = cursor.read()
        if d != ']':
            fail(d, 'expected "]"')
        node = PrefixTest(a, c)

    e = cursor.read()
    if _is(e, AND_OPS):
        return And(node, parse_conditional(cursor, fail))
    if _is(e, OR_OPS):
        return Or(node, parse_conditional(cursor, fail))
    if e == ')':
        return node
    fail(e, _EXPECT_TAIL)


class ConditionEvaluator:
    """Evaluate a `Condition` against one command's arguments via *find*."""

    def __init__(self, find: Find) -> None:
        self._find = find

    def evaluate(self, node: Condition) -> bool:
        if isinstance(node, And):
            return self.evaluate(node.left) and self.evaluate(node.right)
        if isinstance(node, Or):
            return self.evaluate(node.left) or self.evaluate(node.right)
        if isinstance(node, Literal):
            return self._find(scan.equals, node.text) is not None
        if isinstance(node, PrefixTest):
            pre = node.prefix.value
            arg = self._find(scan.prefix, node.prefix)
            if arg is None:
                return False
            if node.substring is None:
                return True
            return scan.contains(node.substring.value, arg, len(pre))
        raise TypeError(f'unknown condition node: {node!r}')

from __future__ import annotations

import logging
from typing import Callable, List, NoReturn, Optional, Type

from cxe.constants import DEFAULT_EXECUTABLE
from cxe.core.models import Command, Context, Pipeline, Token, TokenOrigin
from cxe.parsing import scan
from cxe.parsing.conditionals import ConditionEvaluator, parse_conditional
from cxe.parsing.flags import (
    EXECUTE_FLAG,
    HELP_FLAGS,
    IF_FLAG,
    OUTPUT_DECOYS,
    OUTPUT_LONG,
    OUTPUT_LONG_EQ,
    OUTPUT_SHORT,
    POST_FLAG,
    PRE_FLAG,
)
from cxe.parsing.source import (
    CxeError,
    DirectiveSyntaxError,
    LocationMapper,
    ResolutionError,
    UsageError,
)
from cxe.parsing.tokenizer import DirectiveTokenizer, TokenCursor, unquote
from cxe.parsing.usage import render_usage
from cxe.processing.envctx import EnvContext
from cxe.processing.target import TARGET_EQ, TARGET_FLAG, TargetResolver
from cxe.logging.helpers import get_logger


class PipelineBuilder:
    """Recursive-descent consumer of the CLI and directive-block streams.

    Bare tokens are resolved and appended to the "current target" command,
    which starts as the compile command and switches inside `-pre`/`-post`
    blocks. The builder either returns a complete `Pipeline` or raises a
    `CxeError`; `-help` prints usage and exits.
    """

    def __init__(
        self,
        ctx: Context,
        *,
        environment,
        shell,
        logger: Optional[logging.Logger] = None,
        targets: Optional[TargetResolver] = None,
        print_usage: Optional[Callable[[], None]] = None,
    ) -> None:
        self._ctx = ctx
        self._log = logger or get_logger('parser')
        self._env = EnvContext(environment, logger=self._log)
        self._targets = targets or TargetResolver.from_context(ctx, shell, env=environment.snapshot)
        self._locations = LocationMapper.from_context(ctx)
        self._print_usage = print_usage or (lambda: print(render_usage()))

        self._cli_toks = DirectiveTokenizer.tokenize_cli(ctx)
        self._src_toks = DirectiveTokenizer.tokenize_block(ctx)

        self._pre: List[Command] = []
        self._compile = Command()
        self._post: List[Command] = []
        self._output: Optional[str] = None
        self._execute_args: List[str] = []
        self._should_execute = False

    @classmethod
    def build_pipeline(cls, ctx: Context, **kw) -> Pipeline:
        """Convenience classmethod: build the pipeline for *ctx* in a single call."""
        return cls(ctx, **kw).build()

    # ------------------------------------------------------------------ #
    # Driver                                                             #
    # ------------------------------------------------------------------ #
    def build(self) -> Pipeline:
        self._compile.append(self._ctx.compiler_path)

        streams = (
            (self._cli_toks, self._ctx.cli_text, TokenOrigin.CLI),
            (self._src_toks, self._ctx.src_text, TokenOrigin.SOURCE),
        )
        for toks, text, origin in streams:
            itr = TokenCursor(toks, origin=origin, text=text)
            while itr:
                if self._should_execute:
                    self._collect_execute_args(itr)
                else:
                    self._parse_arg(itr, self._compile)

        self._compile.append(self._ctx.src_file_name)

        execute: Optional[Command] = None
        if self._should_execute:
            execute = Command([self._output or DEFAULT_EXECUTABLE, *self._execute_args])

        self._log.debug(
            'pipeline: %d pre, %d post, execute=%s', len(self._pre), len(self._post), execute is not None
        )
        return Pipeline(compile=self._compile, pre=self._pre, post=self._post, execute=execute)

    # ------------------------------------------------------------------ #
    # Errors                                                             #
    # ------------------------------------------------------------------ #
    def _fail(self, kind: Type[CxeError], tok: Token, msg: str) -> NoReturn:
        raise kind(msg, self._locations.locate(tok))

    def _syntax(self, tok: Token, msg: str) -> NoReturn:
        self._fail(DirectiveSyntaxError, tok, msg)

    # ------------------------------------------------------------------ #
    # Arguments                                                          #
    # ------------------------------------------------------------------ #
    def _parse_arg(self, itr: TokenCursor, cmd: Command) -> None:
        t = itr.read()
        v = t.value

        if v in HELP_FLAGS:
            self._print_usage()
            raise SystemExit(1)

        if v == IF_FLAG:
            self._parse_if(itr, cmd)
            return

        if v == EXECUTE_FLAG:
            self._should_execute = True
            self._collect_execute_args(itr)
            return

        if v == PRE_FLAG:
            self._pre.append(Command())
            self._parse_block(itr, self._pre[-1])
            return

        if v == POST_FLAG:
            self._post.append(Command())
            self._parse_block(itr, self._post[-1])
            return

        if cmd is self._compile and (v.startswith(OUTPUT_LONG) or v.startswith(OUTPUT_SHORT)):
            self._parse_output(t, itr)

        self._append(t, cmd)

    def _collect_execute_args(self, itr: TokenCursor) -> None:
        while itr:
            t = itr.read()
            self._execute_args.append(self._resolve(t, canonicalize_target=False))

    def _record_output(self, flag: Token, path: Token) -> None:
        if self._output is not None:
            self._fail(UsageError, flag, 'redundant output option')
        self._output = self._resolve(path, canonicalize_target=False)
        self._log.debug('output path: %s', self._output)

    def _parse_output(self, t: Token, itr: TokenCursor) -> None:
        v = t.value

        if v.startswith(OUTPUT_LONG_EQ):
            # --output=<file>
            path = t.sub(len(OUTPUT_LONG_EQ))
            if not path:
                self._fail(UsageError, t, 'expected output path')
            self._record_output(t, path)
            return

        if v in (OUTPUT_LONG, OUTPUT_SHORT):
            # --output <file> or -o <file>; the path stays in the stream.
            if not itr:
                self._fail(UsageError, t, 'expected output path')
            self._record_output(t, itr.peek())
            return

        if any(v.startswith(decoy) for decoy in OUTPUT_DECOYS):
            return

        if v.startswith(OUTPUT_SHORT):
            # -o<file>
            self._record_output(t, t.sub(len(OUTPUT_SHORT)))

    # ------------------------------------------------------------------ #
    # Blocks & conditionals                                              #
    # ------------------------------------------------------------------ #
    def _parse_if(self, itr: TokenCursor, cmd: Command) -> None:
        a = itr.read()
        if a != '(':
            self._syntax(a, 'expected "("')

        cond = parse_conditional(itr, self._syntax)
        evaluator = ConditionEvaluator(lambda match, tok: self._find(match, tok, cmd))

        if evaluator.evaluate(cond):
            self._parse_block(itr, cmd)
        else:
            self._skip_block(itr)

    def _parse_block(self, itr: TokenCursor, cmd: Command) -> None:
        """Parse tokens within { ... } into *cmd*."""
        a = itr.read()
        if a != '{':
            self._syntax(a, 'expected "{"')

        while True:
            if not itr:
                self._syntax(itr.peek(), 'expected "}"')
            if itr.peek() == '}':
                itr.advance()
                return
            self._parse_arg(itr, cmd)
            if self._should_execute:
                return

    def _skip_block(self, itr: TokenCursor) -> None:
        """Skip tokens within { ... } without resolving any of them."""
        a = itr.read()
        if a != '{':
            self._syntax(a, 'expected "{"')

        depth = 1
        while depth > 0:
            if not itr:
                self._syntax(itr.peek(), 'expected "}"')
            b = itr.read()
            if b == '{':
                depth += 1
            elif b == '}':
                depth -= 1

    def _find(self, match, tok: Token, cmd: Command) -> Optional[str]:
        text = tok.value
        arg = cmd.find(match, text)
        if arg is not None:
            return arg

        # resolve the implicit --target to the compiler's effective triple
        if text.startswith(TARGET_FLAG) and cmd.find(scan.prefix, TARGET_FLAG) is None:
            def on_error(msg: str) -> NoReturn:
                self._fail(ResolutionError, tok, msg)

            resolved = cmd.append(self._targets.resolve(on_error=on_error))
            if match(text, resolved):
                return resolved
        return None

    # ------------------------------------------------------------------ #
    # Resolution                                                         #
    # ------------------------------------------------------------------ #
    def _append(self, t: Token, cmd: Command) -> str:
        return cmd.append(self._resolve(t))

    def _resolve(self, t: Token, *, canonicalize_target: bool = True) -> str:
        def on_error(msg: str) -> NoReturn:
            self._fail(ResolutionError, t, msg)

        arg = unquote(self._env.expand(t.value, on_error=on_error))

        if canonicalize_target and arg.startswith(TARGET_EQ):
            arg = self._targets.resolve(arg[len(TARGET_EQ):], on_error=on_error)
        return arg

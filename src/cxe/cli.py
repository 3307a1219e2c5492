from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn, Optional, Sequence

from cxe.constants import ENV_CXE, ENV_CXE_SRC_NAME
from cxe.core.interfaces import LoggerFactoryProtocol
from cxe.logging.factory import DefaultLoggerFactory
from cxe.logging.helpers import get_logger
from cxe.parsing.directives import PipelineBuilder
from cxe.parsing.flags import EXECUTE_FLAG, HELP_FLAGS
from cxe.parsing.source import CxeError
from cxe.parsing.usage import render_usage
from cxe.processing.envctx import ProcessEnvironment
from cxe.runtime.runner import PipelineRunner
from cxe.runtime.shell import Shell
from cxe.runtime.wiring import build_context

logger = get_logger('cxe')


def _configure_logging(enable_json: bool, verbose: bool = False) -> None:
    """Configure process-wide logging once, either JSON or plain text."""
    mode = (bool(enable_json), bool(verbose))
    if getattr(_configure_logging, '_configured_mode', None) == mode:
        return
    level = logging.DEBUG if verbose else logging.INFO
    factory: LoggerFactoryProtocol = DefaultLoggerFactory(json_logs=enable_json, level=level)
    global logger
    logger = factory.get_logger('cxe')
    setattr(_configure_logging, '_configured_mode', mode)


class Cxe:
    """Top-level façade: argv in, exit status out."""

    @staticmethod
    def run(
        argv: Sequence[str],
        *,
        environment=None,
        shell=None,
        chdir: bool = True,
    ) -> int:
        """Run cxe for a full argv (argv[0] is the executable) and return its status."""
        _configure_logging(os.getenv('CXE_JSON_LOGS') == '1', os.getenv('CXE_VERBOSE') == '1')

        options = list(argv[1:])
        if EXECUTE_FLAG in options:
            options = options[:options.index(EXECUTE_FLAG)]
        if len(argv) < 2 or HELP_FLAGS.intersection(options):
            print(render_usage())
            return 1

        environment = environment or ProcessEnvironment()
        shell = shell or Shell(logger=get_logger('shell'))

        ctx = build_context(argv, environment=environment, shell=shell)

        environment.set(ENV_CXE, ctx.exe_path)
        environment.set(ENV_CXE_SRC_NAME, ctx.src_name)
        if chdir and ctx.src_dir:
            os.chdir(ctx.src_dir)

        pipeline = PipelineBuilder.build_pipeline(ctx, environment=environment, shell=shell)
        runner = PipelineRunner(shell, environment=environment, quiet_prefix=ctx.exe_path)
        return runner.run(pipeline)


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Entry point for the `cxe` console script and `python -m cxe`."""
    try:
        raise SystemExit(Cxe.run(list(sys.argv if argv is None else argv)))
    except CxeError as exc:
        logger.error('%s', exc.format())
        raise SystemExit(exc.exit_code)
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('CXE_DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()

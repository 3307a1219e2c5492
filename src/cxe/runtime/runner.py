from __future__ import annotations

import logging
import os
from typing import Optional

from cxe.constants import DEFAULT_EXECUTABLE
from cxe.core.models import Command, Pipeline
from cxe.logging.helpers import get_logger


class PipelineRunner:
    """Run a pipeline command by command, stopping at the first failure.

    Each command line is echoed to stdout before it runs, except commands
    that re-invoke cxe itself (those echo their own commands).
    """

    def __init__(self, shell, *, environment=None, quiet_prefix: str = '', logger: Optional[logging.Logger] = None) -> None:
        self._shell = shell
        self._env = environment
        self._quiet = quiet_prefix
        self._log = logger or get_logger('runner')

    @staticmethod
    def qualify_program(program: str) -> str:
        """Resolve the artifact path against the working directory."""
        if program == DEFAULT_EXECUTABLE and not os.path.exists(program) and os.path.exists(program + '.out'):
            program += '.out'
        if '/' in program or '\\' in program:
            return program
        return os.path.join('.', program)

    def _argv(self, cmd: Command, pipeline: Pipeline) -> list:
        if cmd is pipeline.execute:
            return [self.qualify_program(cmd.args[0]), *cmd.args[1:]]
        return list(cmd.args)

    def run(self, pipeline: Pipeline) -> int:
        env = self._env.snapshot() if self._env is not None else None
        for cmd in pipeline:
            line = cmd.command_line()
            if not (self._quiet and line.startswith(self._quiet)):
                print(line, flush=True)

            status = self._shell.run(self._argv(cmd, pipeline), env=env)
            if status != 0:
                self._log.debug('command exited with %d, aborting: %s', status, line)
                return status
        return 0

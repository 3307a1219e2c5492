"""
Subprocess collaborators.

`Shell.run` spawns with inherited standard streams and blocks until exit;
`Shell.capture` additionally collects standard output, normalizes newlines
and trims it. A program that cannot be spawned yields `SPAWN_FAILURE`.
No call has a timeout.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Mapping, Optional, Sequence, Tuple

from cxe.logging.helpers import get_logger, trace_io

SPAWN_FAILURE = 127


class Shell:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('shell')

    def run(self, argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> int:
        trace_io(self._log, 'spawn', argv=list(argv))
        try:
            proc = subprocess.run(list(argv), env=dict(env) if env is not None else None)
        except OSError as exc:
            self._log.error('command not found: "%s" (%s)', argv[0] if argv else '', exc)
            return SPAWN_FAILURE
        trace_io(self._log, 'exit', argv=list(argv), status=proc.returncode)
        return proc.returncode

    def capture(self, argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> Tuple[int, str]:
        trace_io(self._log, 'capture', argv=list(argv))
        try:
            proc = subprocess.run(
                list(argv),
                stdout=subprocess.PIPE,
                env=dict(env) if env is not None else None,
                text=True,
                errors='replace',
            )
        except OSError as exc:
            self._log.error('command not found: "%s" (%s)', argv[0] if argv else '', exc)
            return SPAWN_FAILURE, ''
        out = (proc.stdout or '').replace('\r\n', '\n').strip()
        trace_io(self._log, 'captured', argv=list(argv), status=proc.returncode, out=out)
        return proc.returncode, out

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

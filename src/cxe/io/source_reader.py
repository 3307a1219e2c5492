"""Source file access for the directive block.

The source text kept in the run context runs from the start of the file
through the closing block marker, so directive tokens map back to real
file line numbers. Files without a complete block yield empty text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from cxe.constants import BLOCK_HEAD, BLOCK_TAIL
from cxe.logging.helpers import get_logger
from cxe.parsing.source import UsageError


def find_block(text: str, head: str = BLOCK_HEAD, tail: str = BLOCK_TAIL) -> Optional[Tuple[int, int]]:
    """Return the (start, end) offsets strictly between *head* and *tail*."""
    i = text.find(head)
    if i < 0:
        return None
    start = i + len(head)
    end = text.find(tail, start)
    if end < 0:
        return None
    return start, end


class SourceReader:
    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('io.source')

    def read(self, path: str) -> Tuple[str, Optional[Tuple[int, int]]]:
        """Return (source text, block span); ('', None) when no block exists."""
        try:
            text = Path(path).read_text(encoding='utf-8', errors='replace')
        except OSError as exc:
            raise UsageError(f'file not found: {path}') from exc

        span = find_block(text)
        if span is None:
            self._log.debug('no directive block in %s', path)
            return '', None
        return text[:span[1] + len(BLOCK_TAIL)], span

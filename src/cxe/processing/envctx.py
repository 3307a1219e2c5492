import logging
import os
from typing import Callable, Dict, Mapping, NoReturn, Optional

from cxe.logging.helpers import get_logger
from cxe.parsing.scan import Scanner, is_ident_char, is_ident_start
from cxe.parsing.source import ResolutionError

OnError = Callable[[str], NoReturn]


class ProcessEnvironment:
    """Environment capability backed by `os.environ`."""

    def get(self, name: str) -> Optional[str]:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(os.environ)


class MappingEnvironment:
    """In-memory environment capability; never touches the process."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(values or {})

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)


class EnvContext:
    """Expands `$NAME` references against an injected environment.

    After each substitution the argument is rescanned from the start, so a
    value may itself introduce further references. A value that reintroduces
    its own reference would never settle; expansion gives up with a
    `ResolutionError` after `max_substitutions` replacements.
    """

    def __init__(
            self,
            environment,
            *,
            logger: Optional[logging.Logger] = None,
            max_substitutions: int = 1024,
    ) -> None:
        self._env = environment
        self._log = logger or get_logger('processing.env')
        self._max = max_substitutions

    def _fatal(self, msg: str, on_error: Optional[OnError]) -> NoReturn:
        if on_error is not None:
            on_error(msg)
        raise ResolutionError(msg)

    def expand(self, text: str, *, on_error: Optional[OnError] = None) -> str:
        substitutions = 0
        pos = 0
        while True:
            sc = Scanner(text, pos)
            if not sc.seek('$'):
                return text
            dollar = sc.pos
            sc.skip('$')
            name_start = sc.pos
            if not sc.skip(is_ident_start):
                pos = name_start
                continue
            sc.skip_while(is_ident_char)
            name = text[name_start:sc.pos]

            value = self._env.get(name)
            if value is None:
                self._fatal('unresolved environment variable', on_error)
            substitutions += 1
            if substitutions > self._max:
                self._fatal('environment variable expansion does not terminate', on_error)

            self._log.debug('$%s -> %r', name, value)
            text = text[:dollar] + value + text[sc.pos:]
            pos = 0

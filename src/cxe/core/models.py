from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Tuple


class TokenOrigin(enum.Enum):
    """Backing text a token was cut from."""

    CLI = 'cli'
    SOURCE = 'source'


@dataclass(frozen=True)
class Token:
    """Immutable (start, length) view into one backing text.

    The backing string is shared, never copied; `value` materializes the
    viewed characters on demand.
    """

    origin: TokenOrigin
    start: int
    length: int
    text: str = field(default='', repr=False, compare=False)

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def value(self) -> str:
        return self.text[self.start:self.end]

    def sub(self, offset: int) -> 'Token':
        """Return the view that starts *offset* characters into this one."""
        offset = min(max(offset, 0), self.length)
        return Token(self.origin, self.start + offset, self.length - offset, self.text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return self.length == len(other) and self.text.startswith(other, self.start)
        if isinstance(other, Token):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __bool__(self) -> bool:
        return self.length > 0

    def __len__(self) -> int:
        return self.length

    def __str__(self) -> str:
        return self.value


Match = Callable[[str, str], bool]


@dataclass
class Command:
    """Owned, ordered argument list for one process invocation."""

    args: List[str] = field(default_factory=list)

    def append(self, arg: str) -> str:
        self.args.append(arg)
        return arg

    def find(self, match: Match, expect: str) -> Optional[str]:
        """Return the first argument for which ``match(expect, arg)`` holds."""
        for arg in self.args:
            if match(expect, arg):
                return arg
        return None

    def command_line(self) -> str:
        return ' '.join(self.args)

    @property
    def program(self) -> Optional[str]:
        return self.args[0] if self.args else None

    def __iter__(self) -> Iterator[str]:
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)

    def __bool__(self) -> bool:
        return bool(self.args)

    def __getitem__(self, index):
        return self.args[index]


@dataclass
class Pipeline:
    """Commands in strict execution order: pre, compile, post, execute."""

    compile: Command
    pre: List[Command] = field(default_factory=list)
    post: List[Command] = field(default_factory=list)
    execute: Optional[Command] = None

    def commands(self) -> List[Command]:
        out: List[Command] = [*self.pre, self.compile, *self.post]
        if self.execute is not None:
            out.append(self.execute)
        return out

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands())

    def __len__(self) -> int:
        return len(self.pre) + 1 + len(self.post) + (self.execute is not None)


@dataclass(frozen=True)
class Context:
    """Read-only facts about one run, built once before parsing."""

    exe_path: str
    exe_name: str
    cli_text: str
    src_text: str
    src_path: str
    src_name: str
    src_dir: str
    compiler_path: str
    block_span: Optional[Tuple[int, int]] = None

    @property
    def src_file_name(self) -> str:
        """Source path with its directory stripped."""
        return self.src_path.rsplit('/', 1)[-1]

    @property
    def compiler_is_clang(self) -> bool:
        return 'clang' in self.compiler_path

    @property
    def compiler_is_gcc(self) -> bool:
        return 'gcc' in self.compiler_path

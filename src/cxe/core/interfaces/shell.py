from __future__ import annotations
from typing import Mapping, Optional, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class ShellProtocol(Protocol):
    """Process-spawning collaborator used by target resolution and the runner."""

    def run(self, argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> int:
        """Spawn with inherited standard streams and return the exit code."""
        ...

    def capture(self, argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> Tuple[int, str]:
        """Spawn, capture standard output and return (exit code, trimmed text)."""
        ...

    def which(self, name: str) -> Optional[str]:
        ...

from __future__ import annotations
from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class EnvironmentProtocol(Protocol):
    """Key-value view of environment variables, one variable at a time."""

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...

    def snapshot(self) -> Dict[str, str]:
        """Return a copy suitable as a child-process environment."""
        ...

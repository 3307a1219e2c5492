from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """Logging surface cxe components write to (diagnostics and traces)."""

    def debug(self, msg: str, *args, **kwargs) -> None: ...

    def error(self, msg: str, *args, **kwargs) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Configures the 'cxe' base logger and hands out children of it."""

    def get_logger(self, name: str) -> LoggerLikeProtocol:
        ...

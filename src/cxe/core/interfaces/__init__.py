from .env import EnvironmentProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .shell import ShellProtocol

__all__ = [
    'EnvironmentProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'ShellProtocol',
]

from __future__ import annotations

from cxe.cli import Cxe, main
from cxe.constants import BLOCK_HEAD, BLOCK_TAIL, DEFAULT_EXECUTABLE
from cxe.core.models import Command, Context, Pipeline, Token, TokenOrigin
from cxe.parsing.directives import PipelineBuilder
from cxe.parsing.source import (
    CxeError,
    DirectiveSyntaxError,
    Location,
    LocationMapper,
    ResolutionError,
    UsageError,
)
from cxe.parsing.tokenizer import DirectiveTokenizer, TokenCursor
from cxe.processing.envctx import EnvContext, MappingEnvironment, ProcessEnvironment
from cxe.processing.target import TargetResolver

__version__ = '1.0.0'

__all__ = [
    'Cxe',
    'main',
    'BLOCK_HEAD',
    'BLOCK_TAIL',
    'DEFAULT_EXECUTABLE',
    'Command',
    'Context',
    'Pipeline',
    'Token',
    'TokenOrigin',
    'PipelineBuilder',
    'CxeError',
    'DirectiveSyntaxError',
    'Location',
    'LocationMapper',
    'ResolutionError',
    'UsageError',
    'DirectiveTokenizer',
    'TokenCursor',
    'EnvContext',
    'MappingEnvironment',
    'ProcessEnvironment',
    'TargetResolver',
]

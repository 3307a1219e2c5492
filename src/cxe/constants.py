"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

from __future__ import annotations

# Markers delimiting the directive block inside a C/C++ source file.
BLOCK_HEAD: str = '/' '*cxe{'
BLOCK_TAIL: str = '}*' '/'

# First argument of the execute command when no output path was recorded.
DEFAULT_EXECUTABLE: str = 'a'

# Variables exported to directives and hook commands.
ENV_CXE: str = 'CXE'
ENV_CXE_SRC_NAME: str = 'CXE_SRC_NAME'

CPP_SUFFIXES = ('.cpp', '.cxx', '.c++', '.cc')
C_SUFFIXES = ('.c',)

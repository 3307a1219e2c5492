"""
flags – Canonical directive keywords and output-path flag forms.

Exports
-------
HELP_FLAGS, IF_FLAG, PRE_FLAG, POST_FLAG, EXECUTE_FLAG
    Directive keywords recognized anywhere in a stream.
AND_OPS, OR_OPS
    Conditional chain operators.
OUTPUT_*
    Spellings that record the output path of the compiled artifact.
OUTPUT_DECOYS
    Compiler flag families sharing the '-o' prefix that are *not* output paths.
"""
from typing import FrozenSet, Tuple

HELP_FLAGS: FrozenSet[str] = frozenset({"-help", "--help"})
IF_FLAG = "-if"
PRE_FLAG = "-pre"
POST_FLAG = "-post"
EXECUTE_FLAG = "--"

AND_OPS: FrozenSet[str] = frozenset({"&&", "and"})
OR_OPS: FrozenSet[str] = frozenset({"||", "or"})

OUTPUT_SHORT = "-o"
OUTPUT_LONG = "--output"
OUTPUT_LONG_EQ = "--output="
OUTPUT_DECOYS: Tuple[str, ...] = ("-objcmt-", "-objcmd-", "-object-")

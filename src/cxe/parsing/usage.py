# cxe/parsing/usage.py
from __future__ import annotations

import argparse

_EXAMPLE = """\
Options embedded in <file> are interpreted as though appended to the
[options] given on the command line. Embed them in a C/C++ source file as:

    /*cxe{ [cc/cxx/cxe options] }*/

Example:

    /*cxe{
        -std=c++20
        -I$VULKAN_SDK/include
        -if (--target=[windows]) {   # options if compiling for Windows
            -lgdi32 -luser32 -lshell32
            -o ../bin/windows/hello.exe
        }
        -if (--target=[darwin]) {    # options if compiling for macOS
            -framework Cocoa -framework OpenGL
            -o ../bin/macos/hello
        }
        -lglfw3
    }*/

New lines and '#' or '//' comments inside the block are ignored, so without
a matching target the example compiles as:

    -std=c++20 -I$VULKAN_SDK/include -lglfw3 <file>
"""


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser used to render cxe's help text.

    Notes:
        - Options after <file> are passed through to the compiler verbatim,
          so this parser documents the interface; it does not consume argv.
    """
    p = argparse.ArgumentParser(
        prog="cxe",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s <file> [options] [file...] [-- [run-options]]",
        add_help=False,
        description="cxe – C/C++ meta compiler/executor\n\n" + _EXAMPLE,
        epilog=(
            "--  [run-options]    Execute the compiled artifact, passing every\n"
            "                     following option to it."
        ),
    )

    g_pos = p.add_argument_group("Arguments")
    g_dir = p.add_argument_group("Directives")

    g_pos.add_argument("file", help="C/C++ source file (.c, .cc, .cpp, .cxx, .c++).")
    g_pos.add_argument(
        "options",
        nargs="*",
        help="Compiler options, cxe directives and extra input files.",
    )

    g_dir.add_argument("-help", "--help", action="store_true", help="Print this message.")
    g_dir.add_argument(
        "-if",
        metavar="(...) {...}",
        help=(
            "Conditional options. Conditionals only see options given\n"
            "before the -if.\n\n"
            "    -if (-DRELEASE) { -O3 }\n"
            "    -if (--target=[windows]) { -lgdi32 }\n\n"
            "Without an explicit --target=, the compiler is asked for its\n"
            "effective target triple."
        ),
    )
    g_dir.add_argument(
        "-pre",
        metavar="{...}",
        help=(
            "Run a command before compiling. A failing command aborts the\n"
            "run with its exit code. CXE=<path to cxe> is exported."
        ),
    )
    g_dir.add_argument(
        "-post",
        metavar="{...}",
        help="Run a command after compiling successfully. CXE is exported.",
    )
    return p


def render_usage() -> str:
    return _build_parser().format_help()

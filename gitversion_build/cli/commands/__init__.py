"""
Click command implementations for the gitversion-build CLI.

Each module corresponds to one command and is registered with the main
group by register_commands() in gitversion_build.cli.
"""

from .generate import generate
from .show import show

COMMANDS = [
    generate,
    show,
]

__all__ = [
    "COMMANDS",
    "generate",
    "show",
]

"""
buildjs - Text macro expansion for source files

Expands /*buildjs ... */ directive blocks: @def substitutions and @inc
file inclusion, recursively.
"""

__version__ = "1.0.0"

from .parser import Parser
from .builder import Builder, build, to_file
from .commands import CommandRegistry
from .log import LOG, state_connectToLogger

__all__ = [
    "Parser",
    "Builder",
    "CommandRegistry",
    "build",
    "to_file",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

"""
buildjs - Text macro expansion for source files

Expands /*buildjs ... */ directive blocks: @def substitutions and @inc
file inclusion, recursively.
"""

__version__ = "1.0.0"

from .lib import Parser, Builder, CommandRegistry, build, to_file, LOG, state_connectToLogger
from .models import BuildError, MacroError, CommandSpec

__all__ = [
    "Parser",
    "Builder",
    "CommandRegistry",
    "CommandSpec",
    "BuildError",
    "MacroError",
    "build",
    "to_file",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

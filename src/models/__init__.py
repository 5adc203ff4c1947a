"""
Models package for buildjs

Contains data structures and type definitions for the expansion pipeline.
"""

from .state import ProgramState, pipeline
from .commands import CommandSpec, BuildFrame
from .parser import Token, TokenKind, BlockMatch, ParsedArgument, Invocation
from .errors import (
    MacroError,
    ParseError,
    UnmatchedTokenError,
    InvalidCommandError,
    ArityError,
    MissingFileError,
    IncludeCycleError,
    OutputPathError,
    BuildError,
    ErrorFrame,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "CommandSpec",
    "BuildFrame",
    "Token",
    "TokenKind",
    "BlockMatch",
    "ParsedArgument",
    "Invocation",
    "MacroError",
    "ParseError",
    "UnmatchedTokenError",
    "InvalidCommandError",
    "ArityError",
    "MissingFileError",
    "IncludeCycleError",
    "OutputPathError",
    "BuildError",
    "ErrorFrame",
]

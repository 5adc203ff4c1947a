"""
Parser-specific data models

Type-safe structures for lexer and parser operations and return values.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple

from .commands import CommandSpec


BLANK = re.compile(r"[ \t\n\r]+")


class TokenKind(Enum):
    """
    Categories of tokens found inside a directive block
    """
    DIRECTIVE = "directive"    # @def, @inc
    STRING = "string"          # "a.js", 'x'
    WORD = "word"              # identifiers, numbers, $names
    CHAR = "char"              # any other single character, whitespace included


class Token(NamedTuple):
    """Immutable token produced by the lexer"""
    kind: TokenKind
    value: str
    position: int

    @property
    def blank(self) -> bool:
        """True for whitespace tokens, which separate arguments"""
        return BLANK.fullmatch(self.value) is not None


@dataclass
class BlockMatch:
    """
    A directive block located in source text

    Returned by Parser.block_find() when the open/close marker pair is found.

    Attributes:
        start: Offset of the open marker in the current text
        end: Offset just past the close marker
        body: Text between the markers

    Example:
        For source "a/*buildjs @inc b.js */c" searched from 0:
        BlockMatch(start=1, end=23, body=" @inc b.js ")
    """
    start: int
    end: int
    body: str


class ParsedArgument(NamedTuple):
    """
    Result of consuming one argument from the token tuple

    Attributes:
        text: The argument, token values joined verbatim
        cursor: Index of the first token after the argument
    """
    text: str
    cursor: int


@dataclass
class Invocation:
    """
    One parsed @name arg... call

    Attributes:
        spec: Registry entry for the command
        args: Argument strings, len(args) == spec.arity
    """
    spec: CommandSpec
    args: List[str]

"""
Parser for /*buildjs ... */ directive blocks

Turns the body of one directive block into an ordered list of command
invocations.

The parser operates in three steps:
1. Scanning: Locate the next open/close marker pair in the source text
2. Tokenizing: Split the block body with the Pygments lexer
3. Dispatching: Walk the tokens, look each @name up in the registry and
   collect exactly `arity` bracket-balanced arguments for it

Tokens are held in an immutable tuple; helpers take a cursor and return
the next one instead of consuming a shared queue.

Example:
    >>> parser = Parser()
    >>> [(i.spec.name, i.args) for i in parser.parse(' @def A (1 + 2) @inc "b.js" ')]
    [('def', ['A', '(1 + 2)']), ('inc', ['"b.js"'])]
"""

from typing import Dict, List, Optional, Tuple

from ..config import AppSettings, appsettings
from ..models.errors import ArityError, InvalidCommandError, UnmatchedTokenError
from ..models.parser import BlockMatch, Invocation, ParsedArgument, Token, TokenKind
from .commands import CommandRegistry
from .lexer import tokens_make
from .log import LOG


# Closing bracket -> opening bracket whose counter it decrements
BRACKETS: Dict[str, str] = {')': '(', ']': '[', '}': '{'}


class Parser:
    """
    Parser for the buildjs macro language

    Handles:
    - Block location by literal open/close markers
    - Command lookup in a CommandRegistry
    - Arguments that contain blanks inside (), [] or {}
    - Quoted arguments ("a b.js" is one token)
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize parser

        Args:
            registry: CommandRegistry used to resolve @names
                      (defaults to a registry with the built-in commands)
            settings: AppSettings providing the block markers
                      (defaults to the module singleton)
        """
        self.registry = registry if registry is not None else CommandRegistry()
        self.settings = settings or appsettings
        self.block_pattern = self.settings.blockPattern_make()

    def block_find(self, text: str, start: int = 0) -> Optional[BlockMatch]:
        """
        Find the next directive block at or after `start`

        Args:
            text: Current text of the file being expanded
            start: Offset to search from

        Returns:
            BlockMatch for the leftmost block, or None when there is none

        Example:
            For text "x/*buildjs @inc a.js */y" from 0:
            Returns BlockMatch(start=1, end=23, body=" @inc a.js ")
        """
        match = self.block_pattern.search(text, start)
        if not match:
            return None
        return BlockMatch(start=match.start(), end=match.end(), body=match.group('body'))

    def whitespace_skip(self, tokens: Tuple[Token, ...], cursor: int) -> int:
        """Return the index of the first non-blank token at or after `cursor`"""
        while cursor < len(tokens) and tokens[cursor].blank:
            cursor += 1
        return cursor

    def argument_parse(self, tokens: Tuple[Token, ...], cursor: int) -> ParsedArgument:
        """
        Consume one argument starting at `cursor`

        Tokens are appended until the tokens run out, or the next token is
        blank while no bracket is open. Each bracket kind has its own
        counter, and only a counter left positive is an error: an extra
        closing bracket such as "a)" passes unnoticed.

        Args:
            tokens: Token tuple of the block
            cursor: Index of the first token of the argument

        Returns:
            ParsedArgument with the argument text and the next cursor

        Raises:
            UnmatchedTokenError: If a bracket counter is still positive
                                 when the argument ends

        Example:
            For tokens of "(a b) c" at cursor 0:
            Returns ParsedArgument(text="(a b)", cursor=5)

            Depth tracking: (1 a b )0 → blank with all counters at 0 ends it
        """
        levels = {'(': 0, '[': 0, '{': 0}
        parts: List[str] = []

        while cursor < len(tokens):
            token = tokens[cursor]
            if token.blank and not any(level > 0 for level in levels.values()):
                break
            if token.value in levels:
                levels[token.value] += 1
            elif token.value in BRACKETS:
                levels[BRACKETS[token.value]] -= 1
            parts.append(token.value)
            cursor += 1

        for bracket, level in levels.items():
            if level > 0:
                raise UnmatchedTokenError(bracket)

        return ParsedArgument(text=''.join(parts), cursor=cursor)

    def parse(self, body: str) -> List[Invocation]:
        """
        Parse a block body into command invocations

        Blank runs between commands are skipped, and so is any other
        token that is not an @name. A lone "@" is an @name with an empty
        name and fails the registry lookup. The whole body is parsed before any
        invocation runs, so a malformed block has no partial effect.

        Args:
            body: Block text between the markers

        Returns:
            Invocations in source order

        Raises:
            InvalidCommandError: For an @name missing from the registry
            ArityError: If the block ends before a command has all its arguments
            UnmatchedTokenError: For an argument with an unclosed bracket

        Example:
            >>> parser = Parser()
            >>> parser.parse(' @def A')
            Traceback (most recent call last):
                ...
            buildjs.models.errors.ArityError: Expected 2 arguments for @def, but only 1 was found
        """
        tokens = tokens_make(body)
        invocations: List[Invocation] = []
        cursor = 0

        while cursor < len(tokens):
            token = tokens[cursor]
            cursor += 1
            if token.kind is TokenKind.DIRECTIVE or token.value == '@':
                name = token.value[1:]
                spec = self.registry.spec_get(name)
                if spec is None:
                    raise InvalidCommandError(name)
                cursor = self.whitespace_skip(tokens, cursor)

                args: List[str] = []
                while cursor < len(tokens) and len(args) < spec.arity:
                    argument = self.argument_parse(tokens, cursor)
                    args.append(argument.text)
                    cursor = self.whitespace_skip(tokens, argument.cursor)

                if len(args) < spec.arity:
                    raise ArityError(name, spec.arity, len(args))

                LOG(f"Parsed @{name} {' '.join(args)}", level=3)
                invocations.append(Invocation(spec=spec, args=args))
            cursor = self.whitespace_skip(tokens, cursor)

        return invocations

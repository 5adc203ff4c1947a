"""
Pygments lexer for buildjs directive blocks

The same lexer serves two purposes: tokens_make() turns the body of a
directive block into the token tuple the parser walks, and
block_highlight() colours a block for verbose diagnostics.

Token types:
- Name.Function: Directive names (e.g., @def, @inc)
- String.Double / String.Single: Quoted strings, no escape handling
- Name: Runs of word characters and $
- Whitespace: One blank character per token
- Punctuation: Any other single character (brackets included)
"""

from typing import Tuple

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer
from pygments.token import Name, String, Whitespace, Punctuation

from ..models.parser import Token, TokenKind


class BuildjsLexer(RegexLexer):
    """
    Lexer for the macro language inside /*buildjs ... */ blocks

    Example:
        @def VERSION "1.0"  @inc (lib/a.js)

    Tokens:
        @def → Name.Function
        VERSION → Name
        "1.0" → String.Double
        ( → Punctuation
    """

    name = 'Buildjs'
    aliases = ['buildjs']
    filenames = []

    tokens = {
        'root': [
            (r'@\w+', Name.Function),
            # Non-greedy, and '.' stops at newlines
            (r'".*?"', String.Double),
            (r"'.*?'", String.Single),
            (r'[\w$]+', Name),
            (r'[ \t\n\r]', Whitespace),
            (r'[\s\S]', Punctuation),
        ],
    }


# Checked in order: Name.Function is itself a subtype of Name
_KINDS = (
    (Name.Function, TokenKind.DIRECTIVE),
    (String, TokenKind.STRING),
    (Name, TokenKind.WORD),
)

_lexer = BuildjsLexer()


def tokenKind_classify(ttype) -> TokenKind:
    """Map a Pygments token type onto a TokenKind"""
    for parent, kind in _KINDS:
        if ttype in parent:
            return kind
    return TokenKind.CHAR


def tokens_make(text: str) -> Tuple[Token, ...]:
    """
    Split a directive block body into tokens

    Every character of `text` belongs to exactly one token, so joining
    the token values gives back `text`.

    Args:
        text: Block body with the open/close markers already stripped

    Returns:
        Tuple of Token in source order

    Example:
        >>> [t.value for t in tokens_make(' @inc "a.js"')]
        [' ', '@inc', ' ', '"a.js"']
    """
    return tuple(
        Token(kind=tokenKind_classify(ttype), value=value, position=position)
        for position, ttype, value in _lexer.get_tokens_unprocessed(text)
    )


def block_highlight(text: str) -> str:
    """Colour a block body for terminal output"""
    return highlight(text, _lexer, TerminalFormatter()).rstrip('\n')


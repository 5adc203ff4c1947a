"""
Exception types for buildjs

Every engine failure derives from MacroError. Failures raised while a file
is being expanded are wrapped once in a BuildError, which then collects one
(file, line) frame per nesting level as it unwinds through @inc.
"""

from dataclasses import dataclass
from typing import List, Optional


class MacroError(Exception):
    """Base class for all buildjs failures"""
    pass


class ParseError(MacroError):
    """Raised when a directive block is malformed"""
    pass


class UnmatchedTokenError(ParseError):
    """An argument ended with an open bracket still pending"""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unmatched token '{token}'")


class InvalidCommandError(ParseError):
    """An @name that is not in the registry"""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid command @{name}")


class ArityError(ParseError):
    """The block ended before a command received all of its arguments"""

    def __init__(self, name: str, expected: int, found: int) -> None:
        self.name = name
        self.expected = expected
        self.found = found
        noun = "argument" if expected == 1 else "arguments"
        verb = "was" if found == 1 else "were"
        super().__init__(
            f"Expected {expected} {noun} for @{name}, but only {found} {verb} found"
        )


class MissingFileError(MacroError):
    """Source or included file does not exist"""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found '{path}'")


class IncludeCycleError(MacroError):
    """A file includes itself, directly or through other files"""

    def __init__(self, chain: List[str]) -> None:
        self.chain = chain
        super().__init__("Include cycle: " + " -> ".join(chain))


class OutputPathError(MacroError):
    """No output file was given to the assembler"""

    def __init__(self) -> None:
        super().__init__("You must define an output file")


@dataclass(frozen=True)
class ErrorFrame:
    """One (file, line) entry of the error context stack; line is 0-based"""
    file: str
    line: int

    def __str__(self) -> str:
        return f"at {self.file}:{self.line}"


class BuildError(MacroError):
    """
    A failure annotated with where it happened

    The first frame to see a raw failure wraps it with its own file and
    line; every frame, the first included, then appends itself to
    `frames`. Frames are therefore ordered innermost first.

    Attributes:
        message: Root-cause message, never altered while unwinding
        file: File where the failure was first observed
        line: 0-based line of the offending block in that file
        frames: Error context stack, innermost first
    """

    def __init__(self, message: str, file: Optional[str] = None, line: Optional[int] = None) -> None:
        self.message = message
        self.file = file
        self.line = line
        self.frames: List[ErrorFrame] = []
        super().__init__(message)

    def frame_push(self, file: str, line: int) -> "BuildError":
        """Append the current (file, line) and return self for re-raising"""
        self.frames.append(ErrorFrame(file=file, line=line))
        return self

    def diagnostic_render(self) -> str:
        """
        Render the message followed by one trace line per frame

        Example:
            Invalid command @bogus
                at lib/c.js:0
                at lib/b.js:2
                at main.js:4
        """
        lines = [self.message]
        lines.extend(f"    {frame}" for frame in self.frames)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.diagnostic_render()

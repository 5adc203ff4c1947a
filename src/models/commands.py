"""
Command specification and build frame models

Defines the structure of buildjs commands for the registry, and the
frame that describes one activation of file expansion.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple


@dataclass(frozen=True)
class CommandSpec:
    """
    Specification for a buildjs command

    Defines metadata and the handler for an @name directive.
    Used by CommandRegistry to manage available commands.

    Attributes:
        name: Command name (without leading @)
        arity: Number of arguments the command requires
        handler: Expansion function
                 (*args, frame, text, index, builder) -> str
        description: Human-readable description
        examples: Example usage strings
    """
    name: str
    arity: int
    handler: Callable[..., str]
    description: str = ""
    examples: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BuildFrame:
    """
    One activation of file expansion

    Frames nest through @inc, forming an implicit call stack. The base
    directory travels with the frame instead of living in the process
    working directory.

    Attributes:
        path: File path as written by the caller or the @inc directive
        basedir: Directory `path` is resolved against (None: as given)
        active: Resolved files currently being expanded, outermost first
    """
    path: Path
    basedir: Optional[Path] = None
    active: Tuple[Path, ...] = ()

    @property
    def resolved(self) -> Path:
        """Path of the file on disk"""
        if self.basedir is None:
            return self.path
        return self.basedir / self.path

    @property
    def directory(self) -> Path:
        """Directory that relative @inc paths inside this file resolve against"""
        return self.resolved.parent

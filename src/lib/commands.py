"""
Command implementations for buildjs

Each command rewrites the accumulated text of the file being expanded.
Uses CommandSpec for metadata and arity.
"""

import re
from typing import Dict, List, Optional

from ..models.commands import BuildFrame, CommandSpec


QUOTED = re.compile(r'".*"')


class CommandRegistry:
    """
    Registry of command specifications and handlers

    Maps @names to CommandSpec objects. The built-in commands are
    registered on construction; more can be added with register() before
    a build starts. A name can only be registered once.
    """

    def __init__(self) -> None:
        """Initialize the command registry and register the built-in commands"""
        self.specs: Dict[str, CommandSpec] = {}
        self.builtinCommands_register()

    def register(self, spec: CommandSpec) -> None:
        """
        Register a command specification

        Raises:
            ValueError: If the name is already taken or the arity is negative
        """
        if spec.name in self.specs:
            raise ValueError(f"Command @{spec.name} is already registered")
        if spec.arity < 0:
            raise ValueError(f"Command @{spec.name} has negative arity {spec.arity}")
        self.specs[spec.name] = spec

    def spec_get(self, name: str) -> Optional[CommandSpec]:
        """Get command specification by name (without the leading @)"""
        return self.specs.get(name)

    def names_list(self) -> List[str]:
        """Registered command names, sorted"""
        return sorted(self.specs)

    def builtinCommands_register(self) -> None:
        """Register @def and @inc"""

        def def_handler(name: str, value: str, *, frame: BuildFrame, text: str, index: int, builder) -> str:
            """Handle @def - literal replacement across the whole current text"""
            return text.replace(name, value)

        def inc_handler(path: str, *, frame: BuildFrame, text: str, index: int, builder) -> str:
            """Handle @inc - splice the expanded file in where the block was"""
            if QUOTED.fullmatch(path):
                path = path[1:-1]
            included = builder.file_expand(path, basedir=frame.directory, active=frame.active)
            return text[:index] + included + text[index:]

        self.register(CommandSpec(
            name='def',
            arity=2,
            handler=def_handler,
            description='Replace every occurrence of a name with a value',
            examples=['/*buildjs @def DEBUG false */']
        ))

        self.register(CommandSpec(
            name='inc',
            arity=1,
            handler=inc_handler,
            description='Include another file, expanded, relative to this one',
            examples=['/*buildjs @inc "lib/util.js" */', '/*buildjs @inc header.js */']
        ))

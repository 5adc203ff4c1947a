"""
Builder for buildjs sources

Expands the directive blocks of a file, recursing into included files,
and assembles the expansions of several files into one output.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..config import AppSettings, appsettings
from ..models.commands import BuildFrame
from ..models.errors import BuildError, IncludeCycleError, MacroError, MissingFileError, OutputPathError
from ..models.parser import Invocation
from .commands import CommandRegistry
from .lexer import block_highlight
from .log import LOG, verbosity_get
from .parser import Parser


PathArg = Union[str, "os.PathLike[str]"]


class Builder:
    """
    Expands buildjs directive blocks

    Responsibilities:
    - Locate directive blocks in a file and remove them from the output
    - Run each block's commands in order on the accumulated text
    - Resolve @inc relative to the including file, recursively
    - Annotate failures with the (file, line) of every enclosing block
    - Concatenate several top-level files into one output file

    The directory each file's includes resolve against is carried in its
    BuildFrame; the process working directory is never changed.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize builder

        Args:
            registry: Commands available to blocks (built-ins by default)
            settings: Markers, encoding and cycle detection (module singleton by default)
        """
        self.settings = settings or appsettings
        self.registry = registry or CommandRegistry()
        self.parser = Parser(registry=self.registry, settings=self.settings)

    def build(self, path: PathArg, basedir: Optional[PathArg] = None) -> str:
        """
        Expand one top-level file

        Args:
            path: File to expand
            basedir: Directory `path` is relative to (default: as given)

        Returns:
            Fully expanded text

        Raises:
            BuildError: For any failure; str() gives the message followed
                        by one "at file:line" line per nesting level
        """
        try:
            return self.file_expand(path, basedir=basedir)
        except BuildError:
            raise
        except (MacroError, OSError, UnicodeDecodeError) as e:
            raise BuildError(str(e), file=str(path)) from e

    def file_expand(
        self,
        path: PathArg,
        basedir: Optional[PathArg] = None,
        active: Tuple[Path, ...] = (),
    ) -> str:
        """
        Expand every directive block of a file

        Blocks are processed left to right. After each block the search
        resumes where the block began, so text it produced is scanned
        again.

        Args:
            path: File to expand, relative to `basedir`
            basedir: Directory of the including file (None: as given)
            active: Resolved files being expanded by enclosing frames

        Returns:
            Fully expanded text

        Raises:
            MissingFileError: If the file does not exist
            IncludeCycleError: If the file is already being expanded
            BuildError: If a block fails; carries this file's frame
        """
        frame = BuildFrame(
            path=Path(path),
            basedir=Path(basedir) if basedir is not None else None,
            active=active,
        )
        resolved = frame.resolved

        if not resolved.is_file():
            raise MissingFileError(str(path))

        key = resolved.resolve()
        if self.settings.detect_include_cycles and key in active:
            raise IncludeCycleError([str(p) for p in active] + [str(key)])
        frame = BuildFrame(path=frame.path, basedir=frame.basedir, active=active + (key,))

        display = str(resolved)
        LOG(f"Expanding {display}", level=2)

        # newline='' keeps \r\n intact in the output
        with open(resolved, 'r', encoding=self.settings.encoding, newline='') as f:
            text = f.read()

        position = 0
        while True:
            block = self.parser.block_find(text, position)
            if block is None:
                break

            try:
                if verbosity_get() >= 3:
                    LOG(f"Block in {display}:\n{block_highlight(block.body)}", level=3)
                invocations = self.parser.parse(block.body)
                text = text[:block.start] + text[block.end:]
                text = self.commands_execute(invocations, frame, text, block.start)
            except Exception as e:
                line = text.count('\n', 0, block.start)
                if isinstance(e, BuildError):
                    raise e.frame_push(display, line)
                error = BuildError(str(e), file=display, line=line)
                raise error.frame_push(display, line) from e

            position = block.start

        LOG(f"Expanded {display} ({len(text)} characters)", level=2)
        return text

    def commands_execute(
        self, invocations: List[Invocation], frame: BuildFrame, text: str, index: int
    ) -> str:
        """
        Run a block's invocations in source order

        Each handler gets its arguments followed by the frame, the current
        text and the offset where the block began, and returns the text
        the next handler works on.

        Args:
            invocations: Parsed commands of one block
            frame: Frame of the file being expanded
            text: Current text with the block already removed
            index: Offset where the block began

        Returns:
            Text after the last invocation
        """
        for invocation in invocations:
            text = invocation.spec.handler(
                *invocation.args, frame=frame, text=text, index=index, builder=self
            )
        return text

    def files_build(
        self, paths: Union[PathArg, Sequence[PathArg]], basedir: Optional[PathArg] = None
    ) -> str:
        """
        Expand several top-level files and concatenate them in order

        Args:
            paths: One path or a sequence of paths
            basedir: Directory the paths are relative to

        Returns:
            Concatenated expansions
        """
        if isinstance(paths, (str, os.PathLike)):
            paths = [paths]
        return ''.join(self.build(path, basedir=basedir) for path in paths)

    def output_write(
        self,
        paths: Union[PathArg, Sequence[PathArg]],
        outfile: Optional[PathArg],
        basedir: Optional[PathArg] = None,
    ) -> Path:
        """
        Expand files and write the concatenation to `outfile`

        Args:
            paths: One path or a sequence of paths, relative to `basedir`
            outfile: Output path, relative to `basedir`
            basedir: Base directory (default: current working directory)

        Returns:
            Path of the written file

        Raises:
            OutputPathError: If no output path is given
            BuildError: If any input fails to expand
        """
        if not outfile:
            raise OutputPathError()
        base = Path(basedir) if basedir else Path.cwd()
        return self.text_write(self.files_build(paths, basedir=base), outfile, basedir=base)

    def text_write(
        self, text: str, outfile: Optional[PathArg], basedir: Optional[PathArg] = None
    ) -> Path:
        """
        Write already expanded text to `outfile`

        Args:
            text: Expanded source
            outfile: Output path, relative to `basedir`
            basedir: Base directory (default: current working directory)

        Returns:
            Path of the written file

        Raises:
            OutputPathError: If no output path is given
        """
        if not outfile:
            raise OutputPathError()
        target = (Path(basedir) if basedir else Path.cwd()) / outfile
        with open(target, 'w', encoding=self.settings.encoding, newline='') as f:
            f.write(text)
        LOG(f"Wrote {target} ({len(text)} characters)", level=2)
        return target


def build(path: PathArg, basedir: Optional[PathArg] = None) -> str:
    """Expand one file with the built-in commands"""
    return Builder().build(path, basedir=basedir)


def to_file(
    paths: Union[PathArg, Sequence[PathArg]],
    outfile: Optional[PathArg],
    basedir: Optional[PathArg] = None,
) -> Path:
    """Expand files with the built-in commands and write them to `outfile`"""
    return Builder().output_write(paths, outfile, basedir=basedir)

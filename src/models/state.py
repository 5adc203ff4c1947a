"""
Build state and stage runner for the command-line pipeline

ProgramState is handed from stage to stage; each stage returns an updated
copy. pipeline() runs the stages left to right.
"""

import dataclasses
from argparse import Namespace
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar


PS = TypeVar("PS", bound="ProgramState")
Stage = Callable[["ProgramState"], "ProgramState"]


@dataclass
class ProgramState:
    """
    State bus for the buildjs pipeline.

    Fields by stage:
        - CLI: inputdir, outputdir, verbosity, inputFiles, outputFile
        - env_check: inputSourceFiles, outputTarget, envOK
        - source_build: builtSource
        - output_write: buildResult
        - results_report: nothing new

    Attributes:
        inputdir: Base directory of the input files
        outputdir: Base directory of the output file
        verbosity: 1 normal, 2 per-file, 3 per-block
        inputFiles: Input names relative to inputdir, in output order
        outputFile: Output name relative to outputdir
        envOK: The output directory is ready
        inputSourceFiles: inputdir / name for every input
        outputTarget: outputdir / outputFile
        builtSource: Concatenated expansion of all inputs
        buildResult: output_file, file_count and characters of the written file
    """

    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFiles: List[str] = field(default_factory=list)
    outputFile: str = field(default="")

    envOK: bool = field(default=False)
    inputSourceFiles: List[Path] = field(default_factory=list)
    outputTarget: Path = field(default=Path("/"))
    builtSource: Optional[str] = field(default=None)
    buildResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls, options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Build the initial state from parsed CLI options.

        Options without a matching field (chris_plugin adds a few) are
        dropped.

        Args:
            options: argparse Namespace (inputFiles, outputFile, verbosity)
            inputdir: Directory holding the input files
            outputdir: Directory receiving the output file
        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {name: value for name, value in vars(options).items() if name in known}
        kwargs.update(inputdir=inputdir, outputdir=outputdir)
        return cls(**kwargs)

    def copy(self: PS) -> PS:
        """Shallow copy, so a stage never modifies its input state"""
        return dataclasses.replace(self)


def pipeline(initial_state: ProgramState, *stages: Stage) -> ProgramState:
    """
    Run stages in order, feeding each the state returned by the previous one.

    pipeline(s, env_check, source_build) == source_build(env_check(s))
    """
    state = initial_state
    for stage in stages:
        state = stage(state)
    return state

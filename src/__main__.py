#!/usr/bin/env python3
"""
buildjs - Text macro expansion for source files

Expands /*buildjs ... */ directive blocks in one or more input files and
writes their concatenation to a single output file.

The command line is a ChRIS-style plugin: positional inputdir and outputdir,
with file names given relative to them.

Directives:
    @def NAME VALUE    replace every occurrence of NAME with VALUE
    @inc PATH          include PATH (relative to the including file), expanded

Usage:
    buildjs inputdir/ outputdir/ --inputFiles main.js --outputFile bundle.js

Examples:
    # Concatenate two entry points
    buildjs src/ dist/ --inputFiles intro.js app.js --outputFile app.js

    # Per-block trace
    buildjs src/ dist/ --inputFiles app.js --outputFile app.js -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import Builder, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline, BuildError, MacroError


DISPLAY_TITLE = r"""
   _           _ _     _  _
  | |__  _   _(_) | __| |(_)___
  | '_ \| | | | | |/ _` || / __|
  | |_) | |_| | | | (_| || \__ \
  |_.__/ \__,_|_|_|\__,_|/ |___/
                       |__/
  Text macro expansion
"""

# Define CLI arguments
parser = ArgumentParser(
    description="buildjs - expand @def/@inc directive blocks and concatenate sources",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFiles",
    required=True,
    nargs="+",
    type=str,
    help="Input files (relative to inputdir), concatenated in the order given",
)

parser.add_argument(
    "--outputFile",
    required=True,
    type=str,
    help="Output file (relative to outputdir)",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFiles: Resolved input paths
            - outputTarget: Resolved output path
            - envOK: True once the output directory exists

    Missing inputs are left to source_build, which reports them with the
    same "File not found" diagnostic as a missing @inc.
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    state.inputSourceFiles = [state.inputdir / name for name in state.inputFiles]
    LOG(f"Input files: {', '.join(map(str, state.inputSourceFiles))}", level=2)

    state.outputTarget = state.outputdir / state.outputFile
    state.outputTarget.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputTarget}", level=2)

    state.envOK = True
    return state


def source_build(inputstate: ProgramState) -> ProgramState:
    """
    Expand every input file and concatenate the results.

    Args:
        inputstate: Program state with inputSourceFiles set

    Returns:
        ProgramState with added field:
            - builtSource: Concatenated expansion

    Exits:
        1 if any file fails to expand
    """

    state = inputstate.copy()

    LOG("Expanding sources...", level=1)

    try:
        state.builtSource = Builder().files_build(state.inputFiles, basedir=state.inputdir)
        LOG(f"Expanded {len(state.inputFiles)} file(s)", level=2)
    except BuildError as e:
        print(f"Build error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the expanded source to the output file.

    Args:
        inputstate: Program state with builtSource

    Returns:
        ProgramState with added field:
            - buildResult: Dict containing:
                - status: bool
                - output_file: str
                - file_count: int
                - characters: int

    Exits:
        1 if builtSource is None or the file cannot be written
    """

    state = inputstate.copy()

    if state.builtSource is None:
        print("Error: No expanded source available", file=sys.stderr)
        sys.exit(1)

    try:
        state.outputTarget = Builder().text_write(
            state.builtSource, state.outputFile, basedir=state.outputdir
        )
    except (MacroError, OSError) as e:
        print(f"Write error: {e}", file=sys.stderr)
        sys.exit(1)

    state.buildResult = {
        'status': True,
        'output_file': str(state.outputTarget),
        'file_count': len(state.inputSourceFiles),
        'characters': len(state.builtSource),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display build results to user.

    Args:
        inputstate: Program state with buildResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if buildResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.buildResult:
        print("Error: Build failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Build successful!", level=1)
    LOG(f"  Output: {state.buildResult['output_file']}", level=1)
    LOG(f"  Inputs: {state.buildResult['file_count']}", level=1)
    LOG(f"  Size:   {state.buildResult['characters']} characters", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="buildjs - Text macro expansion",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - expand input files and write the concatenated output.

    Orchestrates the pipeline:
        1. env_check: Validate and resolve paths
        2. source_build: Expand and concatenate inputs
        3. output_write: Write the output file
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - inputFiles: List[str] - Input filenames
            - outputFile: str - Output filename
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing source files
        outputdir: Directory where the output file will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_build, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature

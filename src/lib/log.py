"""
Loguru logging gated by the verbosity of the running build.

The CLI connects its ProgramState once with state_connectToLogger(); after
that LOG() calls anywhere in the engine, however deep the include
recursion, are filtered by that state's verbosity. With no state connected
(library use) nothing is printed.

Levels:
    1  progress of the CLI pipeline
    2  one line per expanded or written file (-v)
    3  every directive block and parsed command (-vv)
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module}.{function}</cyan>:<cyan>{line}</cyan> ║ "
    "<level>{message}</level>"
)


def logger_configure(sink: Any = sys.stderr) -> None:
    """Replace loguru's default handler with the buildjs format on `sink`"""
    logger.remove()
    logger.add(sink, format=LOG_FORMAT, level="DEBUG")


logger_configure()


def state_connectToLogger(state: Any) -> None:
    """
    Make `state.verbosity` govern LOG() in the current context.

    Pass None to disconnect.
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """
    Verbosity of the connected state, 0 when nothing is connected.

    Lets callers skip building expensive log messages that would be dropped.
    """
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit `message` when the connected verbosity is at least `level`.

    Args:
        message: Text to log, printed verbatim (braces included)
        level: Minimum verbosity (1 normal, 2 verbose, 3 debug)
        **kwargs: Extra loguru record fields
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug("{}", message, **kwargs)

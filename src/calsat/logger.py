"""Solver logging: pruning summaries, search trace and constraint detail by verbosity."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

CHANGES_LEVEL = 25  # domain reductions and solve outcomes
CHECKS_LEVEL = 15  # candidate dates tried during search

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

# -v value -> logger level; anything else is treated as silent
_LEVEL_FOR_VERBOSITY = {
    0: logging.ERROR,
    1: CHANGES_LEVEL,
    2: CHECKS_LEVEL,
    3: logging.DEBUG,
}


class CalsatLogger(logging.Logger):
    """Logger with one method per solver verbosity tier.

    ``changes`` reports what preprocessing removed and whether a solution was
    found, ``checks`` traces each tentative assignment, and the inherited
    ``debug`` covers per-constraint pruning and backtracking.
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> CalsatLogger:
    """Return the shared ``calsat`` logger."""
    logging.setLoggerClass(CalsatLogger)
    logger = logging.getLogger("calsat")
    assert isinstance(logger, CalsatLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send solver messages up to ``verbosity`` to ``stream``.

    Replaces any handler installed by an earlier call, so the CLI callback
    and tests can call it once per run.

    Args:
        verbosity: 0 errors only, 1 pruning and outcome, 2 every candidate, 3 debug
        stream: Destination (sys.stderr when omitted)
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVEL_FOR_VERBOSITY.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to errors-only."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def checks_enabled() -> bool:
    """Whether per-candidate messages would be emitted; guards f-string building."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    """Whether per-constraint messages would be emitted."""
    return get_logger().isEnabledFor(logging.DEBUG)

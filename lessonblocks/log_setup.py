"""Logging configuration for the lessonblocks CLI and library.

Library modules only create ``logging.getLogger(__name__)`` loggers; nothing
is emitted until :func:`setup_logging` attaches handlers to the
``lessonblocks`` logger tree.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

TRACE = 5
TRACE_DIR = "debug"
LOGGER_NAME = "lessonblocks"

logging.addLevelName(TRACE, "TRACE")

_CONSOLE_FMT = "%(levelname)s %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s:%(funcName)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _console_level(*, debug: bool, trace: bool, verbose: bool, quiet: bool) -> int:
    if trace and verbose:
        return TRACE
    if debug or trace:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *, debug: bool, trace: bool, verbose: bool, quiet: bool = False
) -> logging.Logger:
    """Attach console (and in trace mode, file) handlers to the package logger.

    Args:
        debug: Lower the console level to DEBUG.
        trace: Lower the console level to DEBUG and write every record,
            TRACE included, to a timestamped file under TRACE_DIR.
        verbose: With ``trace``, also send TRACE records to the console.
        quiet: Raise the console level to WARNING. Ignored when ``debug``
            or ``trace`` is set.

    Returns:
        The configured ``lessonblocks`` logger.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(TRACE)

    console = logging.StreamHandler()
    console.setLevel(
        _console_level(debug=debug, trace=trace, verbose=verbose, quiet=quiet)
    )
    console.setFormatter(logging.Formatter(_CONSOLE_FMT))
    root.addHandler(console)

    if trace:
        os.makedirs(TRACE_DIR, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
        filepath = os.path.join(TRACE_DIR, f"trace-{timestamp}.log")
        fh = logging.FileHandler(filepath, encoding="utf-8")
        fh.setLevel(TRACE)
        fh.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)

    return root

"""Logging for planning runs and AZ discovery.

Everything logs under the ``aws_network_planner`` logger. The console only
shows warnings unless ``--debug`` is given, and only errors when the CLI is
emitting JSON or YAML so that stderr noise never mixes with piped output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger("aws_network_planner")

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _console_level(debug: bool, quiet: bool) -> int:
    if debug:
        return logging.DEBUG
    return logging.ERROR if quiet else logging.WARNING


def _reset_handlers() -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    debug: bool = False, log_file: Optional[str] = None, quiet: bool = False
) -> logging.Logger:
    """(Re)configure the planner logger.

    Calling this again replaces the previous handlers, closing any open log
    file. ``log_file`` always records DEBUG; its directory is created.
    """
    _reset_handlers()
    logger.setLevel(logging.DEBUG if debug or log_file else logging.INFO)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(_console_level(debug, quiet))
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger for a planner component, e.g. ``get_logger("nat")``."""
    return logger.getChild(name)

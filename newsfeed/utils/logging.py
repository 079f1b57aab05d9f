"""Loguru setup for the ingestion worker.

Every record carries a ``cycle`` extra so the lines of one ingestion cycle can
be grepped together in the rotating log file; outside a cycle it is ``-``.
"""

import sys
from contextlib import AbstractContextManager
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from newsfeed.models.config import LoggingConfig

NO_CYCLE = "-"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[cycle]: <8}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[cycle]: <8} | {name}:{function}:{line} | {message}"


def setup_logging(config: LoggingConfig) -> None:
    """
    Install the console and file sinks.

    Args:
        config: Logging configuration
    """
    logger.remove()
    logger.configure(extra={"cycle": NO_CYCLE})

    logger.add(
        sys.stderr,
        level=config.level,
        format=CONSOLE_FORMAT,
        colorize=config.colorize,
    )

    Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)

    # Written off-thread so a slow disk never stalls the event loop
    logger.add(
        config.file_path,
        level=config.level,
        format=FILE_FORMAT,
        rotation=config.rotation,
        retention=config.retention,
        compression=config.compression,
        serialize=config.serialize,
        enqueue=True,
    )

    logger.info(f"Logging to {config.file_path} at {config.level}")


def cycle_context(cycle_id: str) -> AbstractContextManager[None]:
    """Tag every record logged inside the block, in any task, with ``cycle_id``."""
    return logger.contextualize(cycle=cycle_id)


def get_logger(name: str) -> "Logger":
    """Logger bound to a module name."""
    return logger.bind(name=name)

"""
Logging for the combat core.

Records go to the ``autobattle`` logger and are rendered by rich. Context
dictionaries are appended to the message as ``key=value`` pairs.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("autobattle")


def setup_logging(level: int = logging.INFO) -> None:
    """
    Routes the root logger through a rich handler.

    Args:
        level (int): The logging level to set. Defaults to logging.INFO.

    """
    console = Console(width=120, force_terminal=True, force_jupyter=False)
    handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def _with_context(message: str, context: dict[str, Any] | None) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} [{pairs}]"


def log_warning(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs a warning, such as a species fallback or an abandoned loop."""
    logger.warning(_with_context(message, context))


def log_info(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs a loop or battle milestone."""
    logger.info(_with_context(message, context))


def log_debug(message: str, context: dict[str, Any] | None = None) -> None:
    """Logs per-attack and per-roll detail."""
    logger.debug(_with_context(message, context))

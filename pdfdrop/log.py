"""Logging setup for pdfdrop."""

import logging

from rich.logging import RichHandler

from .ui.theme import err_console

FORMAT = "%(name)s: %(message)s"


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Route all pdfdrop loggers through a rich handler on stderr.

    ``verbose`` forces DEBUG regardless of the configured level.
    """
    resolved = logging.DEBUG if verbose else getattr(logging, str(level).upper(), logging.WARNING)

    handler = RichHandler(
        console=err_console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(FORMAT))

    logging.basicConfig(
        level=resolved,
        handlers=[handler],
        force=True,
    )

"""Logging helpers shared by the codec and the CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE = "attributed_markup"

logging.getLogger(_PACKAGE).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger under the package namespace."""
    return logging.getLogger(name or _PACKAGE)


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Route package logs through rich; DEBUG when verbose."""
    logger = logging.getLogger(_PACKAGE)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=console, show_path=False, markup=False)
        )

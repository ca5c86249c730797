"""Logging setup — module loggers rendered through Rich on stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "devtime-rich"


def setup_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Attach a RichHandler to the ``devtime`` logger (idempotent)."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("devtime")
    logger.setLevel(level)

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=debug,
            rich_tracebacks=debug,
            markup=False,
        )
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    for h in logger.handlers:
        h.setLevel(level)

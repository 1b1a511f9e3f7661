from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbosity: int = 0, console: Console | None = None) -> None:
    """Route log records through rich.

    Our own loggers always report progress at INFO; ``-v`` opens INFO for
    everything else and ``-vv`` switches to DEBUG.
    """
    if verbosity >= 2:
        root_level = logging.DEBUG
    elif verbosity == 1:
        root_level = logging.INFO
    else:
        root_level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_path=verbosity >= 2,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=root_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logging.getLogger("installkit").setLevel(min(root_level, logging.INFO))

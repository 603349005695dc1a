"""Logger utility for the librespeed client."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

log = logging.getLogger("librespeed")


def setup_log(*, debug: bool = False, console: Optional[Console] = None) -> None:
    """Route the package log through rich, at INFO (or DEBUG) level."""
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.handlers[:] = [handler]
    log.propagate = False
    log.setLevel(logging.DEBUG if debug else logging.INFO)

"""Rich logging integration for torrentmeta.

Provides a Rich console handler that carries correlation IDs.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


class CorrelationRichHandler(RichHandler):
    """RichHandler that prefixes messages with the record's correlation ID."""

    def render_message(self, record: logging.LogRecord, message: str):
        """Render message text, prefixed with a short correlation ID."""
        corr_id = getattr(record, "correlation_id", None)
        if corr_id and corr_id != "no-correlation-id":
            message = f"[{corr_id[:8]}] {message}"
        return super().render_message(record, message)


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> logging.Handler:
    """Create a RichHandler with correlation ID support.

    Args:
        console: Optional Rich Console instance; defaults to stderr
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks

    Returns:
        Configured RichHandler instance

    """
    if console is None:
        console = Console(file=sys.stderr)

    # Markup stays off: messages quote torrent data that may contain brackets
    return CorrelationRichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        markup=False,
    )

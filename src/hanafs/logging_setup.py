"""Console logging for the hanafs command line.

Library modules only create module-level loggers; the handler is installed
here, once, by whichever entry point owns the process.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Attach a Rich handler to the root logger."""
    global _configured

    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return

    root.addHandler(
        RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True

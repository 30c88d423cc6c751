import logging
import os
from pathlib import Path

import structlog
from rich.console import Console
from rich.logging import RichHandler

# Attributes passed via `extra=` that belong in the JSON log lines.
EXTRA_FIELDS = ("scrape_id", "status", "elapsed", "total_elapsed", "error_message")


def json_file_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Renders stdlib records, including the scrape `extra` fields, as JSON lines."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.ExtraAdder(allow=EXTRA_FIELDS),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(default=str),
        ],
    )


def setup_logger(
    name: str = "clusterscrape",
    level: int = logging.ERROR,
    log_path: str | None = None,
) -> logging.Logger:
    """Configures and returns a logger with RichHandler and an optional JSON file."""

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding duplicate handlers if setup is called multiple times
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        # stderr keeps stdout clean for the JSON report.
        handler = RichHandler(
            console=Console(stderr=True), rich_tracebacks=True, markup=True
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    if log_path:
        path = os.path.abspath(Path(log_path).expanduser())
        has_file = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == path
            for h in logger.handlers
        )
        if not has_file:
            # Raises OSError when the file cannot be opened; callers treat it as fatal.
            file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
            file_handler.setFormatter(json_file_formatter())
            logger.addHandler(file_handler)

    return logger


# Global logger instance (default to ERROR to reduce noise)
logger = setup_logger(level=logging.ERROR)

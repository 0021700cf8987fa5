"""Rich logging setup bound to stderr.

mdBook reads the processed book from the preprocessor's stdout, so every
diagnostic goes to stderr.
"""

from __future__ import annotations

import logging
import typing as typ

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

LogLevelName = typ.Literal["debug", "info", "warning", "error"]
LOG_LEVELS: tuple[str, ...] = typ.get_args(LogLevelName)


def setup_logging(level: str = "warning") -> None:
    """Configure the root logger with a Rich handler writing to stderr.

    Raises
    ------
    ValueError
        If ``level`` is not one of :data:`LOG_LEVELS`.
    """
    normalized = level.strip().lower()
    if normalized not in LOG_LEVELS:
        msg = f"Unknown log level '{level}'; expected one of {', '.join(LOG_LEVELS)}."
        raise ValueError(msg)
    logging.basicConfig(
        level=getattr(logging, normalized.upper()),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=normalized == "debug")],
        force=True,
    )


__all__ = ["LOG_LEVELS", "LogLevelName", "console", "setup_logging"]

"""
Logging configuration — central setup for the CLI entrypoint.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  DEVENV_LOG_LEVEL env var  >  INFO (default)

Console lines are colored per level (green info, yellow warning,
red error).  Optional file output via DEVENV_LOG_FILE /
DEVENV_LOG_FILE_LEVEL env vars, always uncolored.
"""

from __future__ import annotations

import logging
import sys

import click

# ── Format strings ──────────────────────────────────────────────

# INFO and above: timestamped progress lines
_FMT_CONSOLE = "%(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"

# DEBUG level: full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# level → (prefix template, color)
_LEVEL_STYLES: dict[int, tuple[str, str]] = {
    logging.DEBUG: ("[DEBUG] ", "blue"),
    logging.INFO: ("[{time}] ", "green"),
    logging.WARNING: ("[WARNING] ", "yellow"),
    logging.ERROR: ("[ERROR] ", "red"),
    logging.CRITICAL: ("[ERROR] ", "red"),
}


class ColorFormatter(logging.Formatter):
    """Prefix and color each record by level using ``click.style``."""

    def __init__(self, fmt: str, datefmt: str | None = None, color: bool = True):
        super().__init__(fmt, datefmt=datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix, fg = _LEVEL_STYLES.get(record.levelno, ("", "white"))
        prefix = prefix.format(time=self.formatTime(record, self.datefmt))
        line = f"{prefix}{message}"
        if not self.color:
            return line
        return click.style(line, fg=fg, bold=record.levelno >= logging.ERROR)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
    color: bool | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        color: Force colors on/off.  Default: only when stderr is a TTY.
    """
    numeric_level = _parse_level(level)
    if color is None:
        color = sys.stderr.isatty()

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        formatter: logging.Formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    else:
        formatter = ColorFormatter(_FMT_CONSOLE, datefmt=_DATEFMT_CONSOLE, color=color)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(formatter)

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric

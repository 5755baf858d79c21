"""Common utilities for locale-sync modules."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

# store configuration in a platform-specific user config directory
CONFIG_FILE = Path(user_config_dir("locale_sync")) / "locale_sync_config.json"

# central logger for the project
logger = logging.getLogger("locale_sync")
logger.propagate = False

NEWLINES: dict[str, str] = {
    "platform": os.linesep,
    "lf": "\n",
    "crlf": "\r\n",
}

ERR_READ_FILE = "Could not read file: {path} ({reason})"
ERR_WRITE_FILE = "Could not write file: {path} ({reason})"
ERR_DECODE_FILE = "File is not valid UTF-8: {path}"
ERR_UNKNOWN_NEWLINE = "Unknown newline style {style!r}; expected one of: {choices}"


def configure_logging(
    level: str = "INFO", handler: logging.Handler | None = None
) -> logging.Logger:
    """Configure and return the package logger."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric)
    logger.handlers.clear()
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)

    # forward warnings.warn() calls through the logging system
    logging.captureWarnings(True)
    wlog = logging.getLogger("py.warnings")
    wlog.setLevel(numeric)
    wlog.handlers.clear()
    wlog.addHandler(handler)
    wlog.propagate = False
    return logger


# configure default logging on import
configure_logging()


def resolve_newline(style: str) -> str:
    """Return the line terminator for a configured newline ``style``."""
    try:
        return NEWLINES[style.strip().lower()]
    except (AttributeError, KeyError) as exc:
        choices = ", ".join(NEWLINES)
        raise ValueError(ERR_UNKNOWN_NEWLINE.format(style=style, choices=choices)) from exc


def read_text(path: str | Path) -> str:
    """Return the exact text of ``path``.

    The content is decoded as UTF-8 without newline translation so the caller
    can compare it byte-for-byte with freshly rendered text. ``OSError`` is
    re-raised with the path in its message.
    """
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as exc:
        raise OSError(ERR_READ_FILE.format(path=p, reason=exc.strerror or exc)) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(ERR_DECODE_FILE.format(path=p)) from exc


def write_text(path: str | Path, text: str) -> None:
    """Overwrite ``path`` with ``text`` encoded as UTF-8, verbatim."""
    p = Path(path)
    try:
        p.write_bytes(text.encode("utf-8"))
    except OSError as exc:
        raise OSError(ERR_WRITE_FILE.format(path=p, reason=exc.strerror or exc)) from exc


__all__ = [
    "CONFIG_FILE",
    "NEWLINES",
    "configure_logging",
    "logger",
    "read_text",
    "resolve_newline",
    "write_text",
]

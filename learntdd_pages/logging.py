"""Logging for the ``learntdd`` command line.

Modules log through :func:`get_logger`, which hands out children of the
``learntdd`` logger. Only the CLI calls :func:`configure_logging`. The handlers
it attaches are tagged, so a later call swaps out its own handlers and leaves
any others alone. Records still propagate to the root logger. If the root
logger already has handlers, for example because a host application called
:func:`logging.basicConfig`, no console handler is added and each record is
printed once, by the root.
"""

from __future__ import annotations

import logging
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

ROOT_LOGGER = "learntdd"
CONSOLE_FORMAT = "[learntdd] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_OWNER_ATTR = "learntdd_owned"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``learntdd.<name>``, or the ``learntdd`` logger itself."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach console and optional file output to the ``learntdd`` logger.

    Parameters
    ----------
    verbose : bool, default False
        Log at DEBUG instead of INFO.
    log_file : Path, optional
        Also append records, with timestamps and logger names, to this file.

    Returns
    -------
    logging.Logger
        The configured ``learntdd`` logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if getattr(h, _OWNER_ATTR, False)]:
        logger.removeHandler(handler)
        handler.close()

    if not logging.getLogger().handlers:
        logger.addHandler(_owned(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        logger.addHandler(_owned(file_handler, level, FILE_FORMAT))
    return logger


def _owned(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    setattr(handler, _OWNER_ATTR, True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]

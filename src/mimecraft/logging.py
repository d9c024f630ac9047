"""Logging helpers for mimecraft.

Every package module logs through ``logging.getLogger(__name__)``, so all
records live under the ``mimecraft`` namespace. Nothing is printed until the
application calls :func:`init_logging`, which attaches a rich console
handler to that namespace. :func:`get_logger` is meant for applications and
plugins that want their own records routed through the same handler.

Examples:
    >>> from mimecraft.logging import get_logger, init_logging
    >>> _ = init_logging("DEBUG")  # doctest: +SKIP
    >>> get_logger("builder").name
    'mimecraft.builder'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

#: Custom level below DEBUG for header and part level detail.
TRACE_LEVEL = 5

#: Root logger name of the package.
LOGGER_NAME = "mimecraft"

DEFAULT_LEVEL = "INFO"

logging.addLevelName(TRACE_LEVEL, "TRACE")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger in the ``mimecraft`` namespace.

    Intended for application code; records from it share the handler set up
    by :func:`init_logging`.

    Args:
        name: Child name. Names already starting with ``mimecraft`` are kept
            as-is; None returns the package logger.
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _resolve_level(level: int | str | None, config: Mapping[str, Any] | None) -> int:
    if level is None and config:
        section = config.get("logging")
        if isinstance(section, Mapping):
            level = section.get("level")
    if level is None:
        level = DEFAULT_LEVEL
    if isinstance(level, int):
        return level

    name = str(level).upper()
    if name == "TRACE":
        return TRACE_LEVEL
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def init_logging(
    level: int | str | None = None,
    *,
    config: Mapping[str, Any] | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Attach a rich console handler to the ``mimecraft`` logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Level name or number. Defaults to ``logging.level`` in
            ``config``, then ``INFO``.
        config: Configuration mapping.
        console: Rich console to write to (stderr when None).

    Returns:
        The configured package logger.

    Raises:
        ValueError: If the level name is unknown.
    """
    resolved = _resolve_level(level, config)
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, "_mimecraft_handler", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler._mimecraft_handler = True  # type: ignore[attr-defined]  # pylint: disable=protected-access
    handler.setLevel(resolved)

    logger.addHandler(handler)
    logger.setLevel(resolved)
    return logger


__all__ = [
    "LOGGER_NAME",
    "TRACE_LEVEL",
    "get_logger",
    "init_logging",
]

"""Structured logging for the bridge, waiter, task and adapter layers.

Every logger handed out by ``get_logger`` is a child of the shared
``promise_bridge`` logger. Only that base logger owns handlers: one console
handler writing to ``sys.stderr`` and, optionally, a rotating file handler
managed by ``configure_logger``. Events are emitted with ``log_event`` as one
JSON object per line.

Level
-----
``PB_LOG_LEVEL`` (DEBUG, INFO, WARNING, ERROR, CRITICAL) is read whenever the
base logger is (re)initialized; ``configure_logger(level=...)`` overrides it
at runtime.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Iterable, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "promise_bridge"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_READY_ATTR = "_pb_ready"
_CONSOLE_ATTR = "_pb_console"
_FILE_ATTR = "_pb_file"

_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _level_from(value: int | str | None, default: int) -> int:
    """Resolve a numeric level or a case-insensitive level name."""
    if isinstance(value, int):
        return value
    if not value:
        return default
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else default


def _tagged(logger: logging.Logger, attr: str) -> Iterable[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, attr, False)]


def _new_console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_ATTR, True)
    return handler


def _drop(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(Exception):
        handler.close()


def _refresh_console(logger: logging.Logger, json_mode: bool, level: int) -> None:
    """Point console handlers at the live ``sys.stderr`` with the given level.

    Test runners swap ``sys.stderr`` between tests; a handler whose stream was
    closed is replaced.
    """
    for handler in _tagged(logger, _CONSOLE_ATTR):
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            _drop(logger, handler)
            logger.addHandler(_new_console_handler(json_mode, level))
            continue
        handler.setLevel(level)
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)
        if json_mode != isinstance(handler.formatter, JsonFormatter):
            handler.setFormatter(_formatter(json_mode))


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared base logger, initializing it on first use."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _level_from(os.getenv("PB_LOG_LEVEL"), level)
    if not getattr(logger, _READY_ATTR, False):
        logger.handlers[:] = [_new_console_handler(json_mode, wanted)]
        logger.propagate = False
        setattr(logger, _READY_ATTR, True)
    else:
        _refresh_console(logger, json_mode, wanted)
    logger.setLevel(wanted)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a handler-less child of the shared base logger.

    Records propagate to the base logger, so each is emitted exactly once and
    the effective level is the base logger's.
    """
    base = _base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _attach_file(logger: logging.Logger, file_path: str, json_mode: bool) -> None:
    target = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(target), exist_ok=True)
    keep: Optional[logging.Handler] = None
    for handler in _tagged(logger, _FILE_ATTR):
        if keep is None and getattr(handler, "baseFilename", None) == target:
            keep = handler
        else:
            _drop(logger, handler)
    if keep is None:
        keep = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(keep, _FILE_ATTR, True)
        logger.addHandler(keep)
    keep.setFormatter(_formatter(json_mode))
    keep.setLevel(logger.level)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime and return it.

    Parameters
    ----------
    level: int | str | None
        New level for the logger and all its handlers; ``None`` leaves it.
    file_path: Optional[str]
        Write to this path through a managed rotating file handler (10MB x 5).
        ``None`` detaches the managed file handler.
    json_mode: bool
        JSON lines when ``True``; plain text otherwise.

    Handlers added by other code are never touched.
    """
    logger = _base_logger(json_mode, logging.INFO)
    if level is not None:
        logger.setLevel(_level_from(level, logger.level))
        for handler in logger.handlers:
            handler.setLevel(logger.level)
    if file_path is None:
        for handler in _tagged(logger, _FILE_ATTR):
            _drop(logger, handler)
    else:
        _attach_file(logger, file_path, json_mode)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    exc_info: Any = None,
    **fields: Any,
) -> None:
    """Emit ``event`` as a single JSON object.

    ``ctx`` fields come first, then ``fields``; ``None`` values are dropped
    unless ``keep_none`` is set. ``exc_info`` is forwarded so failures keep
    their traceback. Nothing is serialized when ``level`` is disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **(ctx.to_dict() if ctx else {})}
    payload.update((k, v) for k, v in fields.items() if keep_none or v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr), exc_info=exc_info)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
]

"""Logging configuration for nmr_splitting entry points."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, TextIO

__all__ = ["JsonFormatter", "setup_logging", "LOGGER_NAME"]

LOGGER_NAME = "nmr_splitting"

# Attributes present on every ``LogRecord``; anything else came from ``extra``.
_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key in _RESERVED_ATTRIBUTES or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def _resolve_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    name = str(value or "info").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    raise ValueError(f"Unknown logging level: {value!r}")


def _resolve_handler(output: Any) -> logging.Handler:
    target = str(output or "stderr").strip()
    streams: Mapping[str, TextIO] = {"stdout": sys.stdout, "stderr": sys.stderr}
    if target.lower() in streams:
        return logging.StreamHandler(streams[target.lower()])
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def setup_logging(config: Mapping[str, Any] | None = None) -> logging.Logger:
    """Configure the package logger from the ``[logging]`` table of ``config``.

    Recognised keys are ``level``, ``output`` (``stdout``, ``stderr`` or a
    file path) and ``format`` (``json`` or ``text``).  Handlers installed by
    a previous call are replaced.
    """

    section = config.get("logging", {}) if config else {}
    if not isinstance(section, Mapping):
        section = {}
    level = _resolve_level(section.get("level"))

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_nmr_splitting_handler", False):
            logger.removeHandler(handler)
            handler.close()

    handler = _resolve_handler(section.get("output"))
    handler._nmr_splitting_handler = True  # type: ignore[attr-defined]
    fmt = str(section.get("format", "json")).strip().lower()
    if fmt == "text":
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    else:
        handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger

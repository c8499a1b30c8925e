"""Logging setup for the server process.

Records go to stdout in a human-readable form and, outside development, to a
JSON-lines file that is rotated by size. Structured fields travel on the
record as ``record.fields``; ``BoundLogger`` is the way to attach them.
"""

import gzip
import json
import logging
import os
import platform
import shutil
import sys
import time
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, TextIO

from wikisearch.config import VERSION, Settings

LOGGER_NAME = "wikisearch"

# Numeric levels as used by zap (debug=-1 ... fatal=5)
_ZAP_LEVELS = {
    -1: logging.DEBUG,
    0: logging.INFO,
    1: logging.WARNING,
    2: logging.ERROR,
}

_LEVEL_COLORS = {
    logging.DEBUG: "\033[35m",
    logging.INFO: "\033[34m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[31m",
}
_RESET = "\033[0m"


class BoundLogger(logging.LoggerAdapter):
    """Logger adapter that attaches a set of structured fields to every record."""

    def bind(self, **fields: Any) -> "BoundLogger":
        """Return a new adapter with ``fields`` merged over the current ones."""
        return BoundLogger(self.logger, {**self.extra, **fields})

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self.extra)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.get("extra") or {}
        kwargs["extra"] = {
            **extra,
            "fields": {**self.extra, **extra.get("fields", {})},
        }
        return msg, kwargs


class JsonFormatter(logging.Formatter):
    """One JSON object per line, bound fields flattened into the top level."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname.lower(),
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(
                timespec="milliseconds"
            ),
            "logger": record.name,
            "caller": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}))
        if record.exc_info and record.exc_info[1] is not None:
            entry["error"] = str(record.exc_info[1])
            entry["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Tab-separated console lines with the bound fields appended as JSON."""

    def __init__(self, use_color: bool = False) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{_RESET}"

        line = f"{self.formatTime(record)}\t{level}\t{record.name}\t{record.getMessage()}"
        fields = getattr(record, "fields", None)
        if fields:
            line += "\t" + json.dumps(fields, default=str)
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


class CompressingRotatingFileHandler(RotatingFileHandler):
    """Size-rotated log file whose backups are gzipped and expire after a maximum age."""

    def __init__(
        self,
        filename: str | Path,
        *,
        max_bytes: int,
        backup_count: int,
        max_age_days: int = 0,
        compress: bool = True,
    ) -> None:
        super().__init__(
            filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=True,
        )
        self.max_age_days = max_age_days
        if compress:
            self.namer = _gzip_namer
            self.rotator = _gzip_rotator

    def doRollover(self) -> None:
        super().doRollover()
        self.prune_expired_backups()

    def prune_expired_backups(self) -> None:
        """Delete rotated files last modified more than ``max_age_days`` ago."""
        if self.max_age_days <= 0:
            return
        cutoff = time.time() - self.max_age_days * 86400
        base = Path(self.baseFilename)
        for backup in base.parent.glob(f"{base.name}.*"):
            if backup.stat().st_mtime < cutoff:
                backup.unlink(missing_ok=True)


def _gzip_namer(name: str) -> str:
    return f"{name}.gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as src, gzip.open(dest, "wb") as dst:
        shutil.copyfileobj(src, dst)
    os.remove(source)


def parse_log_level(value: str | int | None) -> int:
    """Resolve LOG_LEVEL to a ``logging`` level.

    Accepts level names (case-insensitive) and zap's numeric levels.
    Anything unrecognised means INFO.
    """
    if value is None:
        return logging.INFO
    text = str(value).strip()
    try:
        number = int(text)
    except ValueError:
        level = logging.getLevelName(text.upper())
        return level if isinstance(level, int) else logging.INFO

    if number in _ZAP_LEVELS:
        return _ZAP_LEVELS[number]
    return logging.CRITICAL if number > 2 else logging.DEBUG


def build_metadata(settings: Settings) -> dict[str, str]:
    """Fields stamped on every record to identify the running build."""
    return {
        "git_revision": settings.git_revision,
        "python_version": platform.python_version(),
        "version": VERSION,
    }


def configure_logging(settings: Settings, *, stream: TextIO | None = None) -> BoundLogger:
    """Install handlers on the ``wikisearch`` logger and return the root bound logger.

    Safe to call more than once; previously installed handlers are closed
    and replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(parse_log_level(settings.log_level))

    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    console = logging.StreamHandler(stream)
    console.setFormatter(ConsoleFormatter(use_color=bool(isatty and isatty())))
    logger.addHandler(console)

    if not settings.is_development:
        file_handler = CompressingRotatingFileHandler(
            settings.log_file,
            max_bytes=settings.log_max_size_mb * 1024 * 1024,
            backup_count=settings.log_max_backups,
            max_age_days=settings.log_max_age_days,
            compress=settings.log_compress,
        )
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    return BoundLogger(logger, build_metadata(settings))

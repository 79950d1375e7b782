"""Logging setup: readable console output plus rotating JSON log files.

``handsim.log`` receives every record, ``errors.log`` only ERROR and above,
and ``simulations.log`` only the ``handsim.services`` tree, where each
simulation run records its parameters and timing.
"""

import json
import logging
import logging.handlers
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

LOG_DIR = Path(__file__).resolve().parents[2] / "logs"
SERVICES_LOGGER = "handsim.services"

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# (file name, logger it hangs off ("" is root), minimum level)
LOG_FILES = (
    ("handsim.log", "", logging.DEBUG),
    ("errors.log", "", logging.ERROR),
    ("simulations.log", SERVICES_LOGGER, logging.DEBUG),
)


class JSONFormatter(logging.Formatter):
    """One JSON object per line; bound and per-call context go under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        extra = getattr(record, "extra_data", None)
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Merges the context bound in ``get_logger`` with per-call ``extra_data``.

    Per-call keys win, so a request logger bound to ``path`` can still
    report a different one.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict]:
        extra = dict(kwargs.get("extra") or {})
        extra["extra_data"] = {**self.extra, **extra.get("extra_data", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    log_level: str = "INFO",
    enable_console: bool = True,
    enable_file: bool = True,
    log_dir: Path | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Install console and file handlers, replacing any from an earlier call.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR).
        enable_console: Log human-readable lines to stdout.
        enable_file: Write the JSON files listed in ``LOG_FILES``.
        log_dir: Directory for the files (defaults to ``<project>/logs``).
        max_bytes: Size at which a file rotates.
        backup_count: Rotated files kept per log.
    """
    root = logging.getLogger()
    root.setLevel(log_level.upper())
    root.handlers.clear()
    logging.getLogger(SERVICES_LOGGER).handlers.clear()

    if enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(console)

    if not enable_file:
        return

    target_dir = log_dir or LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    for filename, logger_name, level in LOG_FILES:
        logging.getLogger(logger_name).addHandler(
            _file_handler(target_dir / filename, level, max_bytes, backup_count)
        )


def get_logger(name: str, **context: Any) -> ContextLogger:
    """Return a logger for ``name`` that attaches ``context`` to every record."""
    return ContextLogger(logging.getLogger(name), context)

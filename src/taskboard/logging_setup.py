# src/taskboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Loggers whose DEBUG output is per-record bookkeeping (appends, replaces, removals).
_STORE_LOGGERS = ("taskboard.records.store", "taskboard.records.fixtures")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console view of the taskboard logs.

    Store and fixture bookkeeping stays in the file unless it is INFO+;
    services, views and the CLI pass through at the handler level.
    asyncio gets WARNING+ (slow-callback and unawaited-task notices);
    everything else outside the package needs ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith(_STORE_LOGGERS):
            return record.levelno >= logging.INFO
        if name == "taskboard" or name.startswith("taskboard."):
            return True
        if name == "asyncio":
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskboard",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_name: str = "taskboard.log",
) -> Path:
    """
    Console handler (filtered) plus a file handler with everything.

    Replaces existing root handlers, so calling it again does not
    duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / log_name

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file

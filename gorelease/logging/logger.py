# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Logger factory for gorelease.

Everything the tool reports goes through Python's standard `logging` module.
There are two output formats:

  - github: what the GitHub Actions runner understands. ERROR records become
    `::error::` annotations, WARNING records become `::warning::`, DEBUG
    records become `::debug::` (hidden unless step debugging is on), and INFO
    records are plain lines in the step log.
  - json: one JSON object per line, for machines that collect logs.

The JSON structure looks like:
  {"ts": "2026-...", "level": "INFO", "module": "gorelease.release.validation", "msg": "...", ...}

Modules create their logger once at import time via `get_logger(__name__)`.
The CLI later calls `configure_logging` with the user's level and format,
which re-points every logger already handed out.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

_ROOT_LOGGER_NAME = "gorelease"

# LogRecord attributes that are never treated as caller-supplied context.
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    """Pull the `extra=` context a caller attached to a log call."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Mandatory fields:
      ts:     ISO 8601 UTC timestamp
      level:  log level name
      module: the logger name (usually the Python module path)
      msg:    the formatted message string

    Fields passed via `extra` are merged into the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        entry.update(_extra_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class GithubActionsFormatter(logging.Formatter):
    """
    Formats log records as GitHub Actions workflow commands.

    The annotation text is the bare message so the runner's annotation panel
    shows exactly what the tool reported. Context from `extra` is appended to
    plain INFO/DEBUG lines only.

    Workflow command data is escaped (`%`, CR, LF) so a multi-line message
    stays one annotation instead of spilling into plain log lines.
    """

    _PREFIXES = {
        logging.CRITICAL: "::error::",
        logging.ERROR: "::error::",
        logging.WARNING: "::warning::",
        logging.DEBUG: "::debug::",
    }

    @staticmethod
    def escape_data(message: str) -> str:
        return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        prefix = self._PREFIXES.get(record.levelno, "")

        if record.levelno < logging.WARNING:
            extras = _extra_fields(record)
            if extras:
                context = " ".join(f"{key}={value}" for key, value in extras.items())
                message = f"{message} [{context}]"

        if prefix:
            message = self.escape_data(message)

        line = f"{prefix}{message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class _StdoutHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """
    StreamHandler bound to whatever `sys.stdout` is at emit time.

    Module-level loggers outlive any stream that was current when they were
    configured (pytest swaps stdout per test phase, for one).
    """

    def __init__(self) -> None:
        super().__init__(stream=sys.stdout)

    @property  # type: ignore[override]
    def stream(self):  # type: ignore[no-untyped-def]
        return sys.stdout

    @stream.setter
    def stream(self, _value) -> None:  # type: ignore[no-untyped-def]
        pass


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = ("github", "json")

_settings: dict[str, object] = {
    "log_level": "INFO",
    "log_format": "github",
    "log_file": None,
}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    if log_format == "github":
        return GithubActionsFormatter()
    raise ValueError(
        f"Invalid log format '{log_format}'. Must be one of: {', '.join(VALID_LOG_FORMATS)}"
    )


def _attach_handlers(
    logger: logging.Logger,
    level: int,
    formatter: logging.Formatter,
    log_file: Optional[Path],
) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stdout_handler = _StdoutHandler()
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)
    # We handle all output ourselves.
    logger.propagate = False


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Create a configured logger.

    Arguments left as None fall back to whatever `configure_logging` last set
    (INFO / github / no file until then).

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stdout and the file.
        log_format: "github" or "json".

    Returns:
        A logging.Logger writing to stdout (and the file, when given).
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level or str(_settings["log_level"]))

    # Avoid stacking handlers if get_logger is called multiple times for the
    # same name (happens in tests).
    if logger.handlers:
        logger.setLevel(level)
        return logger

    if log_file is None and _settings["log_file"] is not None:
        log_file = Path(str(_settings["log_file"]))

    formatter = _build_formatter(log_format or str(_settings["log_format"]))
    _attach_handlers(logger, level, formatter, log_file)
    return logger


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "github",
    log_file: Optional[Path] = None,
) -> None:
    """
    Apply level, format and file settings to every gorelease logger.

    Loggers created before this call (module-level ones) get fresh handlers;
    loggers created afterwards pick the settings up from get_logger's defaults.

    Raises:
        ValueError: On an unknown level or format.
    """
    level = _resolve_log_level(log_level)
    _build_formatter(log_format)

    _settings["log_level"] = log_level.upper()
    _settings["log_format"] = log_format
    _settings["log_file"] = str(log_file) if log_file is not None else None

    for name in list(logging.Logger.manager.loggerDict):
        if name != _ROOT_LOGGER_NAME and not name.startswith(_ROOT_LOGGER_NAME + "."):
            continue
        logger = logging.getLogger(name)
        if not logger.handlers:
            continue
        _attach_handlers(logger, level, _build_formatter(log_format), log_file)

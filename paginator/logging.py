"""
Logging for the paginator package.

Importing the package only registers a ``NullHandler`` on the ``paginator``
logger; records propagate to whatever handlers the host application has
configured. Applications without their own logging setup can call
``setup_logging()`` to get a console handler (human-readable or JSON, per
``LOG_CONSOLE_FORMAT``) and an optional JSON error file.

Paging engines attach ``extra`` fields (strategy, page number, page size,
totals) to their records; the JSON formatter emits them as top-level keys.
"""

import json
import logging
import sys
from typing import Any

from paginator.settings import app_settings

LOGGER_NAME = "paginator"

DATE_FMT = "%Y-%m-%d %H:%M:%S"

# LogRecord attributes present on every record; the rest came from ``extra``
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class StructuredJSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Carries the level, logger, message and call site, the running
    environment, any ``extra`` fields and the formatted exception if present.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, DATE_FMT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "environment": app_settings.ENV.value,
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Console formatter for development.

    INFO records show only the message; other levels also show where the
    record was emitted.
    """

    SHORT_FMT = "%(asctime)s - %(levelname)s: %(message)s"
    LONG_FMT = (
        "%(asctime)s - %(levelname)s: "
        "%(module)s.%(funcName)s:%(lineno)d - %(message)s"
    )

    def __init__(self) -> None:
        super().__init__(self.LONG_FMT, datefmt=DATE_FMT)
        self._short = logging.Formatter(self.SHORT_FMT, datefmt=DATE_FMT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return self._short.format(record)
        return super().format(record)


def setup_logging() -> logging.Logger:
    """
    Attach console and file handlers to the paginator logger.

    Opt-in; nothing calls it on import. Level and console format come from
    LOG_LEVEL and LOG_CONSOLE_FORMAT, and errors are also written as JSON to
    LOG_FILE_PATH when it is set. Propagation is switched off so records are
    not emitted twice through the root logger. Calling it again replaces
    the handlers it installed.

    Returns:
        The configured logger.
    """
    configured = logging.getLogger(LOGGER_NAME)
    configured.setLevel(app_settings.LOG_LEVEL.upper())
    configured.propagate = False

    for handler in list(configured.handlers):
        configured.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    if app_settings.LOG_CONSOLE_FORMAT == "json":
        console.setFormatter(StructuredJSONFormatter())
    else:
        console.setFormatter(HumanReadableFormatter())
    configured.addHandler(console)

    if app_settings.LOG_FILE_PATH:
        try:
            error_file = logging.FileHandler(app_settings.LOG_FILE_PATH)
        except OSError as e:
            configured.warning(f"Could not create file handler: {e}")
        else:
            error_file.setLevel(logging.ERROR)
            error_file.setFormatter(StructuredJSONFormatter())
            configured.addHandler(error_file)

    return configured


logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())

from __future__ import annotations

import logging
import logging.config

_LOG_RECORD_KEYS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s%(extra)s"


class ExtraFormatter(logging.Formatter):
    """Append the record's `extra={...}` fields as `key=value` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _LOG_RECORD_KEYS and key != "extra" and not key.startswith("_")
        }
        if extras:
            extra_pairs = " ".join(f"{key}={value}" for key, value in extras.items())
            record.extra = f": {extra_pairs}"
        else:
            record.extra = ""
        return super().format(record)


def logging_config(level: int | str = logging.INFO) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "extra": {
                "class": "pyregress.core.logging.ExtraFormatter",
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "extra",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "pyregress": {
                "level": level,
                "handlers": ["stderr"],
                "propagate": True,
            },
        },
    }


def setup_logging(level: int | str = logging.INFO) -> None:
    logging.config.dictConfig(logging_config(level))
    logging.getLogger(__name__).debug(
        "Logging configured", extra={"level": level}
    )

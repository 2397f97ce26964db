import json
import logging
import os
import sys

from loguru import logger as _loguru_logger

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LOGGER_INITIALIZED = False

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    def format(self, record):  # type: ignore
        data = {
            "level": record.levelname.lower(),
            "name": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                data[key] = value
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def json_logs_enabled() -> bool:
    return os.getenv("SHEETS_CACHE_JSON_LOGS", "0").lower() in ("1", "true", "yes")


def init_logging(force: bool = False):
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED and not force:
        return
    json_logs = json_logs_enabled()
    handler = logging.StreamHandler()
    if json_logs:
        handler.setFormatter(_JsonFormatter())
    logging.basicConfig(level=logging.INFO, format=_FORMAT, handlers=[handler], force=force)
    # store/pipeline modules log through loguru; keep its sink on the same stream
    _loguru_logger.remove()
    _loguru_logger.add(sys.stderr, level="INFO", serialize=json_logs)
    _LOGGER_INITIALIZED = True


def get_logger(name: str):
    if not _LOGGER_INITIALIZED:
        init_logging()
    return logging.getLogger(name)


__all__ = ["get_logger", "init_logging", "json_logs_enabled"]

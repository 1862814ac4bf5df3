"""Logging setup for the client

Call `initialize_logging()` once from the entry point before anything logs.
Every record becomes a single JSON line on stderr; stdout stays reserved for
command output:
{"timestamp": "2025-12-26T12:00:00.000Z", "level": "INFO",
 "logger": "urlifyclient.session.session_store", "message": "Session started.", "userId": "42"}

Credentials passed via `extra` (token, password, authorization) are masked.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlifyclient.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra`
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {'message', 'asctime'}
_SENSITIVE_FIELDS = frozenset({'token', 'password', 'authorization'})
_REDACTED = '***'


class JsonFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        if datefmt:
            return moment.strftime(datefmt)
        return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    @staticmethod
    def extras(record: logging.LogRecord) -> dict:
        return {
            key: _REDACTED if key.lower() in _SENSITIVE_FIELDS else value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.extras(record),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            entry['stack'] = self.formatStack(record.stack_info)
        return json.dumps(entry, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all records through JsonFormatter on stderr

    Args:
        level (str | None):
            Root log level. Falls back to $LOG_LEVEL, then WARNING.
    """
    root_level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'WARNING').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stderr': {'class': 'logging.StreamHandler', 'formatter': 'json', 'stream': 'ext://sys.stderr'},
            },
            'root': {'level': root_level, 'handlers': ['stderr']},
            # httpx logs every request at INFO
            'loggers': {'httpx': {'level': 'WARNING'}},
        }
    )

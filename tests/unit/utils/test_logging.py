"""Unit tests for logging initialization.

Test coverage includes:
    1. JsonFormatter
       - Emits one JSON object carrying the standard fields and `extra` fields.
       - Includes formatted exception info.
       - Masks credentials passed as `extra` fields.
    2. initialize_logging()
       - Honors explicit levels, LOG_LEVEL and the WARNING default.
       - Writes JSON to stderr and quiets the httpx request logger.
"""

import sys
import json
import logging
from unittest.mock import patch

import pytest

from urlifyclient.utils.logging import JsonFormatter, initialize_logging


def _record(exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name='urlifyclient.test', level=logging.INFO, pathname=__file__, lineno=1, msg='Hello %s', args=('world',), exc_info=exc_info
    )


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter_fields():
    record = _record()
    record.userId = '42'

    log = json.loads(JsonFormatter().format(record))

    assert log['level'] == 'INFO'
    assert log['logger'] == 'urlifyclient.test'
    assert log['message'] == 'Hello world'
    assert log['userId'] == '42'
    assert log['timestamp'].endswith('Z')


def test_json_formatter_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


def test_json_formatter_redacts_credentials():
    record = _record()
    record.token = 'abc.def.ghi'
    record.password = 's3cret'
    record.email = 'jane@example.com'

    log = json.loads(JsonFormatter().format(record))

    assert log['token'] == '***'
    assert log['password'] == '***'
    assert log['email'] == 'jane@example.com'


def test_json_formatter_non_serializable_extra():
    record = _record()
    record.payload = object()

    assert 'payload' in json.loads(JsonFormatter().format(record))


# -------------------------------
# 2. initialize_logging()
# -------------------------------


@pytest.fixture
def dict_config():
    with patch('logging.config.dictConfig') as _dict_config:
        yield _dict_config


def _applied(dict_config) -> dict:
    dict_config.assert_called_once()
    return dict_config.call_args.args[0]


def test_initialize_logging_default_level(monkeypatch, dict_config):
    monkeypatch.delenv('LOG_LEVEL', raising=False)

    initialize_logging()

    config = _applied(dict_config)
    assert config['root'] == {'level': 'WARNING', 'handlers': ['stderr']}
    assert config['handlers']['stderr']['stream'] == 'ext://sys.stderr'
    assert config['formatters']['json']['()'] is JsonFormatter
    assert config['loggers']['httpx'] == {'level': 'WARNING'}


def test_initialize_logging_from_environment(monkeypatch, dict_config):
    monkeypatch.setenv('LOG_LEVEL', 'info')
    initialize_logging()
    assert _applied(dict_config)['root']['level'] == 'INFO'


def test_initialize_logging_explicit_level(monkeypatch, dict_config):
    monkeypatch.setenv('LOG_LEVEL', 'INFO')
    initialize_logging('debug')
    assert _applied(dict_config)['root']['level'] == 'DEBUG'

"""Unit tests for the wire models in models.py

Test coverage includes:

1. Timestamp parsing
   - Naive timestamps are read as UTC; offsets are converted to UTC.
   - Fractions beyond microseconds are truncated.
   - Non ISO-8601 input raises MalformedResponseError.

2. Model decoding
   - User, Session, UrlRecord, AnalyticsRecord and Page decode camelCase payloads.
   - Missing or mistyped fields raise MalformedResponseError.
"""

from datetime import datetime, UTC

import pytest

from urlifyclient.exceptions import MalformedResponseError
from urlifyclient.models import AnalyticsRecord, Page, Session, UrlRecord, User, parse_timestamp


# -------------------------------
# 1. Timestamp parsing
# -------------------------------


@pytest.mark.parametrize(
    'value, expected',
    [
        ('2024-01-01T10:00:00', datetime(2024, 1, 1, 10, 0, tzinfo=UTC)),
        ('2024-01-01T10:00:00Z', datetime(2024, 1, 1, 10, 0, tzinfo=UTC)),
        ('2024-01-01T12:00:00+02:00', datetime(2024, 1, 1, 10, 0, tzinfo=UTC)),
        ('2024-01-01T23:00:00.123456789', datetime(2024, 1, 1, 23, 0, 0, 123456, tzinfo=UTC)),
    ],
)
def test_parse_timestamp(value, expected):
    """Ensure wire timestamps become aware UTC datetimes."""
    assert parse_timestamp(value) == expected


@pytest.mark.parametrize('value', ['yesterday', '', None, 42])
def test_parse_timestamp_rejects_garbage(value):
    """Ensure malformed timestamps raise MalformedResponseError."""
    with pytest.raises(MalformedResponseError):
        parse_timestamp(value)


# -------------------------------
# 2. Model decoding
# -------------------------------


def test_user_from_json_normalizes_id():
    """Ensure numeric ids are kept as strings."""
    user = User.from_json({'id': 42, 'username': 'jane', 'email': 'jane@example.com'})
    assert user == User(id='42', username='jane', email='jane@example.com')
    assert user.to_json() == {'id': '42', 'username': 'jane', 'email': 'jane@example.com'}


def test_user_from_json_missing_field():
    with pytest.raises(MalformedResponseError):
        User.from_json({'id': '1', 'username': 'jane'})


@pytest.mark.parametrize(
    'payload',
    [
        {'id': None, 'username': None, 'email': None},
        {'id': '', 'username': 'jane', 'email': 'jane@example.com'},
        {'id': False, 'username': 'jane', 'email': 'jane@example.com'},
        {'id': 1.5, 'username': 'jane', 'email': 'jane@example.com'},
        {'id': '1', 'username': '', 'email': 'jane@example.com'},
        {'id': '1', 'username': 'jane', 'email': ['jane@example.com']},
    ],
)
def test_user_from_json_mistyped_field(payload):
    with pytest.raises(MalformedResponseError):
        User.from_json(payload)


def test_session_from_json():
    """Ensure an authentication response decodes into a Session."""
    session = Session.from_json(
        {
            'token': 'jwt',
            'type': 'Bearer',
            'user': {'id': '1', 'username': 'jane', 'email': 'jane@example.com'},
        }
    )
    assert session.token == 'jwt'
    assert session.user.username == 'jane'


@pytest.mark.parametrize(
    'payload',
    [
        {'token': '', 'user': {'id': '1', 'username': 'jane', 'email': 'jane@example.com'}},
        {'token': None, 'user': {'id': '1', 'username': 'jane', 'email': 'jane@example.com'}},
        {'token': 'jwt', 'user': 'jane'},
        {'token': 'jwt'},
        [],
    ],
)
def test_session_from_json_rejects_incomplete_payloads(payload):
    """Ensure a session is never built without a token and a user object."""
    with pytest.raises(MalformedResponseError):
        Session.from_json(payload)


def test_url_record_from_json(url_payload):
    """Ensure UrlRecord decodes every field."""
    record = UrlRecord.from_json(url_payload('abc123', clicks=5, expiresAt='2024-02-01T00:00:00'))

    assert record.short_code == 'abc123'
    assert record.original_url == 'https://example.com/abc123'
    assert record.clicks == 5
    assert record.created_at == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert record.expires_at == datetime(2024, 2, 1, tzinfo=UTC)
    assert record.short_url == 'http://api.test/abc123'


def test_url_record_from_json_defaults(url_payload):
    """Ensure optional fields default sensibly."""
    payload = url_payload()
    del payload['clicks'], payload['expiresAt'], payload['shortUrl']

    record = UrlRecord.from_json(payload)

    assert record.clicks == 0
    assert record.expires_at is None
    assert record.short_url is None


def test_url_record_from_json_bad_timestamp(url_payload):
    with pytest.raises(MalformedResponseError):
        UrlRecord.from_json(url_payload(createdAt='not a date'))


def test_analytics_record_from_json():
    """Ensure AnalyticsRecord decodes its recent clicks."""
    record = AnalyticsRecord.from_json(
        {
            'shortCode': 'abc123',
            'originalUrl': 'https://example.com',
            'totalClicks': 2,
            'createdAt': '2024-01-01T10:00:00',
            'expiresAt': None,
            'recentClicks': [
                {'timestamp': '2024-01-01T11:00:00', 'ipAddress': '203.0.113.7', 'userAgent': 'curl/8', 'referer': None},
                {'timestamp': '2024-01-02T11:00:00'},
            ],
        }
    )

    assert record.total_clicks == 2
    assert len(record.recent_clicks) == 2
    assert record.recent_clicks[0].ip_address == '203.0.113.7'
    assert record.recent_clicks[1].timestamp == datetime(2024, 1, 2, 11, 0, tzinfo=UTC)


def test_analytics_record_without_clicks():
    record = AnalyticsRecord.from_json(
        {'shortCode': 'abc123', 'originalUrl': 'https://example.com', 'totalClicks': 0, 'createdAt': '2024-01-01T10:00:00'}
    )
    assert record.recent_clicks == ()


def test_page_from_json(page_payload):
    """Ensure Page decodes its metadata and items."""
    page = Page.from_json(page_payload(['a', 'b'], number=1, total_pages=3, total_elements=22), UrlRecord.from_json)

    assert [record.short_code for record in page.content] == ['a', 'b']
    assert page.number == 1
    assert page.total_pages == 3
    assert page.total_elements == 22
    assert page.size == 10


def test_page_from_json_missing_metadata(page_payload):
    payload = page_payload(['a'])
    del payload['totalPages']

    with pytest.raises(MalformedResponseError):
        Page.from_json(payload, UrlRecord.from_json)

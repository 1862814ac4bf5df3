"""Data models exchanged with the remote URL shortener API.

All models are immutable snapshots. Wire payloads use camelCase keys and
ISO-8601 timestamps; `from_json()` constructors translate them and raise
MalformedResponseError when a payload doesn't have the expected shape.

Example:
    >>> record = UrlRecord.from_json({
    ...     'id': '1',
    ...     'shortCode': 'abc123',
    ...     'originalUrl': 'https://example.com',
    ...     'createdAt': '2024-01-01T10:00:00',
    ...     'clicks': 3,
    ... })
    >>> record.short_code
    'abc123'
    >>> record.created_at
    datetime.datetime(2024, 1, 1, 10, 0, tzinfo=datetime.timezone.utc)
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, UTC
from collections.abc import Callable

from urlifyclient.exceptions import MalformedResponseError
from urlifyclient.types import JsonObject


# Java serializes LocalDateTime with up to nanosecond precision
_EXCESS_FRACTION = re.compile(r'(\.\d{6})\d+')


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 wire timestamp into an aware UTC datetime

    Naive timestamps are interpreted as UTC.

    Raises:
        MalformedResponseError:
            If the value is not an ISO-8601 string.

    Example:
        >>> parse_timestamp('2024-01-01T23:00:00.123456789')
        datetime.datetime(2024, 1, 1, 23, 0, 0, 123456, tzinfo=datetime.timezone.utc)
    """
    try:
        parsed = datetime.fromisoformat(_EXCESS_FRACTION.sub(r'\1', value))
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f'Invalid timestamp: {value!r}') from e
    return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed.astimezone(UTC)


def _optional_timestamp(value: str | None) -> datetime | None:
    return None if value is None else parse_timestamp(value)


def _malformed(model: type, data: object) -> MalformedResponseError:
    return MalformedResponseError(f'Malformed {model.__name__} payload: {data!r}')


# fmt: off
@dataclass(frozen=True)
class User:
    id: str                             # Server-assigned user identifier
    username: str
    email: str
# fmt: on

    @classmethod
    def from_json(cls, data: JsonObject) -> 'User':
        """Build a user from its JSON form

        The id may be a string or an integer; username and email must be
        non-empty strings.
        """
        try:
            user_id, username, email = data['id'], data['username'], data['email']
        except (KeyError, TypeError) as e:
            raise _malformed(cls, data) from e

        # bool is an int subclass
        if isinstance(user_id, bool) or not isinstance(user_id, str | int) or user_id == '':
            raise _malformed(cls, data)
        if not all(isinstance(value, str) and value for value in (username, email)):
            raise _malformed(cls, data)
        return cls(id=str(user_id), username=username, email=email)

    def to_json(self) -> JsonObject:
        return {'id': self.id, 'username': self.username, 'email': self.email}


# fmt: off
@dataclass(frozen=True)
class Session:
    token: str                          # Opaque bearer token
    user: User                          # User snapshot taken at login time
# fmt: on

    @classmethod
    def from_json(cls, data: JsonObject) -> 'Session':
        """Build a session from an authentication response ({token, user, ...})"""
        try:
            token = data['token']
            user = data['user']
        except (KeyError, TypeError) as e:
            raise _malformed(cls, data) from e
        if not isinstance(token, str) or not token or not isinstance(user, dict):
            raise _malformed(cls, data)
        return cls(token=token, user=User.from_json(user))


# fmt: off
@dataclass(frozen=True)
class UrlRecord:
    id: str
    short_code: str                     # External-facing identifier, generated by the server
    original_url: str                   # Long URL the short code redirects to
    created_at: datetime
    clicks: int = 0                     # Server-owned, monotonically non-decreasing
    expires_at: datetime | None = None  # None if the link never expires
    short_url: str | None = None        # Absolute short URL as seen by the server
# fmt: on

    @classmethod
    def from_json(cls, data: JsonObject) -> 'UrlRecord':
        try:
            return cls(
                id=str(data['id']),
                short_code=data['shortCode'],
                original_url=data['originalUrl'],
                created_at=parse_timestamp(data['createdAt']),
                clicks=int(data.get('clicks') or 0),
                expires_at=_optional_timestamp(data.get('expiresAt')),
                short_url=data.get('shortUrl'),
            )
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise _malformed(cls, data) from e


# fmt: off
@dataclass(frozen=True)
class ClickEvent:
    timestamp: datetime                 # Aware UTC datetime of the click
    ip_address: str | None = None
    user_agent: str | None = None
    referer: str | None = None
# fmt: on

    @classmethod
    def from_json(cls, data: JsonObject) -> 'ClickEvent':
        try:
            return cls(
                timestamp=parse_timestamp(data['timestamp']),
                ip_address=data.get('ipAddress'),
                user_agent=data.get('userAgent'),
                referer=data.get('referer'),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise _malformed(cls, data) from e


# fmt: off
@dataclass(frozen=True)
class AnalyticsRecord:
    short_code: str
    original_url: str
    total_clicks: int
    created_at: datetime
    expires_at: datetime | None = None
    recent_clicks: tuple[ClickEvent, ...] = field(default_factory=tuple)
# fmt: on

    @classmethod
    def from_json(cls, data: JsonObject) -> 'AnalyticsRecord':
        try:
            return cls(
                short_code=data['shortCode'],
                original_url=data['originalUrl'],
                total_clicks=int(data.get('totalClicks') or 0),
                created_at=parse_timestamp(data['createdAt']),
                expires_at=_optional_timestamp(data.get('expiresAt')),
                recent_clicks=tuple(ClickEvent.from_json(click) for click in data.get('recentClicks') or ()),
            )
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise _malformed(cls, data) from e


# fmt: off
@dataclass(frozen=True)
class Page[T]:
    content: tuple[T, ...]              # Items on this page
    total_pages: int
    total_elements: int
    size: int                           # Requested page size
    number: int                         # Zero-based page index
# fmt: on

    @classmethod
    def from_json(cls, data: JsonObject, item: Callable[[JsonObject], T]) -> 'Page[T]':
        try:
            return cls(
                content=tuple(item(entry) for entry in data['content']),
                total_pages=int(data['totalPages']),
                total_elements=int(data['totalElements']),
                size=int(data['size']),
                number=int(data['number']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise _malformed(cls, data) from e


# fmt: off
@dataclass(frozen=True)
class ClickBucket:
    date: date                          # UTC calendar day
    count: int                          # Clicks recorded on that day
# fmt: on


# fmt: off
@dataclass(frozen=True)
class AnalyticsSummary:
    total_urls: int
    total_clicks: int
    average_clicks: int                 # Clicks per URL, rounded half up
# fmt: on

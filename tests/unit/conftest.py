"""Shared fixtures for the client unit tests.

Every HTTP exchange goes through httpx.MockTransport; no test touches the network.
"""

from collections.abc import Callable

import httpx
import pytest

from urlifyclient.gateway import ApiGateway
from urlifyclient.models import User
from urlifyclient.notifications import NotificationCenter
from urlifyclient.routing import AccessGuard, Router
from urlifyclient.session import SessionStore
from urlifyclient.store import MemoryPersistentStore


API_BASE_URL = 'http://api.test/api'
BACKEND_ROOT = 'http://api.test'
APP_ORIGIN = 'http://app.test'


# -------------------------------
# Session
# -------------------------------


@pytest.fixture
def user():
    return User(id='1', username='jane', email='jane@example.com')


@pytest.fixture
def store():
    return MemoryPersistentStore()


@pytest.fixture
def sessions(store):
    return SessionStore(store)


@pytest.fixture
def logged_in(sessions, user):
    """SessionStore holding an active session for `user`."""
    sessions.login('test-token', user)
    return sessions


# -------------------------------
# Routing & notifications
# -------------------------------


@pytest.fixture
def guard(sessions):
    return AccessGuard(sessions)


@pytest.fixture
def router(guard):
    return Router(guard, backend_root=BACKEND_ROOT)


@pytest.fixture
def notifier():
    return NotificationCenter()


# -------------------------------
# Gateway
# -------------------------------


@pytest.fixture
def make_gateway(sessions, router) -> Callable[..., ApiGateway]:
    """Build an ApiGateway whose requests are answered by `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> ApiGateway:
        client = httpx.AsyncClient(base_url=API_BASE_URL, transport=httpx.MockTransport(handler))
        return ApiGateway(sessions, router, client=client)

    return _make


# -------------------------------
# Wire payloads
# -------------------------------


@pytest.fixture
def url_payload():
    """Factory for UrlRecord wire payloads."""

    def _payload(short_code: str = 'abc123', clicks: int = 0, **overrides) -> dict:
        payload = {
            'id': short_code,
            'shortCode': short_code,
            'originalUrl': f'https://example.com/{short_code}',
            'shortUrl': f'{BACKEND_ROOT}/{short_code}',
            'createdAt': '2024-01-01T10:00:00',
            'expiresAt': None,
            'clicks': clicks,
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def page_payload(url_payload):
    """Factory for Page<UrlRecord> wire payloads."""

    def _payload(codes: list[str], number: int = 0, total_pages: int = 1, total_elements: int | None = None) -> dict:
        return {
            'content': [url_payload(code) for code in codes],
            'totalPages': total_pages,
            'totalElements': len(codes) if total_elements is None else total_elements,
            'size': 10,
            'number': number,
        }

    return _payload

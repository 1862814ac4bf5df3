"""Helper utilities for the URL shortener client.

Functions:
    get_short_url(shortcode: str, origin: str) -> str
        Get string representation of short URL for a given shortcode
    backend_root(api_base_url: str) -> str
        Strip the API prefix from the API base URL to reach the service root
    expiry_hours(expiry: datetime, now: datetime | None = None) -> int
        Convert an absolute expiry into whole hours from now (minimum 1)
    missing_environment(*names: str) -> list[str]
        List the environment variables that are unset or empty
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from urlifyclient.utils.helpers import get_short_url, backend_root
    >>> get_short_url('abc123', 'https://urlify.example.com/')
    'https://urlify.example.com/abc123'

    >>> backend_root('http://localhost:8080/api')
    'http://localhost:8080'
"""

import os
import re
import math
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from urlifyclient.constants import ONE_HOUR_SECONDS
from urlifyclient.exceptions import MissingEnvironmentVariableError


_API_SUFFIX = re.compile(r'/api/?$')


def get_short_url(shortcode: str, origin: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        origin (str): public origin of the application, e.g. 'https://urlify.example.com'

    Returns:
        str: short url string representation
    """
    return f'{origin.rstrip("/")}/{shortcode}'


def backend_root(api_base_url: str) -> str:
    """Return the service root of the remote API

    Short URL redirects are served at the service root, not under the API prefix.

    Example:
        >>> backend_root('https://api.example.com/api/')
        'https://api.example.com'
        >>> backend_root('https://api.example.com')
        'https://api.example.com'
    """
    return _API_SUFFIX.sub('', api_base_url).rstrip('/')


def expiry_hours(expiry: datetime, now: datetime | None = None) -> int:
    """Convert an absolute expiry instant into whole hours from now

    The remote API expects a relative expiry in hours. The difference is rounded
    up to the next whole hour and clamped to a minimum of 1 hour, so expiries in
    the past or less than an hour away become 1 hour instead of being rejected.

    Args:
        expiry (datetime):
            Chosen expiry instant. Naive values are interpreted as local time.
        now (datetime | None):
            Reference instant. Defaults to the current time.

    Returns:
        int: Hours from now, at least 1.

    Example:
        >>> now = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
        >>> expiry_hours(datetime(2025, 1, 1, 14, 30, tzinfo=UTC), now=now)
        3
        >>> expiry_hours(datetime(2025, 1, 1, 12, 30, tzinfo=UTC), now=now)
        1
    """
    now = datetime.now(UTC) if now is None else now.astimezone(UTC)
    delta = expiry.astimezone(UTC) - now
    return max(1, math.ceil(delta.total_seconds() / ONE_HOUR_SECONDS))


def missing_environment(*names: str) -> list[str]:
    """Return the subset of `names` that is unset or empty in the environment"""
    return [name for name in names if not os.environ.get(name)]


def require_environment(*names: str) -> Callable:
    """Decorator: refuse to run `func` until every variable in `names` is set.

    Raises:
        MissingEnvironmentVariableError: Lists every missing or empty variable.

    Example:
        >>> @require_environment('REDIS_HOST')
        ... def redis_config():
        ...     pass
        >>> redis_config()
        MissingEnvironmentVariableError: Set REDIS_HOST in the environment (missing or empty).
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if missing := missing_environment(*names):
                raise MissingEnvironmentVariableError(f'Set {", ".join(missing)} in the environment (missing or empty).')
            return func(*args, **kwargs)

        return wrapper

    return decorator

"""Input validators for user-facing forms.

Functions:
    validate_url(raw_url: str) -> str
        Return the stripped URL, or raise ValidationError when it isn't a
        structurally well-formed absolute URL.

Example:
    >>> validate_url('  https://example.com/a?b=c ')
    'https://example.com/a?b=c'
    >>> validate_url('example.com')
    Traceback (most recent call last):
        ...
    urlifyclient.exceptions.ValidationError: Please enter a valid URL
"""

import urllib.parse

from urlifyclient.exceptions import ValidationError


EMPTY_URL_MESSAGE = 'Please enter a URL'
INVALID_URL_MESSAGE = 'Please enter a valid URL'


def validate_url(raw_url: str | None) -> str:
    """Check that `raw_url` is an absolute URL with a scheme and a host

    Unlike a bare WHATWG URL parse, hostless URLs such as `mailto:a@b.c` or
    `data:text/plain,hi` are rejected: only links a short URL can redirect a
    browser to are accepted.

    Raises:
        ValidationError: With EMPTY_URL_MESSAGE or INVALID_URL_MESSAGE.
    """
    url = (raw_url or '').strip()
    if not url:
        raise ValidationError(EMPTY_URL_MESSAGE)

    try:
        components = urllib.parse.urlsplit(url)
        # Accessing the port validates it (e.g. 'http://host:99999')
        components.port
    except ValueError as e:
        raise ValidationError(INVALID_URL_MESSAGE) from e

    if not components.scheme or not components.netloc or not components.hostname:
        raise ValidationError(INVALID_URL_MESSAGE)
    if any(char.isspace() for char in url):
        raise ValidationError(INVALID_URL_MESSAGE)
    return url

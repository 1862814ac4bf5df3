"""Utility functions for client configuration management.

The client is configured exclusively through environment variables. Each
environment (`APP_ENV`) may point at a different API deployment and a
different session store backend.

`load_config()` gathers everything into a single dictionary:

    {
        "api_base_url": "http://localhost:8080/api",
        "app_origin": "http://localhost:3000",
        "active_backend": "redis",
        "redis": {
            "host": "localhost",
            "port": 6379,
            "db": 0,
            "username": null,
            "password": null,
            "prefix": "urlify:local"
        }
    }

The section under the active backend's name holds the keyword arguments for
that backend's persistent store.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for shared stores, or None if `APP_NAME` is not set.

    api_base_url() -> str
        Return the remote API base URL (`URLIFY_API_BASE_URL`).

    app_origin() -> str
        Return the public origin short URLs are built on (`URLIFY_APP_ORIGIN`).

    load_config() -> dict
        Load the client configuration as a Python dictionary.

Example:
    >>> from urlifyclient.utils.config import load_config
    >>> config = load_config()
    >>> config['active_backend']
    'file'
    >>> config['file']['path']
    '~/.urlify/session.json'
"""

import os
import logging
import urllib.parse

from urlifyclient.constants import ENV, Defaults
from urlifyclient.exceptions import BadConfigurationError
from urlifyclient.types import ClientConfig
from urlifyclient.utils.helpers import require_environment


logger = logging.getLogger(__name__)

STORE_BACKENDS = frozenset({'file', 'redis', 'memory'})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return key prefix for shared stores

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlify'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlify:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _http_url(name: str, default: str) -> str:
    url = os.environ.get(name) or default
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'} or not components.netloc:
        raise BadConfigurationError(f'{name} must be an absolute http(s) URL (given value: {url!r}).')
    return url.rstrip('/')


def api_base_url() -> str:
    """Return the remote API base URL, e.g. 'https://api.example.com/api'"""
    return _http_url(ENV.Client.API_BASE_URL, Defaults.API_BASE_URL)


def app_origin() -> str:
    """Return the public origin short URLs are built on, e.g. 'https://urlify.example.com'"""
    return _http_url(ENV.Client.APP_ORIGIN, Defaults.APP_ORIGIN)


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from e


@require_environment(ENV.Redis.HOST)
def _redis_config() -> dict:
    return {
        'host': os.environ[ENV.Redis.HOST],
        'port': _int_env(ENV.Redis.PORT, Defaults.REDIS_PORT),
        'db': _int_env(ENV.Redis.DB, Defaults.REDIS_DB),
        'username': os.environ.get(ENV.Redis.USERNAME) or None,
        'password': os.environ.get(ENV.Redis.PASSWORD) or None,
        'prefix': app_prefix(),
    }


def _file_config() -> dict:
    return {'path': os.environ.get(ENV.Client.STORE_PATH) or Defaults.STORE_PATH}


def load_config() -> ClientConfig:
    """Load the client configuration from environment variables

    Returns:
        dict: The client configuration (see module docstring).

    Raises:
        BadConfigurationError:
            If a URL or integer setting is malformed, or the store backend is unknown.
        MissingEnvironmentVariableError:
            If the active backend requires an environment variable which is not set.
    """
    backend = (os.environ.get(ENV.Client.STORE_BACKEND) or Defaults.STORE_BACKEND).lower()
    if backend not in STORE_BACKENDS:
        supported = ', '.join(sorted(STORE_BACKENDS))
        raise BadConfigurationError(f'Unknown session store backend {backend!r} (supported: {supported}).')

    if backend == 'redis':
        store_config = _redis_config()
    elif backend == 'file':
        store_config = _file_config()
    else:
        store_config = {}

    config = {
        'api_base_url': api_base_url(),
        'app_origin': app_origin(),
        'active_backend': backend,
        backend: store_config,
    }
    logger.debug('Loaded client configuration.', extra={'appEnv': app_env(), 'backend': backend})
    return config

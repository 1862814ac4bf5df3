from enum import StrEnum


class SessionKey(StrEnum):
    """Durable keys holding the persisted session."""

    TOKEN = 'token'  # Opaque bearer token string
    USER = 'user'  # JSON-serialized user snapshot


class Route(StrEnum):
    """Application routes (view entry points)."""

    ROOT = '/'
    LOGIN = '/login'
    REGISTER = '/register'
    DASHBOARD = '/dashboard'
    URLS = '/urls'
    ANALYTICS = '/analytics'


PUBLIC_ROUTES = frozenset({Route.LOGIN, Route.REGISTER})
PROTECTED_ROUTES = frozenset({Route.DASHBOARD, Route.URLS, Route.ANALYTICS})


class Defaults:
    """Default client settings."""

    API_BASE_URL = 'http://localhost:8080/api'
    APP_ORIGIN = 'http://localhost:3000'
    STORE_BACKEND = 'file'
    STORE_PATH = '~/.urlify/session.json'
    REQUEST_TIMEOUT = 30.0  # seconds
    REDIS_PORT = 6379
    REDIS_DB = 0
    PAGE_SIZE = 10  # URLs per listing page
    ANALYTICS_DAYS = 7  # Distinct days kept in a bucketed click series


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Client(StrEnum):
        API_BASE_URL = 'URLIFY_API_BASE_URL'
        APP_ORIGIN = 'URLIFY_APP_ORIGIN'
        STORE_BACKEND = 'URLIFY_STORE_BACKEND'
        STORE_PATH = 'URLIFY_STORE_PATH'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


ONE_HOUR_SECONDS = 3_600  # 60 * 60

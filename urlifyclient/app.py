"""Wire the client together.

Construction order matters: the SessionStore reads the persistent store
synchronously while it is built, before the AccessGuard or any controller can
observe session state.

Example:
    >>> app = build_app()
    >>> app.router.navigate('/urls').view
    '/login'
    >>> await app.auth.login('jane@example.com', 's3cret')
    >>> await app.urls.load_page(0)
    >>> await app.aclose()
"""

import logging
from dataclasses import dataclass
from collections.abc import Callable
from datetime import datetime

import httpx

from urlifyclient.analytics import AnalyticsController
from urlifyclient.controllers import AuthController, UrlResourceController
from urlifyclient.gateway import ApiGateway
from urlifyclient.notifications import NotificationCenter
from urlifyclient.routing import AccessGuard, Router
from urlifyclient.session import SessionStore
from urlifyclient.store import FilePersistentStore, MemoryPersistentStore, PersistentStoreBase, RedisPersistentStore
from urlifyclient.types import ClientConfig, Confirm
from urlifyclient.utils import backend_root, load_config


logger = logging.getLogger(__name__)


def create_store(config: ClientConfig) -> PersistentStoreBase:
    """Instantiate the persistent store of the configured backend"""
    backend = config['active_backend']
    settings = config.get(backend, {})

    if backend == 'redis':
        redis_config = {f'redis_{k}': v for k, v in settings.items() if k != 'prefix'}
        return RedisPersistentStore(**redis_config, prefix=settings.get('prefix'))
    if backend == 'file':
        return FilePersistentStore(settings['path'])
    return MemoryPersistentStore()


@dataclass
class Application:
    config: ClientConfig
    store: PersistentStoreBase
    sessions: SessionStore
    notifications: NotificationCenter
    guard: AccessGuard
    router: Router
    gateway: ApiGateway
    auth: AuthController
    urls: UrlResourceController
    analytics: AnalyticsController

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def __aenter__(self) -> 'Application':
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def build_app(
    config: ClientConfig | None = None,
    *,
    store: PersistentStoreBase | None = None,
    client: httpx.AsyncClient | None = None,
    confirm: Confirm | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Application:
    """Build a fully wired client application

    Args:
        config (ClientConfig | None):
            Client configuration. Loaded from the environment if None.
        store (PersistentStoreBase | None):
            Pre-initialized persistent store. Created from `config` if None.
        client (httpx.AsyncClient | None):
            Pre-initialized HTTP client, e.g. with a mock transport.
        confirm (Confirm | None):
            Confirmation prompt used before destructive operations.
        clock (Callable[[], datetime] | None):
            Source of "now" for expiry conversion.
    """
    config = load_config() if config is None else config
    store = create_store(config) if store is None else store

    sessions = SessionStore(store)
    notifications = NotificationCenter()
    guard = AccessGuard(sessions)
    router = Router(guard, backend_root=backend_root(config['api_base_url']))
    gateway = ApiGateway(sessions, router, base_url=config['api_base_url'], client=client)

    url_options = {'confirm': confirm} if confirm is not None else {}
    app = Application(
        config=config,
        store=store,
        sessions=sessions,
        notifications=notifications,
        guard=guard,
        router=router,
        gateway=gateway,
        auth=AuthController(gateway, sessions, router, notifications),
        urls=UrlResourceController(gateway, notifications, origin=config['app_origin'], clock=clock, **url_options),
        analytics=AnalyticsController(gateway),
    )
    logger.debug('Application built.', extra={'backend': config['active_backend'], 'authenticated': sessions.is_authenticated})
    return app

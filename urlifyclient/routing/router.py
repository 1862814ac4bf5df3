"""Client-side router resolving locations into views.

Resolution rules, applied on every `navigate()` call:

    1. '/'                          -> redirect to '/dashboard'
    2. protected view, logged out   -> redirect to '/login'
    3. known view                   -> render it
    4. unknown single-segment path  -> short code, external redirect to the
                                       service root (not under the API prefix)
    5. anything else                -> not found

Example:
    >>> router = Router(AccessGuard(sessions), backend_root='https://api.example.com')
    >>> router.navigate('/urls').view          # logged out
    '/login'
    >>> router.navigate('/abc123').external_url
    'https://api.example.com/abc123'
"""

import re
import logging
from dataclasses import dataclass
from collections.abc import Iterable

from urlifyclient.constants import PUBLIC_ROUTES, Route
from urlifyclient.routing.access_guard import AccessGuard


logger = logging.getLogger(__name__)

_SHORT_CODE_PATH = re.compile(r'^/(?P<code>[A-Za-z0-9_-]+)/?$')


# fmt: off
@dataclass(frozen=True)
class Navigation:
    requested: str                      # Path asked for
    path: str                           # Location after redirects
    view: str | None                    # View to render, None for external redirects and unknown paths
    external_url: str | None = None     # Set when the browser must leave the application
# fmt: on

    @property
    def redirected(self) -> bool:
        return self.requested != self.path

    @property
    def found(self) -> bool:
        return self.view is not None or self.external_url is not None


class Router:
    """Navigator implementation backed by an AccessGuard

    Attributes:
        current (Navigation | None):
            The latest resolved navigation.
        history (list[Navigation]):
            Every navigation, oldest first.
    """

    def __init__(self, guard: AccessGuard, backend_root: str, views: Iterable[str] | None = None):
        self.guard = guard
        self.backend_root = backend_root.rstrip('/')
        self.views = frozenset(views) if views is not None else PUBLIC_ROUTES | guard.protected
        self.current: Navigation | None = None
        self.history: list[Navigation] = []

    def navigate(self, path: str) -> Navigation:
        navigation = self.resolve(path)
        self.current = navigation
        self.history.append(navigation)
        logger.debug(
            'Navigated.',
            extra={'requested': navigation.requested, 'path': navigation.path, 'view': navigation.view},
        )
        return navigation

    def resolve(self, path: str) -> Navigation:
        requested = path
        path = self._normalize(path)
        if path == Route.ROOT:
            path = Route.DASHBOARD

        if path in self.views:
            target = self.guard.check(path)
            return Navigation(requested=requested, path=target, view=target)

        match = _SHORT_CODE_PATH.match(path)
        if match:
            external_url = f'{self.backend_root}/{match["code"]}'
            return Navigation(requested=requested, path=path, view=None, external_url=external_url)

        return Navigation(requested=requested, path=path, view=None)

    @staticmethod
    def _normalize(path: str) -> str:
        path = path.split('?', 1)[0].split('#', 1)[0].strip() or Route.ROOT
        if not path.startswith('/'):
            path = f'/{path}'
        if len(path) > 1:
            path = path.rstrip('/') or Route.ROOT
        return path

from collections.abc import Iterable

from urlifyclient.constants import PROTECTED_ROUTES, Route
from urlifyclient.session.session_store import SessionStore


class AccessGuard:
    """Decide whether a view may be rendered for the current session

    Protected views are permitted iff the SessionStore reports an authenticated
    session at evaluation time. Nothing is cached: the router asks on every
    navigation, so a logout revokes access on the very next one.
    """

    def __init__(self, session_store: SessionStore, protected: Iterable[str] = PROTECTED_ROUTES, login_path: str = Route.LOGIN):
        self.session_store = session_store
        self.protected = frozenset(protected)
        self.login_path = login_path

    def is_protected(self, path: str) -> bool:
        return path in self.protected

    def permits(self, path: str) -> bool:
        return not self.is_protected(path) or self.session_store.is_authenticated

    def check(self, path: str) -> str:
        """Return `path` if it may be rendered, otherwise the login entry point"""
        return path if self.permits(path) else self.login_path

"""In-memory session state mirrored to a durable persistent store.

SessionStore is the only owner of the current Session. The persistent store
is a durable mirror that is read exactly once, synchronously, when the
SessionStore is constructed. Every later change goes through one of two
mutation paths:

    - `login(token, user)`: persist both keys, then swap the session in.
    - `logout()`: remove both keys, then swap the session out. A store failure
      is logged and the session is swapped out regardless.

Subscribers are notified after each swap with the new `Session | None`.

Example:
    >>> from urlifyclient.store import MemoryPersistentStore
    >>> store = MemoryPersistentStore()
    >>> sessions = SessionStore(store)
    >>> sessions.is_authenticated
    False
    >>> sessions.login('opaque-token', User(id='1', username='jane', email='jane@example.com'))
    Session(token='opaque-token', user=User(id='1', username='jane', email='jane@example.com'))
    >>> SessionStore(store).is_authenticated  # a reload restores the session
    True
"""

import json
import logging
from collections.abc import Callable

from beartype import beartype

from urlifyclient.constants import SessionKey
from urlifyclient.exceptions import MalformedResponseError, PersistenceCorruptionError
from urlifyclient.models import Session, User
from urlifyclient.store.base import PersistentStoreBase
from urlifyclient.store.exceptions import StoreError
from urlifyclient.types import SessionListener


logger = logging.getLogger(__name__)

# Values a careless writer may have stored in place of a user object
_PLACEHOLDER_PAYLOADS = frozenset({'', 'undefined', 'null'})


def parse_persisted_user(payload: str) -> User:
    """Parse the serialized user snapshot kept in the persistent store

    Raises:
        PersistenceCorruptionError:
            If the payload is not a JSON object with the expected user fields.
    """
    if payload.strip() in _PLACEHOLDER_PAYLOADS:
        raise PersistenceCorruptionError(f'Persisted user is a placeholder value ({payload!r}).')
    try:
        return User.from_json(json.loads(payload))
    except (json.JSONDecodeError, MalformedResponseError) as e:
        raise PersistenceCorruptionError('Persisted user payload is malformed.') from e


class SessionStore:
    """Owner of the current authentication session

    Attributes:
        store (PersistentStoreBase):
            Durable mirror of the session.

    Methods:
        login(token: str, user: User) -> Session:
            Persist and activate a new session.

        logout() -> bool:
            Remove and deactivate the current session. No-op when logged out.

        subscribe(listener: SessionListener) -> Callable[[], None]:
            Register a listener; returns a function which unregisters it.
    """

    def __init__(self, store: PersistentStoreBase):
        self.store = store
        self._listeners: list[SessionListener] = []
        self._session: Session | None = self._restore()

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def token(self) -> str | None:
        session = self._session
        return None if session is None else session.token

    @property
    def user(self) -> User | None:
        session = self._session
        return None if session is None else session.user

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @beartype
    def login(self, token: str, user: User) -> Session:
        session = Session(token=token, user=user)
        self.store.update(
            {
                SessionKey.TOKEN: token,
                SessionKey.USER: json.dumps(user.to_json()),
            }
        )
        self._session = session
        logger.info('Session started.', extra={'userId': user.id})
        self._notify()
        return session

    def logout(self) -> bool:
        """Clear the current session

        The in-memory session is cleared even when the persistent store cannot
        be updated; the store failure is logged.

        Returns:
            bool: True if a session was cleared, False if there was none.
        """
        if self._session is None:
            return False

        user_id = self._session.user.id
        try:
            self.store.delete(SessionKey.TOKEN, SessionKey.USER)
        except StoreError:
            logger.exception('Failed to remove the persisted session.', extra={'userId': user_id})
        self._session = None
        logger.info('Session ended.', extra={'userId': user_id})
        self._notify()
        return True

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        session = self._session
        for listener in list(self._listeners):
            listener(session)

    def _restore(self) -> Session | None:
        """Read the persisted session; discard it if it is corrupt"""
        token = self.store.get(SessionKey.TOKEN)
        payload = self.store.get(SessionKey.USER)
        if not token or payload is None:
            return None

        try:
            user = parse_persisted_user(payload)
        except PersistenceCorruptionError:
            logger.warning('Discarding malformed persisted session.', exc_info=True)
            self.store.delete(SessionKey.TOKEN, SessionKey.USER)
            return None

        logger.debug('Restored persisted session.', extra={'userId': user.id})
        return Session(token=token, user=user)

"""Unit tests for the SessionStore.

Test coverage includes:

1. Restoring a persisted session
   - A fresh store holds no session.
   - A token plus a well-formed user snapshot restore an authenticated session.
   - A token without a user (or vice versa) restores nothing.
   - Corrupt user payloads (bad JSON, placeholders, missing or mistyped fields)
     are discarded, both keys removed, and a second initialization is a no-op.

2. Login
   - Both keys are persisted together; the session survives a reload.
   - Invalid argument types are rejected.
   - A store write failure propagates and leaves the session logged out.

3. Logout
   - Both keys are removed together.
   - Logging out twice is a no-op the second time.
   - A store failure is logged and the in-memory session is still cleared.

4. Subscribers
   - Listeners are notified after every change and can unsubscribe.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from urlifyclient.exceptions import PersistenceCorruptionError
from urlifyclient.models import Session, User
from urlifyclient.session import SessionStore, parse_persisted_user
from urlifyclient.store import MemoryPersistentStore
from urlifyclient.store.exceptions import DataStoreError


USER_JSON = json.dumps({'id': '1', 'username': 'jane', 'email': 'jane@example.com'})


# -------------------------------
# 1. Restoring a persisted session
# -------------------------------


def test_fresh_store_is_unauthenticated(sessions):
    assert sessions.session is None
    assert sessions.token is None
    assert sessions.user is None
    assert not sessions.is_authenticated


def test_restore_persisted_session(user):
    """Ensure a reload restores the persisted session."""
    store = MemoryPersistentStore({'token': 'abc', 'user': USER_JSON})

    sessions = SessionStore(store)

    assert sessions.is_authenticated
    assert sessions.session == Session(token='abc', user=user)


@pytest.mark.parametrize(
    'persisted',
    [
        {'token': 'abc'},
        {'user': USER_JSON},
        {'token': '', 'user': USER_JSON},
    ],
)
def test_restore_partial_session(persisted):
    """Ensure a session is only restored when both keys are present."""
    assert not SessionStore(MemoryPersistentStore(persisted)).is_authenticated


@pytest.mark.parametrize(
    'payload',
    [
        '',
        'undefined',
        'null',
        '{not json',
        '[]',
        '{"id": "1"}',
        '"jane"',
        '{"id": null, "username": null, "email": null}',
        '{"id": "1", "username": null, "email": "jane@example.com"}',
        '{"id": "1", "username": "jane", "email": ""}',
        '{"id": "1", "username": "jane", "email": 7}',
        '{"id": true, "username": "jane", "email": "jane@example.com"}',
        '{"id": ["1"], "username": "jane", "email": "jane@example.com"}',
    ],
)
def test_restore_discards_corrupt_session(payload):
    """Ensure a corrupt user snapshot yields no session and removes both keys."""
    store = MemoryPersistentStore({'token': 'abc', 'user': payload})

    sessions = SessionStore(store)

    assert not sessions.is_authenticated
    assert store.data == {}

    # Initializing again over the cleaned store is a no-op
    store.delete = MagicMock(wraps=store.delete)
    assert not SessionStore(store).is_authenticated
    store.delete.assert_not_called()
    assert store.data == {}


def test_parse_persisted_user(user):
    assert parse_persisted_user(USER_JSON) == user


@pytest.mark.parametrize('payload', ['undefined', ' null ', '{'])
def test_parse_persisted_user_rejects_garbage(payload):
    with pytest.raises(PersistenceCorruptionError):
        parse_persisted_user(payload)


# -------------------------------
# 2. Login
# -------------------------------


def test_login_persists_both_keys(sessions, store, user):
    """Ensure login() writes token and user snapshot together."""
    store.update = MagicMock(wraps=store.update)

    session = sessions.login('abc', user)

    assert session == Session(token='abc', user=user)
    store.update.assert_called_once_with({'token': 'abc', 'user': json.dumps(user.to_json())})
    assert sessions.token == 'abc'
    assert sessions.user == user


def test_login_survives_reload(sessions, store, user):
    sessions.login('abc', user)
    assert SessionStore(store).session == Session(token='abc', user=user)


def test_login_replaces_existing_session(logged_in, store):
    other = User(id='2', username='john', email='john@example.com')

    logged_in.login('def', other)

    assert logged_in.user == other
    assert SessionStore(store).token == 'def'


@pytest.mark.parametrize('token', [None, 123])
def test_login_rejects_invalid_token(sessions, user, token):
    with pytest.raises(BeartypeCallHintParamViolation):
        sessions.login(token, user)
    assert not sessions.is_authenticated


def test_login_store_failure_keeps_session_out(sessions, store, user):
    """Ensure a failed write leaves the store logged out."""
    store.update = MagicMock(side_effect=DataStoreError("Can't write session file."))
    listener = MagicMock()
    sessions.subscribe(listener)

    with pytest.raises(DataStoreError):
        sessions.login('abc', user)

    assert not sessions.is_authenticated
    listener.assert_not_called()


# -------------------------------
# 3. Logout
# -------------------------------


def test_logout_removes_both_keys(logged_in, store):
    """Ensure logout() clears memory and the persistent store."""
    assert logged_in.logout() is True

    assert not logged_in.is_authenticated
    assert store.data == {}
    assert not SessionStore(store).is_authenticated


def test_logout_is_idempotent(logged_in, store):
    """Ensure a second logout does not touch the store."""
    logged_in.logout()
    store.delete = MagicMock(wraps=store.delete)

    assert logged_in.logout() is False
    store.delete.assert_not_called()


def test_logout_clears_memory_when_store_fails(logged_in, store, caplog):
    """Ensure logout() still ends the in-memory session if the store is unavailable."""
    store.delete = MagicMock(side_effect=DataStoreError("Can't connect to Redis at redis:6379/0 (delete failed)."))
    listener = MagicMock()
    logged_in.subscribe(listener)

    with caplog.at_level(logging.ERROR):
        assert logged_in.logout() is True

    assert not logged_in.is_authenticated
    listener.assert_called_once_with(None)
    assert 'Failed to remove the persisted session.' in caplog.text


# -------------------------------
# 4. Subscribers
# -------------------------------


def test_subscribers_are_notified(sessions, user):
    listener = MagicMock()
    sessions.subscribe(listener)

    session = sessions.login('abc', user)
    sessions.logout()
    sessions.logout()

    assert [c.args for c in listener.call_args_list] == [(session,), (None,)]


def test_unsubscribe(sessions, user):
    listener = MagicMock()
    unsubscribe = sessions.subscribe(listener)

    unsubscribe()
    unsubscribe()
    sessions.login('abc', user)

    listener.assert_not_called()

from urlifyclient.session.session_store import SessionStore, parse_persisted_user


__all__ = ['SessionStore', 'parse_persisted_user']

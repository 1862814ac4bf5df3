class RedisKeySchema:
    """Namespaced Redis keys for the persisted session.

    Layout: '[<prefix>:]session:<name>', e.g. 'urlify:prod:session:token'.
    Set a distinct prefix per app and environment when several share one Redis.
    """

    SESSION = 'session'

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    def session_key(self, name: str) -> str:
        key = f'{self.SESSION}:{name}'
        return key if self.prefix is None else f'{self.prefix}:{key}'

    def session_keys(self, *names: str) -> list[str]:
        return [self.session_key(name) for name in names]

"""JSON file backed persistent store.

The whole store is a single JSON object on disk, e.g.:

    {
        "token": "eyJhbGciOi...",
        "user": "{\"id\": \"1\", \"username\": \"jane\", \"email\": \"jane@example.com\"}"
    }

Every write replaces the file atomically (temporary file + rename), so keys
written together by `update()` land on disk together.
"""

import os
import json
import logging
import tempfile
from pathlib import Path
from collections.abc import Mapping

from beartype import beartype

from urlifyclient.store.base import PersistentStoreBase
from urlifyclient.store.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class FilePersistentStore(PersistentStoreBase):
    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    @beartype
    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    @beartype
    def update(self, values: Mapping[str, str]) -> 'FilePersistentStore':
        data = self._read()
        data.update(values)
        self._write(data)
        return self

    @beartype
    def delete(self, *keys: str) -> int:
        data = self._read()
        removed = sum(data.pop(key, None) is not None for key in keys)
        if removed:
            self._write(data)
        return removed

    def _read(self) -> dict[str, str]:
        """Load the JSON object on disk; an unreadable document counts as empty"""
        try:
            content = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise DataStoreError(f"Can't read session file {self.path}.") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            logger.warning('Session file is not valid JSON. Ignoring its contents.', extra={'path': str(self.path)})
            return {}
        if not isinstance(data, dict):
            logger.warning('Session file does not hold a JSON object. Ignoring its contents.', extra={'path': str(self.path)})
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        try:
            if not data:
                self.path.unlink(missing_ok=True)
                return

            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.chmod(tmp_path, 0o600)  # holds a bearer token
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise DataStoreError(f"Can't write session file {self.path}.") from e

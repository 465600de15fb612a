"""
File-backed string key/value store.

Plays the role browser localStorage plays for the web client: every value is a string, a
missing key reads as None, and the whole map lives in one JSON document. Writes go through a
temp file plus os.replace so a crash never leaves a half-written file behind.
"""

from collections.abc import Iterator
from contextlib import contextmanager
import os
from pathlib import Path
import tempfile
import threading

import orjson

from eventora.platform.exception.exceptions import LocalStorageError
from eventora.platform.logging.loguru_io import Logger


class LocalStorageClient:
    def __init__(self, path: Path | None = None) -> None:
        # path=None keeps everything in memory (tests, throwaway sessions)
        self._path = Path(path) if path is not None else None
        self._memory: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def path(self) -> Path | None:
        return self._path

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store lock across a read-modify-write sequence."""
        with self._lock:
            yield

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except LocalStorageError:
                Logger.base.warning(
                    f'⚠️ [LOCAL-STORAGE] Corrupt state file, starting fresh: {self._path}'
                )
                data = {}
            data[key] = value
            self._write_all(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            try:
                data = self._read_all()
            except LocalStorageError:
                data = {}
            data.pop(key, None)
            self._write_all(data)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._read_all())

    def _read_all(self) -> dict[str, str]:
        if self._path is None:
            return dict(self._memory)
        if not self._path.exists():
            return {}
        try:
            raw = orjson.loads(self._path.read_bytes() or b'{}')
        except (OSError, orjson.JSONDecodeError) as e:
            raise LocalStorageError(f'Cannot read local state {self._path}: {e}') from e
        if not isinstance(raw, dict):
            raise LocalStorageError(f'Local state {self._path} is not a key/value map')
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        if self._path is None:
            self._memory = dict(data)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f'.{self._path.name}.')
            try:
                with os.fdopen(fd, 'wb') as fh:
                    fh.write(orjson.dumps(data, option=orjson.OPT_INDENT_2))
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise LocalStorageError(f'Cannot write local state {self._path}: {e}') from e

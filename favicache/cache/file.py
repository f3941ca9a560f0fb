"""File system store adapter."""

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from favicache.exceptions import CacheAdapterError

logger = logging.getLogger(__name__)


class FileAdapter:
    """A store adapter that keeps each key in its own file under `root`.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a reader never sees a partially written value.
    """

    root: Path

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def get(self, key: str) -> bytes | None:
        """Read the value stored for `key`. Returns `None` when there is no file.

        Raises:
            - `CacheAdapterError` if the file exists but can't be read.
        """
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise CacheAdapterError(f"Failed to read `{key}` from {path}: {exc}") from exc

    def set(self, key: str, value: bytes) -> None:
        """Atomically write `value` for `key`.

        Raises:
            - `CacheAdapterError` if the value can't be written.
        """
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CacheAdapterError(f"Failed to write `{key}` to {path}: {exc}") from exc

    def delete(self, key: str) -> None:
        """Remove the file for `key` if there is one.

        Raises:
            - `CacheAdapterError` if the file can't be removed.
        """
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheAdapterError(f"Failed to delete `{key}` at {path}: {exc}") from exc

    def close(self) -> None:  # noqa: D102
        pass

    def _path(self, key: str) -> Path:
        # Keys contain `:`, which isn't portable in file names.
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return self.root / f"{digest}.json"

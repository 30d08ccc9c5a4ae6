"""
Durable key/value storage for the persisted session.

Each key is one UTF-8 file under the session directory, so the stored `company`
value can be read back verbatim and validated by the session manager.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from hr_dashboard.utils.config import session_dir
from hr_dashboard.utils.logger import get_logger

logger = get_logger()

TOKEN_KEY = "token"
COMPANY_KEY = "company"
FILE_MODE = 0o600

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def _check_key(key: str) -> str:
    if not key or not _KEY_RE.match(key) or key in (".", ".."):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class SessionStore:
    """Interface shared by the file-backed and in-memory stores."""

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear_session(self) -> None:
        """Delete both session keys. Safe when they are already absent."""
        self.remove(TOKEN_KEY)
        self.remove(COMPANY_KEY)

    def is_empty(self) -> bool:
        return self.get(TOKEN_KEY) is None and self.get(COMPANY_KEY) is None


class FileSessionStore(SessionStore):
    """
    Session keys persisted on disk so a restart picks the session back up.

    Storage: one file per key under `directory` (default data/session/).
    """

    def __init__(self, directory: Path | None = None) -> None:
        self._dir = Path(directory) if directory is not None else session_dir()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / _check_key(key)

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Session store read failed for %s: %s", key, e)
            return None

    def set(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(path.suffix + ".tmp")
        # owner read/write only
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(value)
        os.chmod(tmp, FILE_MODE)
        tmp.replace(path)

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass


class MemorySessionStore(SessionStore):
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(_check_key(key))

    def set(self, key: str, value: str) -> None:
        self._data[_check_key(key)] = value

    def remove(self, key: str) -> None:
        self._data.pop(_check_key(key), None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)

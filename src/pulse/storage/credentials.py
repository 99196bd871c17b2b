"""Credential store for session identity and device tokens.

Values are small strings keyed by ``CredentialKeys``. The file-backed store
keeps them in one JSON object readable only by the owner.
"""

import contextlib
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from src.pulse.config.logging import get_logger
from src.pulse.config.settings import get_settings
from src.pulse.errors import (
    StorageCorruptedError,
    StorageDeleteError,
    StorageLoadError,
    StorageSaveError,
)

logger = get_logger(__name__)


class CredentialKeys:
    """Keys used in the credential store."""

    USER_ID = "user_id"
    AUTH_TOKEN = "auth_token"
    DEVICE_TOKEN = "device_token"


class CredentialStore(ABC):
    """Key/value store for credentials."""

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store a value, replacing any existing one."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored value, or None when absent."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a value; deleting a missing key is not an error."""


class InMemoryCredentialStore(CredentialStore):
    """Process-local store."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def save(self, key: str, value: str) -> None:
        self._values[key] = value

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class FileCredentialStore(CredentialStore):
    """Store persisted as a JSON object in a single owner-only file."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: File holding the credentials (created on first save).
                If None, loads from settings.
        """
        self._path = Path(path) if path is not None else get_settings().credential_store_path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageLoadError(
                "credentials", details={"path": str(self._path), "error": str(e)}
            ) from e
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise StorageCorruptedError(details={"path": str(self._path)}) from e
        if not isinstance(data, dict):
            raise StorageCorruptedError(details={"path": str(self._path)})
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, values: dict[str, str], item: str, error_cls: type) -> None:
        """Replace the file atomically.

        The data goes to a temporary sibling created with mode 0o600 and is
        then renamed over the target, so the file is never readable by others
        and a failed write leaves the previous contents in place.
        """
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(json.dumps(values))
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
            raise error_cls(item, details={"path": str(self._path), "error": str(e)}) from e

    def save(self, key: str, value: str) -> None:
        values = self._load()
        values[key] = value
        self._write(values, key, StorageSaveError)
        logger.debug("credential_saved", key=key)

    def read(self, key: str) -> str | None:
        return self._load().get(key)

    def delete(self, key: str) -> None:
        values = self._load()
        if key not in values:
            return
        del values[key]
        self._write(values, key, StorageDeleteError)
        logger.debug("credential_deleted", key=key)

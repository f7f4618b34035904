import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class BaseBlobStore(ABC):
    """Contract for the key-value store holding artifact bytes."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if complete bytes are stored under key."""

    @abstractmethod
    def read(self, key: str) -> bytes:
        """Return the bytes stored under key.

        Raises:
            KeyError: if nothing is stored under key.
        """

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        """Store data under key, replacing any previous value."""


class FileSystemBlobStore(BaseBlobStore):
    """Stores each key as one file under a root directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def read(self, key: str) -> bytes:
        path = self._path(key)
        if not path.is_file():
            raise KeyError(key)
        return path.read_bytes()

    def write(self, key: str, data: bytes) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        # Write beside the target and rename so readers never see a partial file.
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid blob key '{key}'")
        return self._root / key

"""File-backed key/value storage for marker records."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class MarkerStoreError(Exception):
    """Exception raised when marker store operations fail."""

    pass


class StorageError(MarkerStoreError):
    """Exception raised when the storage medium cannot be read or written."""

    pass


class MarkerStorage:
    """Stores one file per key inside a root directory.

    Writes go to a temporary file in the same directory and are then
    renamed over the target, so readers never see a half-written record.

    Attributes:
        root: Directory holding the record files
    """

    def __init__(self, root: Path) -> None:
        """Initialize storage.

        Args:
            root: Directory holding the record files (created on first write)
        """
        self.root = Path(root).expanduser()
        logger.debug(f"Initialized MarkerStorage with root={self.root}")

    def _ensure_root(self) -> None:
        """Ensure the storage directory exists.

        Raises:
            StorageError: If directory creation fails
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to create storage directory {self.root}: {e}"
            logger.error(msg)
            raise StorageError(msg) from e

    def path_for(self, name: str) -> Path:
        """Get the file path for a record name.

        Args:
            name: Record filename (no directory components)

        Returns:
            Path to record file

        Raises:
            StorageError: If name would escape the storage directory
        """
        if not name or Path(name).name != name:
            raise StorageError(f"Invalid record name: {name!r}")
        return self.root / name

    def exists(self, name: str) -> bool:
        """Check whether a record exists."""
        return self.path_for(name).is_file()

    def read_bytes(self, name: str) -> bytes:
        """Read a record.

        Args:
            name: Record filename

        Returns:
            Raw record contents

        Raises:
            FileNotFoundError: If the record does not exist
            StorageError: If the record cannot be read
        """
        path = self.path_for(name)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise
        except OSError as e:
            msg = f"Failed to read {path}: {e}"
            logger.error(msg)
            raise StorageError(msg) from e

        logger.debug(f"Read {len(data)} bytes from {path}")
        return data

    def write_bytes(self, name: str, data: bytes) -> Path:
        """Atomically replace a record.

        Args:
            name: Record filename
            data: Full new record contents

        Returns:
            Path of the written record

        Raises:
            StorageError: If the record cannot be written
        """
        path = self.path_for(name)
        self._ensure_root()

        tmp_path = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".tmp_", dir=self.root)
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            msg = f"Failed to write {path}: {e}"
            logger.error(msg)
            raise StorageError(msg) from e
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.debug(f"Wrote {len(data)} bytes to {path}")
        return path

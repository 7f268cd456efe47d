"""
Persistence for the exercise collection.

The collection is stored as one JSON blob under a fixed key in a simple
key-value BlobStore.  PersistenceGateway never raises on ordinary storage
problems: a missing or unreadable blob loads as None, a rejected write
returns False.  Both are logged.

Several processes may share one data directory (``watch`` plus ad-hoc
commands run by hand or from cron), so FileBlobStore hands out a lock file
in that directory and the gateway holds it for every access.
"""

import logging
import os
import re
import tempfile
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import ContextManager, Iterator, Protocol

from filelock import FileLock

from ..core.config import STORE_KEY
from ..core.models import Exercise
from .serializers import ValidationError, exercises_to_json, json_to_exercises

logger = logging.getLogger(__name__)

LOCK_FILENAME = ".lock"


def write_atomic(path: Path, blob: bytes) -> None:
    """
    Write *blob* to *path* through a temporary file renamed over the target.

    Readers see either the old or the new content, never a truncated file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=path.suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(blob)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class BlobStore(Protocol):
    """Opaque get/set storage addressed by string key."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, blob: bytes) -> None: ...

    def delete(self, key: str) -> None: ...

    def lock(self) -> ContextManager[object]: ...


class MemoryBlobStore:
    """In-process BlobStore, used by tests and embedders."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, blob: bytes) -> None:
        self._data[key] = bytes(blob)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def lock(self) -> ContextManager[object]:
        # Nothing outside this process can see the data
        return nullcontext()


class FileBlobStore:
    """
    BlobStore keeping one file per key in a directory.

    Writes are atomic replacements.  lock() returns a lock on
    ``<directory>/.lock`` that excludes other processes and threads.
    """

    def __init__(self, directory: str | Path):
        """
        Initialize the blob store.

        Args:
            directory: Directory holding the blob files (created on first write)
        """
        self.directory = Path(directory)
        self._file_lock: FileLock | None = None

    def path_for(self, key: str) -> Path:
        """Return the file path used for *key*."""
        safe = re.sub(r"[^A-Za-z0-9._-]", "_", key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, blob: bytes) -> None:
        write_atomic(self.path_for(key), blob)

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)

    def lock(self) -> ContextManager[object]:
        if self._file_lock is None:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._file_lock = FileLock(str(self.directory / LOCK_FILENAME))
        return self._file_lock


class PersistenceGateway:
    """
    Load and save the whole exercise collection.

    All access holds the storage lock.  Callers that load, modify and save
    must do so inside transaction() so that a concurrent writer, in this
    process or another one, cannot slip in between and have its change
    silently overwritten.
    """

    def __init__(self, blob_store: BlobStore, key: str = STORE_KEY):
        self.blob_store = blob_store
        self.key = key
        self._lock = threading.RLock()

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock, self.blob_store.lock():
            yield

    @contextmanager
    def transaction(self) -> Iterator["PersistenceGateway"]:
        """Hold the storage lock for a load-mutate-save sequence."""
        with self._locked():
            yield self

    def load(self) -> list[Exercise] | None:
        """
        Load the saved collection.

        Returns:
            List of Exercise in saved order, or None if nothing is saved or
            the saved blob cannot be decoded
        """
        try:
            with self._locked():
                blob = self.blob_store.get(self.key)
        except OSError as e:
            logger.warning("Error reading exercises: %s", e)
            return None
        if blob is None:
            return None
        try:
            return json_to_exercises(blob)
        except ValidationError as e:
            logger.warning("Error loading exercises: %s", e)
            return None

    def save(self, exercises: list[Exercise]) -> bool:
        """
        Save the collection, replacing whatever was stored.

        Returns:
            True if the write succeeded, False otherwise
        """
        try:
            with self._locked():
                self.blob_store.set(self.key, exercises_to_json(exercises).encode("utf-8"))
        except OSError as e:
            logger.error("Error saving exercises: %s", e)
            return False
        return True

    def has_saved_data(self) -> bool:
        """Check if any collection blob is stored (decodable or not)."""
        try:
            with self._locked():
                return self.blob_store.get(self.key) is not None
        except OSError:
            return False

    def clear_saved_data(self) -> bool:
        """
        Remove the stored collection.

        Returns:
            True if nothing is stored afterwards
        """
        try:
            with self._locked():
                self.blob_store.delete(self.key)
        except OSError as e:
            logger.error("Error clearing exercises: %s", e)
        return not self.has_saved_data()

    def update_exercise(self, exercise: Exercise, exercises: list[Exercise]) -> list[Exercise]:
        """
        Replace the exercise with the same id and save.

        Args:
            exercise: Updated exercise
            exercises: Current collection

        Returns:
            New collection; unchanged (and not saved) if the id is unknown
        """
        for i, existing in enumerate(exercises):
            if existing.id == exercise.id:
                updated = list(exercises)
                updated[i] = exercise
                self.save(updated)
                return updated
        return list(exercises)

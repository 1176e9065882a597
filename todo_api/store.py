"""
Flat-file JSON persistence.

Each entity collection lives in one JSON document holding an array of
records.  Every operation is a full load or a full save: there is no
indexing and no partial update.  Mutations go through
:meth:`JsonStore.transaction`, which holds a per-file lock for the whole
load-mutate-save cycle so that concurrent requests cannot compute the same
id or overwrite each other's changes.

Writes land in a temporary file beside the target and are moved into place
with :func:`os.replace`, so readers never observe a half-written document.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from .errors import PersistenceError

logger = logging.getLogger(__name__)

Record = dict[str, Any]

# One lock per resolved store path, shared by every JsonStore instance.
_path_locks: dict[Path, threading.RLock] = {}
_registry_lock = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _registry_lock:
        lock = _path_locks.get(path)
        if lock is None:
            lock = threading.RLock()
            _path_locks[path] = lock
        return lock


class JsonStore:
    """
    Read-all / write-all store for one record collection.

    Args:
        path: Location of the JSON document.  Parent directories are
            created on the first save.
        indent: Indentation used when writing, for human-readable files.
        normalize: Applied to every loaded record, e.g. to rename keys
            written by an older layout.  Saves write the normalized form.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        indent: int = 2,
        normalize: Callable[[Record], Record] | None = None,
    ) -> None:
        self.path = Path(path).resolve()
        self.indent = indent
        self.normalize = normalize
        self._lock = _lock_for(self.path)

    def __repr__(self) -> str:
        return f"<JsonStore {self.path}>"

    def load_all(self) -> list[Record]:
        """
        Load every record from the store file.

        A missing file is an empty collection.  A file that cannot be read
        or parsed, or that does not hold a JSON array, raises
        :class:`PersistenceError`.
        """
        if not self.path.exists():
            logger.debug("Store file %s does not exist, returning empty list", self.path)
            return []

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                records = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.error("Error reading store file %s: %s", self.path, exc)
            raise PersistenceError(f"Unable to read {self.path}") from exc

        if not isinstance(records, list):
            logger.error(
                "Store file %s holds %s instead of a list",
                self.path,
                type(records).__name__,
            )
            raise PersistenceError(f"Unexpected content in {self.path}")

        if self.normalize is not None:
            records = [
                self.normalize(record) if isinstance(record, dict) else record
                for record in records
            ]

        logger.debug("Read %d records from %s", len(records), self.path)
        return records

    def save_all(self, records: list[Record]) -> None:
        """Replace the store file content with *records*."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(records, handle, indent=self.indent, ensure_ascii=False)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error writing store file %s: %s", self.path, exc)
            raise PersistenceError(f"Unable to write {self.path}") from exc

        logger.debug("Wrote %d records to %s", len(records), self.path)

    def read(self) -> list[Record]:
        """Load all records while holding the store lock."""
        with self._lock:
            return self.load_all()

    @contextmanager
    def transaction(self) -> Iterator[list[Record]]:
        """
        Serialise a load-mutate-save cycle on this store file.

        Yields the loaded record list for in-place mutation and saves it
        when the block exits normally.  If the block raises, nothing is
        written and the exception propagates.
        """
        with self._lock:
            records = self.load_all()
            yield records
            self.save_all(records)


def next_id(records: list[Record]) -> int:
    """Return ``max(existing ids) + 1``, or 1 for an empty collection."""
    ids = [record.get("id") for record in records]
    numeric_ids = [value for value in ids if isinstance(value, int)]
    return max(numeric_ids, default=0) + 1

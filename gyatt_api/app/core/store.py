"""
JSON record store with pluggable storage backends.

Each collection (``users``, ``missions``, ``suggestions`` and the
bookkeeping ``sequences``) is an ordered list of plain dictionaries
that is always read and written as a whole.  ``RecordStore`` wraps a
``StorageBackend``:

* ``JSONFileBackend`` keeps one pretty-printed ``<collection>.json``
  file per collection inside a data directory.  A missing file is
  created with the default value on first read.  A file that is not
  UTF-8 encoded or does not hold a JSON array raises ``StoreError``;
  it is never repaired automatically.
* ``MemoryBackend`` keeps deep copies in a dictionary and is used by
  the test suite.

Mutations go through ``RecordStore.transaction`` which holds a lock
per collection for the whole read-modify-write cycle, so two requests
in the same process cannot overwrite each other's changes.  Nothing
coordinates separate processes sharing a data directory.
"""

import copy
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .config import Settings, resolve_path
from .errors import StoreError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

USERS = "users"
MISSIONS = "missions"
SUGGESTIONS = "suggestions"
SEQUENCES = "sequences"


class StorageBackend(ABC):
    """Reads and writes whole collections."""

    def ensure_ready(self) -> None:
        """Prepare the backend for use.  Called once at startup."""

    @abstractmethod
    def read(self, collection: str, default: List[Record]) -> List[Record]:
        """Return the stored records, initialising the collection with ``default`` if absent."""

    @abstractmethod
    def write(self, collection: str, records: List[Record]) -> None:
        """Replace the stored collection with ``records``."""


class JSONFileBackend(StorageBackend):
    """Store each collection as a JSON array in ``<data_dir>/<collection>.json``."""

    def __init__(self, data_dir: os.PathLike) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def ensure_ready(self) -> None:
        # Failing here is fatal: the application cannot run without its
        # data directory.
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def read(self, collection: str, default: List[Record]) -> List[Record]:
        path = self.path_for(collection)
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.info("Initialising collection %s at %s", collection, path)
            self.write(collection, default)
            return copy.deepcopy(default)
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            raise StoreError(f"Collection {collection!r} at {path} is not valid UTF-8 JSON: {exc}") from exc
        except OSError as exc:
            raise StoreError(f"Cannot read collection {collection!r} at {path}: {exc}") from exc
        if not isinstance(data, list):
            raise StoreError(f"Collection {collection!r} at {path} is not a JSON array")
        return data

    def write(self, collection: str, records: List[Record]) -> None:
        path = self.path_for(collection)
        try:
            # Write to a sibling temp file and swap it in so a crash mid-write
            # never leaves a truncated collection behind.
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{collection}.", suffix=".tmp")
        except OSError as exc:
            raise StoreError(f"Cannot write collection {collection!r} at {path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Cannot write collection {collection!r} at {path}: {exc}") from exc


class MemoryBackend(StorageBackend):
    """Keep collections in process memory."""

    def __init__(self, initial: Optional[Dict[str, List[Record]]] = None) -> None:
        self._collections: Dict[str, List[Record]] = copy.deepcopy(initial or {})

    def read(self, collection: str, default: List[Record]) -> List[Record]:
        if collection not in self._collections:
            self._collections[collection] = copy.deepcopy(default)
        return copy.deepcopy(self._collections[collection])

    def write(self, collection: str, records: List[Record]) -> None:
        self._collections[collection] = copy.deepcopy(records)


class RecordStore:
    """Whole-collection load/save with serialized read-modify-write cycles."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, collection: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(collection, threading.Lock())

    def load(self, collection: str, default: Optional[List[Record]] = None) -> List[Record]:
        """Return the records of ``collection``, creating it from ``default`` if absent."""
        return self.backend.read(collection, [] if default is None else default)

    def save(self, collection: str, records: List[Record]) -> None:
        """Overwrite ``collection`` with ``records``."""
        with self._lock_for(collection):
            self.backend.write(collection, records)

    @contextmanager
    def transaction(self, collection: str) -> Iterator[List[Record]]:
        """Yield the records of ``collection`` for in-place mutation.

        The list is written back when the block exits normally.  If the
        block raises, nothing is written and the exception propagates.
        Transactions on the same collection run one at a time.
        """
        with self._lock_for(collection):
            records = self.load(collection)
            yield records
            self.backend.write(collection, records)

    def allocate_id(self, collection: str, records: List[Record]) -> int:
        """Return a fresh id for a record about to be added to ``records``.

        The id is ``max(id) + 1`` unless a higher id was handed out before
        and later deleted; the highest id ever allocated per collection is
        kept in the ``sequences`` collection so deleted ids stay retired.
        Call from inside the collection's transaction.
        """
        with self._lock_for(SEQUENCES):
            sequences = self.load(SEQUENCES)
            entry = next((seq for seq in sequences if seq.get("collection") == collection), None)
            if entry is None:
                entry = {"collection": collection, "lastId": 0}
                sequences.append(entry)
            new_id = max(next_id(records), int(entry.get("lastId", 0)) + 1)
            entry["lastId"] = new_id
            self.backend.write(SEQUENCES, sequences)
        return new_id


def build_store(settings: Settings) -> RecordStore:
    """Create the record store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "memory":
        return RecordStore(MemoryBackend())
    if settings.storage_backend != "file":
        raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")
    return RecordStore(JSONFileBackend(resolve_path(settings.data_dir)))


def next_id(records: List[Record]) -> int:
    """Return ``max(id) + 1`` or 1 for an empty collection.  Ids are never reused."""
    return max((record["id"] for record in records), default=0) + 1


def find_by_id(records: List[Record], record_id: int) -> Optional[Record]:
    return next((record for record in records if record.get("id") == record_id), None)


def remove_by_id(records: List[Record], record_id: int) -> bool:
    """Remove the record with ``record_id`` in place.  Returns ``False`` if none matched."""
    remaining = [record for record in records if record.get("id") != record_id]
    if len(remaining) == len(records):
        return False
    records[:] = remaining
    return True


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

"""
Whole-document persistence for the bookmark and category collections.

Each collection is stored as one JSON document of the shape
``{"<collection>": [record, ...]}``. Every mutation rewrites the full document;
there are no partial-record updates. Saves are atomic with respect to readers:
a load sees either the previous document or the new one, never a mix.
"""
import copy
import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Protocol

import aiofiles
import aiofiles.os

from services.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

_fsync = aiofiles.os.wrap(os.fsync)

BOOKMARKS = "bookmarks"
CATEGORIES = "categories"
COLLECTIONS = (BOOKMARKS, CATEGORIES)

Record = dict[str, Any]


class DocumentStore(Protocol):
    """Storage medium for whole collections of records."""

    async def exists(self, collection: str) -> bool:
        """Return True if a document for the collection has been written."""
        ...

    async def load(self, collection: str) -> list[Record]:
        """
        Return every record in the collection.

        Raises:
            StorageUnavailableError: If the document is missing, unreadable or corrupt.
        """
        ...

    async def save(self, collection: str, records: list[Record]) -> None:
        """
        Replace the collection's document with `records`.

        Raises:
            StorageUnavailableError: If the document cannot be written.
        """
        ...


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: '{collection}'")


def _parse_document(collection: str, raw: str) -> list[Record]:
    """Decode a document and pull out its record list."""
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageUnavailableError(collection, f"invalid JSON ({e.msg})") from e

    if not isinstance(document, dict) or collection not in document:
        raise StorageUnavailableError(collection, f"document has no '{collection}' key")
    records = document[collection]
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise StorageUnavailableError(collection, "records must be a list of objects")
    return records


class JsonFileDocumentStore:
    """
    One pretty-printed JSON file per collection inside a data directory.

    Writes go to a uniquely named temp file in the same directory which is
    flushed, fsynced and then swapped over the target with os.replace, so the
    rename is the only step a concurrent reader can observe.
    """

    def __init__(self, data_dir: Path, filenames: dict[str, str] | None = None) -> None:
        self._data_dir = Path(data_dir)
        filenames = filenames or {}
        self._paths = {
            name: self._data_dir / filenames.get(name, f"{name}.json")
            for name in COLLECTIONS
        }

    def path_for(self, collection: str) -> Path:
        """Path of the document holding `collection`."""
        _check_collection(collection)
        return self._paths[collection]

    async def exists(self, collection: str) -> bool:
        return await aiofiles.os.path.exists(self.path_for(collection))

    async def load(self, collection: str) -> list[Record]:
        path = self.path_for(collection)
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            raise StorageUnavailableError(collection, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            logger.error("Error decoding %s: %s", path, e)
            raise StorageUnavailableError(collection, "document is not valid UTF-8") from e
        return _parse_document(collection, raw)

    async def save(self, collection: str, records: list[Record]) -> None:
        path = self.path_for(collection)
        payload = json.dumps({collection: records}, indent=2, ensure_ascii=False)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
                await f.flush()
                await _fsync(f.fileno())
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            try:
                await aiofiles.os.remove(tmp_path)
            except OSError:
                pass
            raise StorageUnavailableError(collection, e.strerror or str(e)) from e


class InMemoryDocumentStore:
    """
    Dict-backed store with the same contract as the JSON file store.

    Records are deep-copied on the way in and out so callers can never mutate
    stored state without a save.
    """

    def __init__(self, documents: dict[str, list[Record]] | None = None) -> None:
        self._documents: dict[str, list[Record]] = {}
        for collection, records in (documents or {}).items():
            _check_collection(collection)
            self._documents[collection] = copy.deepcopy(records)

    async def exists(self, collection: str) -> bool:
        _check_collection(collection)
        return collection in self._documents

    async def load(self, collection: str) -> list[Record]:
        _check_collection(collection)
        if collection not in self._documents:
            raise StorageUnavailableError(collection, "document does not exist")
        return copy.deepcopy(self._documents[collection])

    async def save(self, collection: str, records: list[Record]) -> None:
        _check_collection(collection)
        self._documents[collection] = copy.deepcopy(records)

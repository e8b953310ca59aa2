"""
Document store backing the API.

The whole dataset is a single JSON document of named collections, each a
list of plain dicts. ``MemoryStore`` keeps it in memory only;
``JsonFileStore`` mirrors it to a file and rewrites the file after every
write.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import copy
import json
import logging
import os
import tempfile
import threading

logger = logging.getLogger(__name__)

DEFAULT_COLLECTIONS = ("users",)


class DocumentStore(ABC):
    """Keyed-collection store used by the services layer."""

    @abstractmethod
    def find_one(self, collection: str, **criteria: Any) -> Optional[Dict[str, Any]]:
        """Return a copy of the first document matching every criterion."""

    @abstractmethod
    def find_all(self, collection: str) -> List[Dict[str, Any]]:
        """Return copies of every document in a collection."""

    @abstractmethod
    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        """Append a document and persist it."""

    @abstractmethod
    def update_one(
        self, collection: str, criteria: Dict[str, Any], changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Merge ``changes`` into the first match and persist it."""


class MemoryStore(DocumentStore):
    """In-memory store. Also the base for the file-backed store."""

    def __init__(self, data: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self._lock = threading.RLock()
        self._data: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(data) if data else {}
        for name in DEFAULT_COLLECTIONS:
            self._data.setdefault(name, [])

    def _collection(self, name: str) -> List[Dict[str, Any]]:
        return self._data.setdefault(name, [])

    @staticmethod
    def _matches(document: Dict[str, Any], criteria: Dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in criteria.items())

    def _commit(self) -> None:
        pass

    def find_one(self, collection: str, **criteria: Any) -> Optional[Dict[str, Any]]:
        with self._lock:
            for document in self._collection(collection):
                if self._matches(document, criteria):
                    return copy.deepcopy(document)
        return None

    def find_all(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._collection(collection))

    def insert_one(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            stored = copy.deepcopy(document)
            self._collection(collection).append(stored)
            try:
                self._commit()
            except Exception:
                self._collection(collection).pop()
                raise
            return copy.deepcopy(stored)

    def update_one(
        self, collection: str, criteria: Dict[str, Any], changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        with self._lock:
            for document in self._collection(collection):
                if not self._matches(document, criteria):
                    continue
                previous = copy.deepcopy(document)
                document.update(copy.deepcopy(changes))
                try:
                    self._commit()
                except Exception:
                    document.clear()
                    document.update(previous)
                    raise
                return copy.deepcopy(document)
        return None


class JsonFileStore(MemoryStore):
    """
    Store mirrored to a JSON file.

    The file is read once when the store is opened and created with empty
    collections if it does not exist. Every write replaces the file
    atomically (temp file in the same directory, then ``os.replace``).
    I/O errors propagate to the caller and the in-memory change is undone.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(self._load())
        if not self.path.exists():
            self._commit()

    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self.path.exists():
            logger.info(f"Creating new document store at {self.path}")
            return {}
        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        logger.info(f"Loaded document store from {self.path} ({len(data.get('users', []))} users)")
        return data

    def _commit(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

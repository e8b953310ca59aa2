"""
Document store lifecycle.
"""
from functools import lru_cache
from socialapi.core.config import settings
from socialapi.db.store import DocumentStore, JsonFileStore


@lru_cache
def get_store() -> DocumentStore:
    """Open the JSON document configured by DB_PATH (once per process)."""
    return JsonFileStore(settings.DB_PATH)


def get_db() -> DocumentStore:
    """Dependency for getting the document store."""
    return get_store()


def init_db() -> DocumentStore:
    """Create the JSON document with empty collections if it is missing."""
    return get_store()

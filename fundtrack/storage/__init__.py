"""Mini README: Durable storage for the record store.

``json_repository`` reads and writes the three JSON blobs with graceful
fallback to seed data; ``autosave`` debounces writes after mutations.
"""

from .autosave import DebouncedAutosave
from .json_repository import JsonLedgerRepository

__all__ = ["DebouncedAutosave", "JsonLedgerRepository"]

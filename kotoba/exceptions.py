"""Exception types raised by the import pipeline and the word store."""

from typing import Optional


class KotobaError(Exception):
    """Base class for all Kotoba errors."""


class ParseFailure(KotobaError):
    """
    Raised when an input file cannot be decoded as the format its extension implies.
    
    Nothing has been applied to the store when this is raised.
    """
    
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")


class EmptyImportError(KotobaError):
    """Raised when normalization yields zero valid records."""
    
    def __init__(self, collection_name: str, reason: Optional[str] = None):
        self.collection_name = collection_name
        self.reason = reason or "no valid words found"
        super().__init__(f"Nothing to import into '{collection_name}': {self.reason}")


class PersistenceError(KotobaError):
    """Raised when the repository fails to save the word list."""


class InvalidRecordError(KotobaError, ValueError):
    """Raised when a record without kanji, meaning or collection is added."""

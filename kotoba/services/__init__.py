"""Services layer for business logic separation."""

from .merge import merge_batch
from .repository import BaseRepository, CSVRepository, JSONRepository
from .word_store import WordStore
from .vocabulary_service import ImportReport, ImportStatus, StorageBackend, VocabularyService

__all__ = [
    "merge_batch",
    "BaseRepository",
    "CSVRepository",
    "JSONRepository",
    "WordStore",
    "ImportReport",
    "ImportStatus",
    "StorageBackend",
    "VocabularyService",
]

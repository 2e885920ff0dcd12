"""
Vocabulary Service - application operations over the word store.

Separates import/storage logic from any UI layer, enabling:
- One entry point for adding, deleting, importing and browsing words
- Swappable storage backends (JSON, CSV)
- Testable business logic
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from ..config import Config, SettingsManager
from ..exceptions import EmptyImportError, ParseFailure, PersistenceError
from ..importing.normalizer import ImportNormalizer
from ..importing.readers import ParsedFile, read_import_file
from ..models import ImportBatch, WordRecord
from ..utils.helpers import utc_timestamp
from ..utils.parsing import TextParser
from .repository import RECORD_COLUMNS, BaseRepository, CSVRepository, JSONRepository
from .word_store import WordStore

logger = logging.getLogger(__name__)


class StorageBackend(Enum):
    """Available storage backends."""
    JSON = "json"
    CSV = "csv"


class ImportStatus(Enum):
    """Outcome of one import."""
    SUCCESS = "success"
    EMPTY = "empty"
    PARSE_FAILURE = "parse_failure"
    STORAGE_FAILURE = "storage_failure"


@dataclass(frozen=True)
class ImportReport:
    """User-facing summary of an import."""

    status: ImportStatus
    message: str
    source_name: str
    collection_name: str = ""
    imported: int = 0
    rejected: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ImportStatus.SUCCESS


class VocabularyService:
    """
    Service for managing the vocabulary notebook.

    Usage:
        service = VocabularyService()
        service.load()
        report = service.import_file("n5_words.xlsx")
        print(report.message)
        words = service.search("ねこ")
    """

    # Thread pool for blocking I/O operations
    _executor = ThreadPoolExecutor(max_workers=1)

    def __init__(
        self,
        store_path: Optional[str] = None,
        backend: Optional[StorageBackend] = None,
        settings: Optional[SettingsManager] = None,
        normalizer: Optional[ImportNormalizer] = None,
    ):
        """
        Initialize vocabulary service.

        Args:
            store_path: Path to the word list file
            backend: Storage backend (defaults to the STORE_BACKEND setting)
            settings: Settings manager (defaults to the shared instance)
            normalizer: Import normalizer (built from settings if omitted)
        """
        self.settings = settings or SettingsManager()
        self.backend = backend or StorageBackend(self.settings.get("STORE_BACKEND", Config.STORE_BACKEND))
        self.store_path = store_path or self.settings.get("STORE_FILE", Config.STORE_FILE)
        self.default_collection = self.settings.get("DEFAULT_COLLECTION", Config.DEFAULT_COLLECTION)

        self.normalizer = normalizer or ImportNormalizer(
            import_group=self.settings.get("IMPORT_GROUP", Config.IMPORT_GROUP),
            default_collection=self.default_collection,
        )
        self.store = WordStore(self._create_repository(), self.default_collection)

    def _create_repository(self) -> BaseRepository:
        """Create the repository for the configured backend."""
        if self.backend == StorageBackend.CSV:
            return CSVRepository(self.store_path)
        return JSONRepository(self.store_path)

    # ==================== Loading ====================

    @property
    def count(self) -> int:
        """Get total word count."""
        return len(self.store)

    def on_change(self, callback: Callable[[], None]) -> None:
        """Register a callback for data changes."""
        self.store.on_change(callback)

    def load(self) -> bool:
        """
        Load the word list from storage.

        Returns:
            True if loaded successfully
        """
        try:
            self.store.load()
            return True
        except PersistenceError as e:
            logger.error("%s", e)
            return False

    async def load_async(self) -> bool:
        """Load the word list without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.load)

    def get_all(self) -> Tuple[WordRecord, ...]:
        """All words, newest first."""
        return self.store.records

    def get_dataframe(self, records: Optional[Sequence[WordRecord]] = None) -> pd.DataFrame:
        """All words (or the given records) as a DataFrame, one row per record in order."""
        if records is None:
            records = self.store.records
        return pd.DataFrame([record.to_dict() for record in records], columns=RECORD_COLUMNS)

    # ==================== Selection ====================

    @property
    def active_collection(self) -> str:
        return self.settings.get("ACTIVE_COLLECTION", Config.ALL_FILTER)

    @property
    def active_group(self) -> str:
        return self.settings.get("ACTIVE_GROUP", Config.ALL_FILTER)

    def select_collection(self, name: str) -> None:
        """Switch the active collection and reset the group filter."""
        self.settings.set("ACTIVE_COLLECTION", name or Config.ALL_FILTER, persist=False)
        self.settings.set("ACTIVE_GROUP", Config.ALL_FILTER)

    def select_group(self, name: str) -> None:
        self.settings.set("ACTIVE_GROUP", name or Config.ALL_FILTER)

    # ==================== Mutations ====================

    def add_word(self, data: Mapping[str, Any]) -> WordRecord:
        """
        Add a word entered by the user.

        Args:
            data: Form values (kanji, furigana, meaning, example, group, collection)

        Returns:
            The stored record

        Raises:
            InvalidRecordError: kanji or meaning is missing
            PersistenceError: Saving failed
        """
        def field(key: str) -> str:
            return TextParser.to_text(data.get(key))

        collection = field("collection")
        if not collection:
            active = self.active_collection
            collection = active if active != Config.ALL_FILTER else self.default_collection

        record = WordRecord(
            id="",
            kanji=field("kanji"),
            meaning=field("meaning"),
            collection=collection,
            date_added=utc_timestamp(),
            furigana=field("furigana"),
            example=field("example"),
            group=field("group"),
        )
        return self.store.add(record)

    def delete_word(self, record_id: str) -> bool:
        """
        Delete a word by id.

        Returns:
            True if the word existed and was removed
        """
        return self.store.delete(record_id)

    # ==================== Import ====================

    def normalize(self, parsed: ParsedFile) -> ImportBatch:
        """
        Normalize a decoded file against the current store.

        Raises:
            EmptyImportError: Nothing valid in the file
        """
        taken = self.store.ids()
        if parsed.is_table:
            return self.normalizer.normalize_rows(parsed.value, parsed.source_name, taken)
        return self.normalizer.normalize(parsed.value, parsed.source_name, taken)

    def import_parsed(self, parsed: ParsedFile) -> ImportReport:
        """Normalize, merge and persist an already decoded file."""
        source = parsed.source_name
        try:
            batch = self.normalize(parsed)
        except EmptyImportError as e:
            logger.warning("Import of %s produced no words: %s", source, e.reason)
            return ImportReport(
                status=ImportStatus.EMPTY,
                message=f"No valid words found in {source}.",
                source_name=source,
                collection_name=e.collection_name,
            )

        except PersistenceError as e:
            logger.error("Import of %s aborted, word list unavailable: %s", source, e)
            return ImportReport(
                status=ImportStatus.STORAGE_FAILURE,
                message="Your word list could not be loaded, nothing was imported.",
                source_name=source,
            )

        try:
            stored = self.store.merge_import(batch)
        except PersistenceError as e:
            logger.error("Import of %s not saved: %s", source, e)
            return ImportReport(
                status=ImportStatus.STORAGE_FAILURE,
                message="Imported words could not be saved.",
                source_name=source,
                collection_name=batch.collection_name,
            )

        self.select_collection(batch.collection_name)
        return ImportReport(
            status=ImportStatus.SUCCESS,
            message=f"{len(stored)} words imported successfully!",
            source_name=source,
            collection_name=batch.collection_name,
            imported=len(stored),
            rejected=batch.rejected,
        )

    def import_file(self, path: Union[str, Path]) -> ImportReport:
        """
        Import a JSON, Excel or CSV file into the store.

        The store is only touched when at least one valid word was found.

        Args:
            path: File to import

        Returns:
            ImportReport describing the outcome
        """
        try:
            parsed = read_import_file(path)
        except ParseFailure as e:
            logger.error("%s", e)
            return ImportReport(
                status=ImportStatus.PARSE_FAILURE,
                message="Failed to import file. Please check the format.",
                source_name=Path(path).name,
            )
        return self.import_parsed(parsed)

    async def import_file_async(self, path: Union[str, Path]) -> ImportReport:
        """Import a file without blocking the event loop; imports run one at a time."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.import_file, path)

    # ==================== Browsing ====================

    def search(
        self,
        query: str = "",
        group: Optional[str] = None,
        collection: Optional[str] = None,
    ) -> List[WordRecord]:
        """
        Search words.

        Kanji and furigana match by substring, meaning case-insensitively.
        ``group`` and ``collection`` default to the active selection; "All"
        disables either filter.

        Args:
            query: Search text (empty matches everything)
            group: Group filter
            collection: Collection filter

        Returns:
            Matching records in store order
        """
        records = self.store.records
        if not records:
            return []

        group = group or self.active_group
        collection = collection or self.active_collection

        df = self.get_dataframe(records)
        mask = pd.Series(True, index=df.index)

        if query:
            mask &= (
                df["kanji"].str.contains(query, regex=False)
                | df["furigana"].str.contains(query, regex=False)
                | df["meaning"].str.lower().str.contains(query.lower(), regex=False)
            )

        if group != Config.ALL_FILTER:
            mask &= df["group"].replace("", Config.UNCATEGORIZED) == group

        if collection != Config.ALL_FILTER:
            mask &= df["collection"] == collection

        return [records[i] for i in df.index[mask.to_numpy()]]

    def get_groups(self, collection: Optional[str] = None) -> List[str]:
        """["All", *sorted groups] of a collection (the active one by default)."""
        collection = collection or self.active_collection
        groups = {
            record.display_group
            for record in self.store.records
            if collection == Config.ALL_FILTER or record.collection == collection
        }
        return [Config.ALL_FILTER] + sorted(groups)

    def get_collections(self) -> List[str]:
        """["All", *sorted collection names]."""
        return [Config.ALL_FILTER] + sorted({record.collection for record in self.store.records})

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get vocabulary statistics.

        Returns:
            Dictionary with totals per collection and per group
        """
        df = self.get_dataframe()
        if df.empty:
            return {
                "total_words": 0,
                "collections": {},
                "groups": {},
                "with_furigana": 0,
                "with_example": 0,
            }

        df["group"] = df["group"].replace("", Config.UNCATEGORIZED)
        return {
            "total_words": len(df),
            "collections": {k: int(v) for k, v in df.groupby("collection").size().items()},
            "groups": {k: int(v) for k, v in df.groupby("group").size().items()},
            "with_furigana": int((df["furigana"].str.strip() != "").sum()),
            "with_example": int((df["example"].str.strip() != "").sum()),
        }

    def export_csv(self, csv_path: str) -> bool:
        """Export the whole word list to a pipe-separated CSV file."""
        return CSVRepository(csv_path).save([record.to_dict() for record in self.store.records])

"""
Word Store - owner of the canonical ordered word list.

Every mutation (add, delete, merge) persists the full resulting list before
it becomes visible. If the repository fails to save, the in-memory list is
left untouched and PersistenceError is raised.
"""

import logging
from dataclasses import replace
from threading import RLock
from typing import Callable, Iterable, List, Optional, Set, Tuple

from ..config import Config
from ..exceptions import InvalidRecordError, PersistenceError
from ..importing.normalizer import is_valid
from ..models import ImportBatch, WordRecord
from ..utils.helpers import new_record_id
from .merge import merge_batch
from .repository import BaseRepository

logger = logging.getLogger(__name__)


class WordStore:
    """
    Ordered collection of word records backed by a repository.

    Usage:
        store = WordStore(JSONRepository("data/words.json"))
        store.load()
        store.merge_import(batch)
    """

    def __init__(self, repository: BaseRepository, default_collection: str = Config.DEFAULT_COLLECTION):
        """
        Initialize the store.

        Args:
            repository: Persistence backend
            default_collection: Collection given to legacy records that have none
        """
        self.repository = repository
        self.default_collection = default_collection

        self._records: Optional[List[WordRecord]] = None
        self._lock = RLock()
        self._change_callbacks: List[Callable[[], None]] = []

    @property
    def records(self) -> Tuple[WordRecord, ...]:
        """Snapshot of all records, newest first."""
        self._ensure_loaded()
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records) if self._records is not None else 0

    def ids(self) -> Set[str]:
        return {record.id for record in self.records}

    def on_change(self, callback: Callable[[], None]) -> None:
        """
        Register a callback for data changes.

        Args:
            callback: Function to call after every successful mutation
        """
        self._change_callbacks.append(callback)

    def _notify_change(self) -> None:
        for callback in self._change_callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Change callback %r failed", callback)

    def load(self) -> Tuple[WordRecord, ...]:
        """
        Load the word list from the repository.

        Records without a collection are assigned the default collection and
        records without an id get a fresh one. The repaired list is written
        back once so the repair does not repeat.

        Returns:
            Loaded records

        Raises:
            PersistenceError: The stored file cannot be read
        """
        with self._lock:
            entries = self.repository.load()
            records = []
            taken: Set[str] = set()
            repaired = 0

            for entry in entries:
                record = WordRecord.from_dict(entry, self.default_collection)
                if not str(entry.get("collection") or ""):
                    repaired += 1
                if not record.id or record.id in taken:
                    record = replace(record, id=new_record_id(taken))
                    repaired += 1
                taken.add(record.id)
                records.append(record)

            self._records = records
            logger.info("Loaded %d words from %s", len(records), self.repository.path)

            if repaired:
                logger.info("Repaired %d legacy words", repaired)
                if not self.repository.save(self._serialize(records)):
                    logger.warning("Could not write repaired word list; repair will run again next load")

            return tuple(records)

    def _ensure_loaded(self) -> None:
        if self._records is None:
            self.load()

    @staticmethod
    def _serialize(records: Iterable[WordRecord]) -> List[dict]:
        return [record.to_dict() for record in records]

    def _commit(self, records: List[WordRecord]) -> None:
        """Persist ``records`` then make them current."""
        if not self.repository.save(self._serialize(records)):
            raise PersistenceError(f"Could not save word list to {self.repository.path}")
        self._records = records
        self._notify_change()

    @staticmethod
    def _check(record: WordRecord) -> None:
        if not is_valid(record):
            raise InvalidRecordError("A word needs both kanji and meaning")
        if not record.collection:
            raise InvalidRecordError("A word must belong to a collection")

    def add(self, record: WordRecord) -> WordRecord:
        """
        Add a single record in front of the list.

        Args:
            record: Record to add (re-keyed if its id is already taken)

        Returns:
            The stored record

        Raises:
            InvalidRecordError: kanji, meaning or collection is empty
            PersistenceError: Saving failed; nothing was added
        """
        self._check(record)
        with self._lock:
            self._ensure_loaded()
            taken = {r.id for r in self._records}
            if not record.id or record.id in taken:
                record = replace(record, id=new_record_id(taken))
            self._commit([record] + self._records)
            logger.debug("Added word %s (%s)", record.kanji, record.id)
            return record

    def delete(self, record_id: str) -> bool:
        """
        Delete a record by id.

        Returns:
            True if a record was removed, False if the id is unknown

        Raises:
            PersistenceError: Saving failed; nothing was removed
        """
        with self._lock:
            self._ensure_loaded()
            remaining = [r for r in self._records if r.id != record_id]
            if len(remaining) == len(self._records):
                return False
            self._commit(remaining)
            logger.debug("Deleted word %s", record_id)
            return True

    def merge_import(self, batch: ImportBatch) -> Tuple[WordRecord, ...]:
        """
        Prepend an import batch and persist the result.

        Batch records whose id collides with a stored record are re-keyed.

        Returns:
            The batch records as stored

        Raises:
            PersistenceError: Saving failed; the store is unchanged
        """
        with self._lock:
            self._ensure_loaded()
            taken = {r.id for r in self._records}
            stamped = []
            for record in batch.records:
                if record.id in taken:
                    record = replace(record, id=new_record_id(taken))
                taken.add(record.id)
                stamped.append(record)

            if stamped != list(batch.records):
                batch = replace(batch, records=tuple(stamped))

            self._commit(merge_batch(self._records, batch))
            logger.info("Merged %d words into '%s'", len(batch), batch.collection_name)
            return batch.records

"""
Import Normalizer - turns a parsed file into a batch of word records.

Pipeline: detect shape -> produce proto-records (flattening categories)
-> resolve fields -> validate -> stamp id/collection/timestamp.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Collection, Iterable, List, Mapping, Optional, Set

from ..config import Config
from ..exceptions import EmptyImportError
from ..models import ImportBatch, ProtoRecord, WordRecord
from ..utils.helpers import new_record_id, source_stem, utc_timestamp
from .fields import EXAMPLE_KEYS, FURIGANA_KEYS, GROUP_KEYS, KANJI_KEYS, MEANING_KEYS, resolve
from .flatten import flatten_categories
from .schema import (
    CategorizedShape,
    ListShape,
    Shape,
    Unrecognized,
    WordsFieldShape,
    detect_shape,
    root_title,
)

logger = logging.getLogger(__name__)


def is_valid(record: WordRecord) -> bool:
    """Acceptance gate: a record needs both a display form and a meaning."""
    return bool(record.kanji) and bool(record.meaning)


class ImportNormalizer:
    """
    Normalizes imported vocabulary into an ImportBatch.

    Malformed entries are dropped silently and only counted; an import with
    no surviving entries raises EmptyImportError.

    Usage:
        normalizer = ImportNormalizer()
        batch = normalizer.normalize(json.loads(text), "n5_words.json")
    """

    def __init__(
        self,
        import_group: str = Config.IMPORT_GROUP,
        default_collection: str = Config.DEFAULT_COLLECTION,
        id_factory: Callable[[Collection[str]], str] = new_record_id,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the normalizer.

        Args:
            import_group: Group given to entries that name none
            default_collection: Collection used when neither a title nor a file name is available
            id_factory: Called with the ids already taken, returns a fresh id
            clock: Returns the import time (defaults to now, UTC)
        """
        self.import_group = import_group
        self.default_collection = default_collection
        self._id_factory = id_factory
        self._clock = clock

    def collection_name(self, parsed: Any, source_name: str) -> str:
        """Root ``title`` if present, else the source file name without extension."""
        return root_title(parsed) or source_stem(source_name) or self.default_collection

    def proto_records(self, parsed: Any) -> List[ProtoRecord]:
        """Detect the document shape and list its entries in input order."""
        return self._protos_for(detect_shape(parsed))

    def _protos_for(self, shape: Shape) -> List[ProtoRecord]:
        if isinstance(shape, ListShape):
            return [ProtoRecord(item, self.import_group) for item in shape.items]

        if isinstance(shape, CategorizedShape):
            return flatten_categories(shape.categories, shape.title)

        if isinstance(shape, WordsFieldShape):
            group = shape.title or self.import_group
            return [ProtoRecord(item, group) for item in shape.items]

        # Unrecognized
        logger.info("Unrecognized import document: %s", shape.reason)
        return []

    def normalize(
        self,
        parsed: Any,
        source_name: str,
        taken_ids: Collection[str] = (),
    ) -> ImportBatch:
        """
        Normalize a parsed JSON document.

        Args:
            parsed: Value returned by ``json.loads``
            source_name: Name of the file it came from
            taken_ids: Ids already in the store

        Returns:
            ImportBatch with the surviving records in input order

        Raises:
            EmptyImportError: No entry survived validation
        """
        shape = detect_shape(parsed)
        reason = shape.reason if isinstance(shape, Unrecognized) else None
        return self._build_batch(
            self._protos_for(shape),
            self.collection_name(parsed, source_name),
            shape.name,
            taken_ids,
            reason,
        )

    def normalize_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        source_name: str,
        taken_ids: Collection[str] = (),
    ) -> ImportBatch:
        """
        Normalize spreadsheet rows (always list-shaped).

        Args:
            rows: One mapping per row, keyed by column header
            source_name: Name of the spreadsheet file
            taken_ids: Ids already in the store

        Returns:
            ImportBatch with the surviving rows in sheet order

        Raises:
            EmptyImportError: No row survived validation
        """
        protos = [ProtoRecord(row, self.import_group) for row in rows if isinstance(row, Mapping)]
        collection = source_stem(source_name) or self.default_collection
        return self._build_batch(protos, collection, ListShape.name, taken_ids)

    def _build_batch(
        self,
        protos: List[ProtoRecord],
        collection: str,
        shape: str,
        taken_ids: Collection[str],
        reason: Optional[str] = None,
    ) -> ImportBatch:
        date_added = utc_timestamp(self._clock() if self._clock else None)
        used: Set[str] = set(taken_ids)
        records = []

        for proto in protos:
            record = self._build_record(proto, collection, date_added, used)
            if not is_valid(record):
                continue
            used.add(record.id)
            records.append(record)

        rejected = len(protos) - len(records)
        logger.info(
            "Normalized %s document into '%s': %d accepted, %d rejected",
            shape, collection, len(records), rejected,
        )

        if not records:
            raise EmptyImportError(collection, reason)

        return ImportBatch(
            records=tuple(records),
            collection_name=collection,
            shape=shape,
            rejected=rejected,
        )

    def _build_record(
        self,
        proto: ProtoRecord,
        collection: str,
        date_added: str,
        used: Set[str],
    ) -> WordRecord:
        fields = proto.fields
        kanji = resolve(fields, KANJI_KEYS)
        meaning = resolve(fields, MEANING_KEYS)

        return WordRecord(
            id=self._id_factory(used) if kanji and meaning else "",
            kanji=kanji,
            meaning=meaning,
            collection=collection,
            date_added=date_added,
            furigana=resolve(fields, FURIGANA_KEYS),
            example=resolve(fields, EXAMPLE_KEYS),
            group=resolve(fields, GROUP_KEYS) or proto.default_group,
        )

"""Merge Coordinator - combines an import batch with the existing word list."""

from typing import List, Sequence

from ..models import ImportBatch, WordRecord


def merge_batch(existing: Sequence[WordRecord], batch: ImportBatch) -> List[WordRecord]:
    """
    Prepend the batch to the existing records.

    Imported records come first; relative order on both sides is kept.
    Neither input is modified and existing records are not re-validated.
    """
    return list(batch.records) + list(existing)

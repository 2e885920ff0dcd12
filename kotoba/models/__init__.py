"""Data models for Kotoba."""

from .word import ImportBatch, ProtoRecord, WordRecord

__all__ = ['ImportBatch', 'ProtoRecord', 'WordRecord']

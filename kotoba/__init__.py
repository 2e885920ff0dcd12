"""Kotoba - Japanese vocabulary notebook with a flexible file importer"""

__version__ = "1.0.0"
__author__ = "Kotoba Team"

from .config import Config
from .models import WordRecord, ImportBatch
from .importing import ImportNormalizer, read_import_file
from .services import VocabularyService, WordStore

__all__ = [
    'Config',
    'WordRecord',
    'ImportBatch',
    'ImportNormalizer',
    'read_import_file',
    'VocabularyService',
    'WordStore',
]

"""Utils module."""

from .helpers import (
    new_record_id,
    source_stem,
    utc_timestamp,
)
from .parsing import TextParser
from .logger import setup_logger

__all__ = [
    'new_record_id',
    'source_stem',
    'utc_timestamp',
    'TextParser',
    'setup_logger',
]

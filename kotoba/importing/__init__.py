"""Import pipeline: file decoding, schema detection, flattening and normalization."""

from .fields import resolve
from .schema import (
    CategorizedShape,
    ListShape,
    Unrecognized,
    WordsFieldShape,
    detect_shape,
)
from .flatten import (
    flatten_category,
    flatten_patterns,
    flatten_situations,
    flatten_verbs,
    flatten_words,
)
from .normalizer import ImportNormalizer, is_valid
from .readers import ParsedFile, parse_json_text, read_import_file

__all__ = [
    'resolve',
    'CategorizedShape',
    'ListShape',
    'Unrecognized',
    'WordsFieldShape',
    'detect_shape',
    'flatten_category',
    'flatten_patterns',
    'flatten_situations',
    'flatten_verbs',
    'flatten_words',
    'ImportNormalizer',
    'is_valid',
    'ParsedFile',
    'parse_json_text',
    'read_import_file',
]

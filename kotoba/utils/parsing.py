"""Text coercion utilities shared by the importer and the store."""

import math
import unicodedata
from numbers import Number
from typing import Any


class TextParser:
    """
    Centralized text coercion.
    
    Imported files come from many authoring tools, so a field may arrive as
    a string, a number, a spreadsheet NaN or something unusable. Everything
    funnels through ``to_text`` before it reaches a record.
    """
    
    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.
        
        Prevents kana with dakuten being stored either as one codepoint or
        as base + combining mark, which would break search and dedup.
        
        Args:
            text: Input text
            
        Returns:
            NFC-normalized text
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))
    
    @classmethod
    def to_text(cls, value: Any) -> str:
        """
        Coerce a raw field value to a clean string.
        
        None, NaN, mappings and sequences are treated as absent. Integral
        floats lose their ``.0`` suffix (spreadsheet cells like ``3.0``).
        
        Args:
            value: Raw value from a parsed file
            
        Returns:
            Stripped NFC string, empty if the value is unusable
        """
        if value is None:
            return ""
        
        if isinstance(value, str):
            text = value
        elif isinstance(value, bool):
            text = str(value).lower()
        elif isinstance(value, Number):
            if isinstance(value, float):
                if math.isnan(value) or math.isinf(value):
                    return ""
                if value.is_integer():
                    value = int(value)
            text = str(value)
        else:
            return ""
        
        return cls.normalize_unicode(text.strip())
    

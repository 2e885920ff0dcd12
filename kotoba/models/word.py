"""Word records and the transient values produced by an import."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Tuple

from ..config import Config


@dataclass(frozen=True)
class WordRecord:
    """A single stored vocabulary word."""
    
    id: str
    kanji: str
    meaning: str
    collection: str
    date_added: str
    
    furigana: str = ""
    example: str = ""
    group: str = ""
    
    @property
    def display_group(self) -> str:
        """Group label used for filtering; legacy records have none."""
        return self.group or Config.UNCATEGORIZED
    
    def to_dict(self) -> Dict[str, str]:
        """Serialize using the stored key names."""
        data = asdict(self)
        data["dateAdded"] = data.pop("date_added")
        return data
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_collection: str) -> "WordRecord":
        """
        Build a record from its stored form.
        
        Legacy entries carry numeric ids and may lack a collection; the id is
        stringified and the collection backfilled with ``default_collection``.
        
        Args:
            data: Stored mapping
            default_collection: Collection assigned when none is stored
            
        Returns:
            WordRecord instance
        """
        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)
        
        return cls(
            id=text("id"),
            kanji=text("kanji"),
            meaning=text("meaning"),
            collection=text("collection") or default_collection,
            date_added=text("dateAdded") or text("date_added"),
            furigana=text("furigana"),
            example=text("example"),
            group=text("group"),
        )


@dataclass(frozen=True)
class ProtoRecord:
    """
    Not-yet-validated entry produced by schema detection or flattening.
    
    ``fields`` is either a raw item from the input file or a mapping
    synthesized by the flattener; both are read through the field resolver.
    """
    
    fields: Mapping[str, Any]
    default_group: str


@dataclass(frozen=True)
class ImportBatch:
    """Validated, stamped records produced by one import."""
    
    records: Tuple[WordRecord, ...]
    collection_name: str
    shape: str = ""
    rejected: int = 0
    
    def __len__(self) -> int:
        return len(self.records)
    
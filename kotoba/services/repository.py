"""
Repository Pattern - Abstract persistence layer for the word list.

Enables switching between JSON and CSV backends without changing the store.
Every save replaces the whole file atomically (temp file + rename), so a
reader never sees a partially written word list.
"""

import json
import logging
import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ..config import Config
from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)

# Column order used by tabular backends
RECORD_COLUMNS = ["id", "kanji", "furigana", "meaning", "example", "group", "collection", "dateAdded"]


class BaseRepository(ABC):
    """
    Abstract base class for word list repositories.

    Defines the contract for persisting the full ordered word list.
    Implementations can use JSON, CSV, SQLite, etc.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    @abstractmethod
    def load(self) -> List[Dict[str, Any]]:
        """
        Load every stored entry in order.

        Returns:
            List of stored mappings (empty if nothing is stored yet)

        Raises:
            PersistenceError: The file exists but cannot be read
        """
        pass

    @abstractmethod
    def save(self, entries: List[Dict[str, Any]]) -> bool:
        """Replace the stored list. Returns True if successful."""
        pass

    def _atomic_write(self, write) -> bool:
        """Run ``write(temp_path)`` then move the temp file over the target."""
        temp_file = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            write(temp_file)
            os.replace(temp_file, self.path)
            return True
        except (OSError, ValueError, TypeError) as e:
            logger.error("Error saving %s: %s", self.path, e)
            if temp_file.exists():
                try:
                    temp_file.unlink()
                except OSError:
                    logger.warning("Could not remove temp file %s", temp_file)
            return False


class JSONRepository(BaseRepository):
    """
    JSON-based repository implementation.

    Stores the word list as a single JSON array. This is the default backend.
    """

    def __init__(self, json_path: Optional[str] = None):
        """
        Initialize JSON repository.

        Args:
            json_path: Path to JSON file
        """
        super().__init__(json_path or Config.STORE_FILE)

    def load(self) -> List[Dict[str, Any]]:
        """Load word list from JSON file."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Error loading {self.path}: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(f"Error loading {self.path}: expected a JSON array")

        return [entry for entry in data if isinstance(entry, dict)]

    def save(self, entries: List[Dict[str, Any]]) -> bool:
        """Save word list to JSON file."""
        def write(temp_file: Path) -> None:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(entries, f, ensure_ascii=False, indent=2)

        return self._atomic_write(write)


class CSVRepository(BaseRepository):
    """
    CSV-based repository implementation.

    Uses pandas for CSV operations. Pipe-separated like the spreadsheets
    learners usually export, with every column kept as text.
    """

    SEPARATOR = '|'

    def __init__(self, csv_path: Optional[str] = None):
        """
        Initialize CSV repository.

        Args:
            csv_path: Path to CSV file
        """
        super().__init__(csv_path or str(Path(Config.STORE_FILE).with_suffix('.csv')))

    def load(self) -> List[Dict[str, Any]]:
        """Load word list from CSV file."""
        if not self.path.exists():
            return []

        try:
            df = pd.read_csv(
                self.path,
                sep=self.SEPARATOR,
                encoding='utf-8-sig',
                dtype=str,
                keep_default_na=False,
            ).fillna('')
        except pd.errors.EmptyDataError:
            return []
        except (ValueError, OSError, pd.errors.ParserError) as e:
            raise PersistenceError(f"Error loading {self.path}: {e}") from e

        df.columns = df.columns.str.strip()
        return df.to_dict(orient='records')

    def save(self, entries: List[Dict[str, Any]]) -> bool:
        """Save word list to CSV file."""
        df = pd.DataFrame(entries, columns=RECORD_COLUMNS).fillna('')

        def write(temp_file: Path) -> None:
            df.to_csv(temp_file, sep=self.SEPARATOR, index=False, encoding='utf-8-sig')

        return self._atomic_write(write)

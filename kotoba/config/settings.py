"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass
class Config:
    """Application-wide configuration."""
    
    # Cross-platform paths using pathlib
    # BASE_DIR is the project root (parent of kotoba/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()
    DATA_DIR: str = os.environ.get("KOTOBA_DATA_DIR", str(BASE_DIR / "data"))
    
    # Word list storage
    STORE_BACKEND: str = os.environ.get("KOTOBA_STORE_BACKEND", "json")  # Options: json, csv
    STORE_FILE: str = os.environ.get("KOTOBA_STORE_FILE", str(Path(DATA_DIR) / "words.json"))
    SETTINGS_FILE: str = str(Path(DATA_DIR) / "settings.json")
    
    # Collection / group labels
    DEFAULT_COLLECTION: str = os.environ.get("KOTOBA_DEFAULT_COLLECTION", "My Words")
    IMPORT_GROUP: str = "Imported"
    UNCATEGORIZED: str = "Uncategorized"
    ALL_FILTER: str = "All"
    
    # Import formats
    JSON_EXTENSIONS: tuple = (".json",)
    SPREADSHEET_EXTENSIONS: tuple = (".xlsx", ".xls")
    CSV_EXTENSIONS: tuple = (".csv",)
    
    # Logging
    LOG_LEVEL: str = os.environ.get("KOTOBA_LOG_LEVEL", "INFO")
    LOG_DIR: str = str(Path(DATA_DIR) / "logs")
    LOG_FILE: str = str(Path(DATA_DIR) / "logs" / "kotoba.log")

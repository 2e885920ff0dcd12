"""
File boundary for imports.

Decodes raw files into either a parsed JSON value or a list of row
mappings. Any decoding problem surfaces as ParseFailure before
normalization starts.
"""

import csv
import json
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from ..config import Config
from ..exceptions import ParseFailure

logger = logging.getLogger(__name__)

JSON_DOCUMENT = "json"
TABLE_ROWS = "rows"


@dataclass(frozen=True)
class ParsedFile:
    """Decoded import file."""

    kind: str  # JSON_DOCUMENT or TABLE_ROWS
    value: Any
    source_name: str

    @property
    def is_table(self) -> bool:
        return self.kind == TABLE_ROWS


def parse_json_text(data: Union[str, bytes], source_name: str = "<memory>") -> Any:
    """
    Parse JSON text or UTF-8 bytes (a leading BOM is tolerated).

    Raises:
        ParseFailure: Bytes are not UTF-8 or the text is not valid JSON
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseFailure(source_name, f"not UTF-8 text ({e.reason})") from e
    else:
        data = data.lstrip("\ufeff")

    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise ParseFailure(source_name, f"invalid JSON at line {e.lineno} column {e.colno}") from e


def _frame_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Row mappings with stripped string headers; blank rows are skipped."""
    df = df.fillna("")
    df.columns = [str(column).strip() for column in df.columns]
    rows = []
    for row in df.to_dict(orient="records"):
        if any(str(value).strip() for value in row.values()):
            rows.append(row)
    return rows


def read_spreadsheet_rows(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Decode the first sheet of an Excel workbook into row mappings.

    Raises:
        ParseFailure: The workbook cannot be read
    """
    path = Path(path)
    try:
        df = pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
    except (ValueError, OSError, ImportError, KeyError, zipfile.BadZipFile) as e:
        raise ParseFailure(path.name, f"unreadable spreadsheet ({e})") from e
    return _frame_to_rows(df)


def read_csv_rows(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Decode a delimited text file into row mappings (delimiter is sniffed).

    Raises:
        ParseFailure: The file cannot be parsed
    """
    path = Path(path)
    try:
        df = pd.read_csv(
            path,
            sep=None,
            engine='python',
            dtype=str,
            encoding='utf-8-sig',
            skip_blank_lines=True,
            keep_default_na=False,
            na_filter=False,
        )
    except pd.errors.EmptyDataError:
        return []
    except (ValueError, OSError, csv.Error, pd.errors.ParserError) as e:
        raise ParseFailure(path.name, f"unreadable CSV ({e})") from e
    return _frame_to_rows(df)


def read_import_file(path: Union[str, Path]) -> ParsedFile:
    """
    Read and decode an import file according to its extension.

    Args:
        path: ``.json``, ``.xlsx``/``.xls`` or ``.csv`` file

    Returns:
        ParsedFile holding a JSON value or a list of rows

    Raises:
        ParseFailure: Unsupported extension, unreadable file or malformed content
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in Config.JSON_EXTENSIONS:
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ParseFailure(path.name, str(e)) from e
        value = parse_json_text(raw, path.name)
        logger.debug("Parsed JSON document %s", path.name)
        return ParsedFile(JSON_DOCUMENT, value, path.name)

    if suffix in Config.SPREADSHEET_EXTENSIONS:
        rows = read_spreadsheet_rows(path)
    elif suffix in Config.CSV_EXTENSIONS:
        rows = read_csv_rows(path)
    else:
        raise ParseFailure(path.name, f"unsupported file type '{suffix or path.name}'")

    logger.debug("Decoded %d rows from %s", len(rows), path.name)
    return ParsedFile(TABLE_ROWS, rows, path.name)

"""Utility functions."""

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Container, Optional


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def new_record_id(taken: Container[str] = ()) -> str:
    """Generate a record id not present in ``taken``."""
    while True:
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate


def source_stem(source_name: str) -> str:
    """File base name with the extension stripped ("n5_verbs.json" -> "n5_verbs")."""
    return Path(str(source_name)).stem

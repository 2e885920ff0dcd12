"""
Schema detection for parsed JSON documents.

Detection returns one variant of a small tagged union. Supporting a new
document shape means adding a variant and one case in ``detect_shape``
plus the matching arm in the normalizer.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from ..utils.parsing import TextParser


@dataclass(frozen=True)
class ListShape:
    """Top-level array; every object element is one entry."""

    items: Tuple[Mapping[str, Any], ...]
    name = "list"


@dataclass(frozen=True)
class CategorizedShape:
    """``{"title"?, "categories": [...]}`` with nested words/verbs/situations/patterns."""

    categories: Tuple[Mapping[str, Any], ...]
    title: str = ""
    name = "categories"


@dataclass(frozen=True)
class WordsFieldShape:
    """``{"title"?, "words": [...]}``; every object in ``words`` is one entry."""

    items: Tuple[Mapping[str, Any], ...]
    title: str = ""
    name = "words"


@dataclass(frozen=True)
class Unrecognized:
    """Anything else. Yields zero records."""

    reason: str
    name = "unrecognized"


Shape = Union[ListShape, CategorizedShape, WordsFieldShape, Unrecognized]


def _objects(values: list) -> Tuple[Mapping[str, Any], ...]:
    return tuple(value for value in values if isinstance(value, Mapping))


def root_title(value: Any) -> str:
    """``title`` of a top-level object, or ""."""
    if isinstance(value, Mapping):
        return TextParser.to_text(value.get("title"))
    return ""


def detect_shape(value: Any) -> Shape:
    """
    Classify a parsed JSON value. First match wins.

    Args:
        value: Result of ``json.loads`` on the import file

    Returns:
        ListShape, CategorizedShape, WordsFieldShape or Unrecognized
    """
    if isinstance(value, list):
        return ListShape(items=_objects(value))

    if isinstance(value, Mapping):
        title = root_title(value)
        categories = value.get("categories")
        if isinstance(categories, list):
            return CategorizedShape(categories=_objects(categories), title=title)

        words = value.get("words")
        if isinstance(words, list):
            return WordsFieldShape(items=_objects(words), title=title)

        return Unrecognized(reason="object has neither 'categories' nor 'words' list")

    return Unrecognized(reason=f"top-level {type(value).__name__} is not a list or object")
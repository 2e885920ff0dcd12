"""
Field resolution for imported vocabulary.

Vocabulary files have no canonical key naming: the same field shows up as
an English key, a capitalized key or a Japanese key depending on the tool
that produced the file. Each field therefore has an ordered tuple of
candidate keys, and the first usable value wins.
"""

from typing import Any, Mapping, Sequence

from ..utils.parsing import TextParser

KANJI_KEYS = ("kanji", "Kanji", "word", "Word", "漢字", "単語", "普通形")
FURIGANA_KEYS = ("furigana", "Furigana", "reading", "Reading", "ふりがな", "読み", "よみがな")
MEANING_KEYS = ("meaning", "Meaning", "意味", "中文")
EXAMPLE_KEYS = ("example", "Example", "例文")
GROUP_KEYS = ("group", "Group", "グループ")

# Category containers
CATEGORY_LABEL_KEYS = ("category", "name", "title", "カテゴリ")

# Verb entries with honorific forms
PLAIN_FORM_KEYS = ("普通形", "plain", "dictionary_form", "kanji", "word")
RESPECTFUL_KEYS = ("尊敬語", "respectful")
HUMBLE_KEYS = ("謙譲語", "humble")
RESPECTFUL_READING_KEYS = ("尊敬語読み", "respectful_reading")
HUMBLE_READING_KEYS = ("謙譲語読み", "humble_reading")

# Situations and their phrases
SITUATION_LABEL_KEYS = ("situation", "scene", "name", "title", "場面")
PHRASE_KEYS = ("phrase", "japanese", "日本語") + KANJI_KEYS

# Grammar patterns
PATTERN_FORM_KEYS = ("pattern", "form", "文型")
EXPLANATION_KEYS = ("explanation", "説明") + MEANING_KEYS
PATTERN_EXAMPLES_KEYS = ("examples", "例", "例文")


def resolve(item: Any, candidate_keys: Sequence[str]) -> str:
    """
    Return the first non-empty value among ``candidate_keys``.

    Args:
        item: Raw mapping from a parsed file (anything else resolves to "")
        candidate_keys: Keys to try, highest priority first

    Returns:
        Cleaned string value, or "" when no candidate is usable
    """
    if not isinstance(item, Mapping):
        return ""

    for key in candidate_keys:
        if key not in item:
            continue
        text = TextParser.to_text(item[key])
        if text:
            return text
    return ""


def resolve_list(item: Any, candidate_keys: Sequence[str]) -> list:
    """Return the first candidate whose value is a non-empty list."""
    if not isinstance(item, Mapping):
        return []

    for key in candidate_keys:
        value = item.get(key)
        if isinstance(value, list) and value:
            return value
    return []

"""
Flattening of categorized vocabulary documents.

A category container may hold any mix of four sub-structures. Each one has
its own pure function turning a category into proto-records; the results
are concatenated in a fixed order (words, verbs, situations, patterns).
"""

from typing import Any, Iterable, List, Mapping

from ..config import Config
from ..models import ProtoRecord
from .fields import (
    CATEGORY_LABEL_KEYS,
    EXAMPLE_KEYS,
    EXPLANATION_KEYS,
    FURIGANA_KEYS,
    HUMBLE_KEYS,
    HUMBLE_READING_KEYS,
    MEANING_KEYS,
    PATTERN_EXAMPLES_KEYS,
    PATTERN_FORM_KEYS,
    PHRASE_KEYS,
    PLAIN_FORM_KEYS,
    RESPECTFUL_KEYS,
    RESPECTFUL_READING_KEYS,
    SITUATION_LABEL_KEYS,
    resolve,
    resolve_list,
)

VERBS_GROUP = "敬語 Verbs"
SITUATIONS_GROUP = "Situations"
PATTERNS_GROUP = "Patterns"

RESPECTFUL_LABEL = "尊敬語"
HUMBLE_LABEL = "謙譲語"

# (form keys, reading keys, example keys, register label)
HONORIFIC_REGISTERS = (
    (RESPECTFUL_KEYS, RESPECTFUL_READING_KEYS, ("尊敬語例文", "respectful_example"), RESPECTFUL_LABEL),
    (HUMBLE_KEYS, HUMBLE_READING_KEYS, ("謙譲語例文", "humble_example"), HUMBLE_LABEL),
)


def category_label(category: Mapping[str, Any]) -> str:
    return resolve(category, CATEGORY_LABEL_KEYS)


def _entries(container: Mapping[str, Any], key: str) -> Iterable[Any]:
    value = container.get(key)
    return value if isinstance(value, list) else ()


def flatten_words(category: Mapping[str, Any], title: str = "") -> List[ProtoRecord]:
    """One proto-record per element of ``words``; fields are read later."""
    group = category_label(category) or title or Config.IMPORT_GROUP
    return [
        ProtoRecord(fields=item, default_group=group)
        for item in _entries(category, "words")
        if isinstance(item, Mapping)
    ]


def flatten_verbs(category: Mapping[str, Any]) -> List[ProtoRecord]:
    """
    Up to two proto-records per verb, one per honorific form present.

    ``{"普通形": "行く", "尊敬語": "いらっしゃる", "中文": "go"}`` becomes a single
    entry ``行く → いらっしゃる`` meaning ``go (尊敬語)``. A verb with
    neither form contributes nothing.
    """
    group = category_label(category) or VERBS_GROUP
    records = []

    for verb in _entries(category, "verbs"):
        if not isinstance(verb, Mapping):
            continue

        plain = resolve(verb, PLAIN_FORM_KEYS)
        meaning = resolve(verb, MEANING_KEYS)

        for form_keys, reading_keys, example_keys, label in HONORIFIC_REGISTERS:
            honorific = resolve(verb, form_keys)
            if not honorific:
                continue
            records.append(ProtoRecord(
                fields={
                    "kanji": f"{plain} → {honorific}" if plain else "",
                    "furigana": resolve(verb, reading_keys),
                    # Without a base meaning the entry must fail validation
                    "meaning": f"{meaning} ({label})" if meaning else "",
                    "example": resolve(verb, example_keys) or resolve(verb, EXAMPLE_KEYS),
                    "group": resolve(verb, ("group",)),
                },
                default_group=group,
            ))

    return records


def flatten_situations(category: Mapping[str, Any]) -> List[ProtoRecord]:
    """One proto-record per phrase, tagged with the scene it belongs to."""
    label = category_label(category)
    group = label or SITUATIONS_GROUP
    records = []

    for situation in _entries(category, "situations"):
        if not isinstance(situation, Mapping):
            continue
        scene = resolve(situation, SITUATION_LABEL_KEYS) or label

        for phrase in _entries(situation, "phrases"):
            if isinstance(phrase, str):
                phrase = {"phrase": phrase}
            elif not isinstance(phrase, Mapping):
                continue
            records.append(ProtoRecord(
                fields={
                    "kanji": resolve(phrase, PHRASE_KEYS),
                    "furigana": resolve(phrase, FURIGANA_KEYS),
                    "meaning": resolve(phrase, MEANING_KEYS),
                    "example": f"Scene: {scene}" if scene else "",
                    "group": resolve(phrase, ("group",)),
                },
                default_group=group,
            ))

    return records


def flatten_patterns(category: Mapping[str, Any]) -> List[ProtoRecord]:
    """
    One proto-record per example sentence of each grammar pattern.

    All records of a pattern share its form, reading and explanation; the
    example sentence goes into both the meaning and the example field so
    the records stay distinguishable.
    """
    group = category_label(category) or PATTERNS_GROUP
    records = []

    for pattern in _entries(category, "patterns"):
        if not isinstance(pattern, Mapping):
            continue

        form = resolve(pattern, PATTERN_FORM_KEYS)
        reading = resolve(pattern, FURIGANA_KEYS)
        explanation = resolve(pattern, EXPLANATION_KEYS)

        for example in resolve_list(pattern, PATTERN_EXAMPLES_KEYS):
            if isinstance(example, Mapping):
                sentence = resolve(example, ("sentence",) + EXAMPLE_KEYS + PHRASE_KEYS)
            else:
                sentence = resolve({"example": example}, ("example",))
            if not sentence:
                continue
            records.append(ProtoRecord(
                fields={
                    "kanji": form,
                    "furigana": reading,
                    "meaning": f"{explanation} ({sentence})" if explanation else sentence,
                    "example": sentence,
                    "group": resolve(pattern, ("group",)),
                },
                default_group=group,
            ))

    return records


def flatten_category(category: Mapping[str, Any], title: str = "") -> List[ProtoRecord]:
    """All proto-records of one category container, in sub-structure order."""
    if not isinstance(category, Mapping):
        return []
    return (
        flatten_words(category, title)
        + flatten_verbs(category)
        + flatten_situations(category)
        + flatten_patterns(category)
    )


def flatten_categories(categories: Iterable[Mapping[str, Any]], title: str = "") -> List[ProtoRecord]:
    records: List[ProtoRecord] = []
    for category in categories:
        records.extend(flatten_category(category, title))
    return records

import math

import pytest

from kotoba.importing.fields import (
    EXAMPLE_KEYS,
    FURIGANA_KEYS,
    GROUP_KEYS,
    KANJI_KEYS,
    MEANING_KEYS,
    resolve,
    resolve_list,
)


@pytest.mark.parametrize("keys", [KANJI_KEYS, FURIGANA_KEYS, MEANING_KEYS, EXAMPLE_KEYS, GROUP_KEYS])
def test_primary_key_wins_over_every_fallback(keys):
    item = {key: f"value-{i}" for i, key in enumerate(keys)}
    assert resolve(item, keys) == "value-0"

    for position in range(1, len(keys)):
        partial = {key: f"value-{i}" for i, key in enumerate(keys) if i >= position}
        assert resolve(partial, keys) == f"value-{position}"


def test_missing_keys_resolve_to_empty_string():
    assert resolve({"other": "x"}, KANJI_KEYS) == ""
    assert resolve({}, MEANING_KEYS) == ""


@pytest.mark.parametrize("unusable", [None, "", "   ", math.nan, {"nested": "x"}, ["a", "b"]])
def test_unusable_values_fall_through_to_next_candidate(unusable):
    item = {"kanji": unusable, "漢字": "猫"}
    assert resolve(item, KANJI_KEYS) == "猫"


def test_values_are_stripped_and_numbers_stringified():
    assert resolve({"kanji": "  猫 \n"}, KANJI_KEYS) == "猫"
    assert resolve({"group": 3.0}, GROUP_KEYS) == "3"
    assert resolve({"group": 2.5}, GROUP_KEYS) == "2.5"
    assert resolve({"group": 12}, GROUP_KEYS) == "12"


def test_decomposed_kana_is_normalized_to_nfc():
    decomposed = "\u304b\u3099"  # ka + combining dakuten
    assert resolve({"furigana": decomposed}, FURIGANA_KEYS) == "\u304c"


@pytest.mark.parametrize("item", [None, "猫", 42, ["kanji"]])
def test_non_mapping_items_never_raise(item):
    assert resolve(item, KANJI_KEYS) == ""


def test_native_script_keys_are_honoured():
    item = {"漢字": "犬", "ふりがな": "いぬ", "意味": "dog", "例文": "犬がいる。", "グループ": "動物"}
    assert resolve(item, KANJI_KEYS) == "犬"
    assert resolve(item, FURIGANA_KEYS) == "いぬ"
    assert resolve(item, MEANING_KEYS) == "dog"
    assert resolve(item, EXAMPLE_KEYS) == "犬がいる。"
    assert resolve(item, GROUP_KEYS) == "動物"


def test_resolve_list_skips_non_lists():
    pattern = {"examples": "not a list", "例": ["速ければ速いほど"]}
    assert resolve_list(pattern, ("examples", "例")) == ["速ければ速いほど"]
    assert resolve_list({"examples": []}, ("examples",)) == []

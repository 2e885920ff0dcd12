from datetime import datetime, timezone

import pytest

from kotoba.exceptions import EmptyImportError
from kotoba.importing.normalizer import ImportNormalizer, is_valid


@pytest.fixture
def normalizer():
    return ImportNormalizer(clock=lambda: datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))


def test_list_drops_entry_with_empty_kanji(normalizer):
    batch = normalizer.normalize([{"kanji": "猫", "meaning": "cat"}, {"kanji": "", "meaning": "x"}], "animals.json")

    assert len(batch) == 1
    record = batch.records[0]
    assert (record.kanji, record.meaning) == ("猫", "cat")
    assert record.group == "Imported"
    assert record.collection == "animals"
    assert batch.rejected == 1
    assert batch.shape == "list"


def test_respectful_verb_document(normalizer):
    doc = {"categories": [{"category": "敬語", "verbs": [{"普通形": "行く", "尊敬語": "いらっしゃる", "中文": "go"}]}]}

    batch = normalizer.normalize(doc, "keigo.json")

    assert len(batch) == 1
    assert batch.records[0].kanji == "行く → いらっしゃる"
    assert batch.records[0].meaning.endswith("(尊敬語)")
    assert batch.records[0].group == "敬語"


def test_pattern_document_cross_product(normalizer):
    doc = {"categories": [{"patterns": [{"pattern": "〜ば〜ほど", "例": ["速ければ速いほど", "高ければ高いほど"]}]}]}

    batch = normalizer.normalize(doc, "grammar.json")

    assert len(batch) == 2
    first, second = batch.records
    assert (first.kanji, first.furigana) == (second.kanji, second.furigana)
    assert first.meaning != second.meaning


def test_unrecognized_document_is_an_empty_import(normalizer):
    with pytest.raises(EmptyImportError) as excinfo:
        normalizer.normalize({"foo": 123}, "mystery.json")
    assert excinfo.value.collection_name == "mystery"


def test_all_invalid_entries_is_an_empty_import(normalizer):
    with pytest.raises(EmptyImportError):
        normalizer.normalize({"words": [{"kanji": "猫"}, {"meaning": "dog"}]}, "broken.json")


def test_categorized_document_counts_qualifying_leaves(normalizer, keigo_document):
    batch = normalizer.normalize(keigo_document, "keigo.json")

    # 2 valid words + 3 verb forms + 2 phrases + 3 pattern examples
    assert len(batch) == 10
    assert batch.rejected == 1
    assert batch.collection_name == "ビジネス日本語"
    assert all(record.collection == "ビジネス日本語" for record in batch.records)


def test_words_field_document_uses_title_for_collection_and_group(normalizer):
    doc = {"title": "Animals", "words": [{"kanji": "猫", "meaning": "cat"}, {"kanji": "犬", "meaning": "dog", "group": "Pets"}]}

    batch = normalizer.normalize(doc, "ignored_name.json")

    assert batch.collection_name == "Animals"
    assert [r.group for r in batch.records] == ["Animals", "Pets"]


def test_records_are_stamped_with_unique_ids_and_one_timestamp(normalizer):
    items = [{"kanji": f"字{i}", "meaning": f"m{i}"} for i in range(50)]

    batch = normalizer.normalize(items, "many.json", taken_ids={"abc"})

    ids = [r.id for r in batch.records]
    assert len(set(ids)) == 50
    assert "abc" not in ids
    assert {r.date_added for r in batch.records} == {"2026-01-02T03:04:05.000Z"}


def test_id_factory_sees_taken_ids():
    counter = iter(range(100))

    def sequential(taken):
        while True:
            candidate = f"id-{next(counter)}"
            if candidate not in taken:
                return candidate

    normalizer = ImportNormalizer(id_factory=sequential)
    batch = normalizer.normalize([{"kanji": "猫", "meaning": "cat"}, {"kanji": "犬", "meaning": "dog"}], "a.json", taken_ids={"id-0"})

    assert [r.id for r in batch.records] == ["id-1", "id-2"]


def test_input_order_is_preserved(normalizer):
    items = [{"kanji": k, "meaning": "x"} for k in ["一", "二", "三", "四"]]
    assert [r.kanji for r in normalizer.normalize(items, "n.json").records] == ["一", "二", "三", "四"]


def test_spreadsheet_rows_with_mixed_headers(normalizer):
    rows = [
        {"Kanji": "猫", "Furigana": "ねこ", "Meaning": "cat", "Group": "Animals"},
        {"漢字": "水", "ふりがな": "みず", "意味": "water", "例文": "水を飲む。", "グループ": ""},
        {"漢字": "", "意味": "nothing"},
    ]

    batch = normalizer.normalize_rows(rows, "week1.xlsx")

    assert batch.collection_name == "week1"
    assert [(r.kanji, r.group) for r in batch.records] == [("猫", "Animals"), ("水", "Imported")]
    assert batch.records[1].example == "水を飲む。"
    assert batch.rejected == 1


def test_every_output_record_passes_validation(normalizer, keigo_document):
    batch = normalizer.normalize(keigo_document, "keigo.json")
    assert all(is_valid(r) and r.kanji and r.meaning for r in batch.records)

from kotoba.importing.flatten import (
    PATTERNS_GROUP,
    SITUATIONS_GROUP,
    VERBS_GROUP,
    flatten_category,
    flatten_patterns,
    flatten_situations,
    flatten_verbs,
    flatten_words,
)


def test_respectful_only_verb_yields_one_entry():
    category = {"category": "敬語", "verbs": [{"普通形": "行く", "尊敬語": "いらっしゃる", "中文": "go"}]}

    protos = flatten_verbs(category)

    assert len(protos) == 1
    fields = protos[0].fields
    assert fields["kanji"] == "行く → いらっしゃる"
    assert fields["meaning"].startswith("go")
    assert fields["meaning"].endswith("(尊敬語)")
    assert protos[0].default_group == "敬語"


def test_verb_with_both_forms_yields_two_independent_entries():
    category = {"verbs": [{"普通形": "言う", "尊敬語": "おっしゃる", "謙譲語": "申す", "中文": "say"}]}

    protos = flatten_verbs(category)

    assert [p.fields["kanji"] for p in protos] == ["言う → おっしゃる", "言う → 申す"]
    assert [p.fields["meaning"] for p in protos] == ["say (尊敬語)", "say (謙譲語)"]
    assert all(p.default_group == VERBS_GROUP for p in protos)


def test_verb_without_honorific_forms_yields_nothing():
    assert flatten_verbs({"verbs": [{"普通形": "寝る", "中文": "sleep"}]}) == []


def test_verb_uses_register_specific_reading():
    category = {"verbs": [{"普通形": "見る", "謙譲語": "拝見する", "謙譲語読み": "はいけんする", "中文": "see"}]}
    assert flatten_verbs(category)[0].fields["furigana"] == "はいけんする"


def test_verb_without_base_meaning_is_left_for_validation_to_drop():
    protos = flatten_verbs({"verbs": [{"普通形": "行く", "尊敬語": "いらっしゃる"}]})
    assert len(protos) == 1
    assert protos[0].fields["meaning"] == ""


def test_situation_phrases_carry_scene():
    category = {
        "situations": [
            {"situation": "レストラン", "phrases": [
                {"phrase": "ご注文は？", "meaning": "your order?"},
                {"phrase": "お会計お願いします", "meaning": "check please"},
            ]},
            {"situation": "駅", "phrases": []},
        ],
    }

    protos = flatten_situations(category)

    assert [p.fields["kanji"] for p in protos] == ["ご注文は？", "お会計お願いします"]
    assert all(p.fields["example"] == "Scene: レストラン" for p in protos)
    assert all(p.default_group == SITUATIONS_GROUP for p in protos)


def test_string_phrase_is_used_as_display_form():
    protos = flatten_situations({"situations": [{"scene": "受付", "phrases": ["いらっしゃいませ"]}]})
    assert protos[0].fields["kanji"] == "いらっしゃいませ"
    assert protos[0].fields["meaning"] == ""


def test_pattern_yields_one_entry_per_example():
    category = {"patterns": [{"pattern": "〜ば〜ほど", "例": ["速ければ速いほど", "高ければ高いほど"]}]}

    protos = flatten_patterns(category)

    assert len(protos) == 2
    assert {p.fields["kanji"] for p in protos} == {"〜ば〜ほど"}
    assert {p.fields["furigana"] for p in protos} == {""}
    assert [p.fields["meaning"] for p in protos] == ["速ければ速いほど", "高ければ高いほど"]
    assert all(p.default_group == PATTERNS_GROUP for p in protos)


def test_pattern_explanation_is_shared():
    category = {"category": "文法", "patterns": [
        {"pattern": "〜ながら", "explanation": "while", "examples": ["歩きながら", "食べながら"]},
    ]}

    protos = flatten_patterns(category)

    assert [p.fields["meaning"] for p in protos] == ["while (歩きながら)", "while (食べながら)"]
    assert [p.fields["example"] for p in protos] == ["歩きながら", "食べながら"]
    assert all(p.default_group == "文法" for p in protos)


def test_word_group_falls_back_to_label_then_title_then_imported():
    words = [{"kanji": "猫", "meaning": "cat"}]
    assert flatten_words({"category": "動物", "words": words}, "N5")[0].default_group == "動物"
    assert flatten_words({"words": words}, "N5")[0].default_group == "N5"
    assert flatten_words({"words": words})[0].default_group == "Imported"


def test_category_contributes_from_every_substructure(keigo_document):
    protos = flatten_category(keigo_document["categories"][0], keigo_document["title"])

    # 3 words + 3 verb forms + 2 phrases + 3 pattern examples
    assert len(protos) == 11
    assert protos[0].fields["kanji"] == "会議"
    assert protos[-1].fields["example"] == "拝見させていただきます"


def test_non_list_substructures_are_ignored():
    assert flatten_category({"words": "x", "verbs": None, "situations": {}, "patterns": 3}) == []
    assert flatten_category("not a category") == []

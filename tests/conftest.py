import json

import pytest

from kotoba.config import SettingsManager
from kotoba.services import StorageBackend, VocabularyService


KEIGO_DOCUMENT = {
    "title": "ビジネス日本語",
    "categories": [
        {
            "category": "基本",
            "words": [
                {"kanji": "会議", "furigana": "かいぎ", "meaning": "meeting"},
                {"word": "資料", "reading": "しりょう", "意味": "documents", "group": "Office"},
                {"kanji": "名刺", "furigana": "めいし"},
            ],
            "verbs": [
                {"普通形": "言う", "尊敬語": "おっしゃる", "謙譲語": "申す", "中文": "say"},
                {"普通形": "見る", "謙譲語": "拝見する", "謙譲語読み": "はいけんする", "中文": "see"},
                {"普通形": "寝る", "中文": "sleep"},
            ],
            "situations": [
                {
                    "situation": "受付",
                    "phrases": [
                        {"phrase": "いらっしゃいませ", "meaning": "welcome"},
                        {"phrase": "少々お待ちください", "meaning": "please wait a moment"},
                    ],
                },
            ],
            "patterns": [
                {
                    "pattern": "〜させていただく",
                    "explanation": "humble request for permission",
                    "examples": ["説明させていただきます", "休ませていただきます", "拝見させていただきます"],
                },
            ],
        },
    ],
}


@pytest.fixture
def settings(tmp_path, monkeypatch):
    for key in SettingsManager.DEFAULTS:
        monkeypatch.delenv(f"KOTOBA_{key}", raising=False)
    SettingsManager.reset_instance()
    manager = SettingsManager(str(tmp_path / "settings.json"))
    yield manager
    SettingsManager.reset_instance()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "words.json"


@pytest.fixture
def service(store_path, settings):
    svc = VocabularyService(store_path=str(store_path), backend=StorageBackend.JSON, settings=settings)
    assert svc.load()
    return svc


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def keigo_document():
    return json.loads(json.dumps(KEIGO_DOCUMENT))

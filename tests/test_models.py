import pytest

from tktranslate.clients.errors import DecodeError
from tktranslate.clients.models import LanguageDetection, Sentence, TranslateResult

FULL = {
    "sentences": [
        {"trans": "Hello, ", "orig": "你好，", "backend": 3},
        {"trans": "world.", "orig": "世界。", "backend": 3},
    ],
    "dict": [
        {"pos": "interjection", "terms": ["hello", "hi"], "base_form": "你好", "pos_enum": 9},
    ],
    "src": "zh-CN",
    "confidence": 0.98,
    "ld_result": {
        "srclangs": ["zh-CN", "ja"],
        "srclangs_confidences": [0.98, 0.02],
        "extended_srclangs": ["zh-CN"],
    },
}


def test_from_dict_full_payload():
    r = TranslateResult.from_dict(FULL)
    assert [s.orig for s in r.sentences] == ["你好，", "世界。"]
    assert r.sentences[0] == Sentence(trans="Hello, ", orig="你好，", backend=3)
    assert r.src == "zh-CN"
    assert r.confidence == pytest.approx(0.98)
    assert r.ld_result.srclangs == ["zh-CN", "ja"]
    assert r.ld_result.srclangs_confidences == [0.98, 0.02]
    assert r.dict_entries[0].terms == ["hello", "hi"]


def test_text_concatenates_in_order_without_separator():
    r = TranslateResult.from_dict(FULL)
    assert r.text == "Hello, world."
    assert r.text == "".join(s.trans for s in r.sentences)


def test_missing_optional_sections_default():
    r = TranslateResult.from_dict({"sentences": [{"trans": "x", "orig": "y"}]})
    assert r.src == "" and r.confidence == 0.0
    assert r.ld_result == LanguageDetection()
    assert r.dict_entries == []
    assert r.sentences[0].backend == 0


def test_sentence_without_trans_contributes_nothing():
    # transliteration-only entries carry no "trans"
    r = TranslateResult.from_dict(
        {"sentences": [{"trans": "Ni hao", "orig": "你好"}, {"src_translit": "Nǐ hǎo"}]}
    )
    assert r.text == "Ni hao"


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "text",
        None,
        {"sentences": "nope"},
        {"sentences": [1]},
        {"sentences": [{"trans": 5}]},
        {"src": 1},
        {"confidence": "high"},
        {"confidence": True},
        {"ld_result": {"srclangs": "zh"}},
        {"ld_result": {"srclangs_confidences": ["a"]}},
        {"dict": {}},
    ],
)
def test_bad_shapes_raise_decode_error(payload):
    with pytest.raises(DecodeError):
        TranslateResult.from_dict(payload)


def test_to_dict_uses_wire_names():
    d = TranslateResult.from_dict(FULL).to_dict()
    assert d["dict"][0]["pos"] == "interjection"
    assert "dict_entries" not in d
    assert d["ld_result"]["extended_srclangs"] == ["zh-CN"]
    assert d["sentences"][1]["trans"] == "world."

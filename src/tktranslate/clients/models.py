"""
Response model for /translate_a/single (dj=1 JSON shape).

Only the sections requested through dt=t and dt=bd are decoded:
sentences[], src, confidence, ld_result{...} and dict[].
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from .errors import DecodeError

__all__ = ["Sentence", "LanguageDetection", "DictEntry", "TranslateResult"]


def _expect(value: Any, kind: type, name: str) -> Any:
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(f"field {name!r}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _str_list(value: Any, name: str) -> List[str]:
    items = _expect(value, list, name)
    return [_expect(v, str, name) for v in items]


def _float_list(value: Any, name: str) -> List[float]:
    items = _expect(value, list, name)
    out: List[float] = []
    for v in items:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise DecodeError(f"field {name!r}: expected numbers")
        out.append(float(v))
    return out


@dataclass
class Sentence:
    trans: str = ""
    orig: str = ""
    backend: int = 0

    @classmethod
    def from_dict(cls, d: Any) -> "Sentence":
        _expect(d, dict, "sentences[]")
        return cls(
            trans=_expect(d.get("trans", ""), str, "trans"),
            orig=_expect(d.get("orig", ""), str, "orig"),
            backend=int(_expect(d.get("backend", 0), int, "backend")),
        )


@dataclass
class LanguageDetection:
    srclangs: List[str] = field(default_factory=list)
    srclangs_confidences: List[float] = field(default_factory=list)
    extended_srclangs: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Any) -> "LanguageDetection":
        _expect(d, dict, "ld_result")
        return cls(
            srclangs=_str_list(d.get("srclangs", []), "srclangs"),
            srclangs_confidences=_float_list(
                d.get("srclangs_confidences", []), "srclangs_confidences"
            ),
            extended_srclangs=_str_list(d.get("extended_srclangs", []), "extended_srclangs"),
        )


@dataclass
class DictEntry:
    """One part-of-speech block from the dictionary section (dt=bd)."""

    pos: str = ""
    terms: List[str] = field(default_factory=list)
    base_form: str = ""
    pos_enum: int = 0

    @classmethod
    def from_dict(cls, d: Any) -> "DictEntry":
        _expect(d, dict, "dict[]")
        return cls(
            pos=_expect(d.get("pos", ""), str, "pos"),
            terms=_str_list(d.get("terms", []), "terms"),
            base_form=_expect(d.get("base_form", ""), str, "base_form"),
            pos_enum=int(_expect(d.get("pos_enum", 0), int, "pos_enum")),
        )


@dataclass
class TranslateResult:
    sentences: List[Sentence] = field(default_factory=list)
    src: str = ""
    confidence: float = 0.0
    ld_result: LanguageDetection = field(default_factory=LanguageDetection)
    dict_entries: List[DictEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "TranslateResult":
        """Decode the dj=1 payload; DecodeError on a non-object or mistyped field."""
        if not isinstance(payload, dict):
            raise DecodeError(
                f"response is not a JSON object (got {type(payload).__name__})"
            )
        conf = payload.get("confidence", 0.0)
        if isinstance(conf, bool) or not isinstance(conf, (int, float)):
            raise DecodeError("field 'confidence': expected number")
        return cls(
            sentences=[
                Sentence.from_dict(s)
                for s in _expect(payload.get("sentences", []), list, "sentences")
            ],
            src=_expect(payload.get("src", ""), str, "src"),
            confidence=float(conf),
            ld_result=LanguageDetection.from_dict(payload.get("ld_result") or {}),
            dict_entries=[
                DictEntry.from_dict(e) for e in _expect(payload.get("dict", []), list, "dict")
            ],
        )

    @property
    def text(self) -> str:
        """Full translation: sentence translations joined in order, no separator."""
        return "".join(s.trans for s in self.sentences)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["dict"] = d.pop("dict_entries")
        return d

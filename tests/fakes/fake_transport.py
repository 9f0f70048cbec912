from __future__ import annotations
import json
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tktranslate.clients.errors import TransportError

LANDING_PAGE = (
    "<html><head><script>window.WIZ_global_data={};"
    "c._ctkk='x';TKK=eval('0');</script></head>"
    "<body><script>tkk:'406398.2087938574',experiment_ids:[]</script></body></html>"
)

CANNED_ZH = {
    "sentences": [
        {"trans": "你好", "orig": "你好", "backend": 1},
    ],
    "src": "zh-CN",
    "confidence": 1.0,
    "ld_result": {
        "srclangs": ["zh-CN"],
        "srclangs_confidences": [1.0],
        "extended_srclangs": ["zh-CN"],
    },
}


class FakeTransport:
    """
    Transport double: landing page for "<addr>/", canned JSON for
    /translate_a/single. Records every call; `fail_*` switches raise
    TransportError the way FormTransport does.
    """

    def __init__(
        self,
        landing: str = LANDING_PAGE,
        payload: Any = None,
        raw_body: Optional[bytes] = None,
    ):
        self.landing = landing
        self.payload = CANNED_ZH if payload is None else payload
        self.raw_body = raw_body
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []
        self.fail_landing: Optional[int] = None
        self.fail_translate: Optional[int] = None
        self.closed = False
        self._lock = threading.Lock()

    @property
    def landing_calls(self) -> int:
        return sum(1 for _, url, _ in self.calls if "/translate_a/" not in url)

    @property
    def translate_calls(self) -> List[Dict[str, Any]]:
        return [p or {} for _, url, p in self.calls if "/translate_a/" in url]

    def request(self, method: str, url: str, params: Optional[Mapping[str, Any]] = None):
        with self._lock:
            self.calls.append((method, url, dict(params) if params is not None else None))
        if "/translate_a/single" in url:
            if self.fail_translate is not None:
                raise TransportError(f"HTTP {self.fail_translate}", status_code=self.fail_translate)
            if self.raw_body is not None:
                return self.raw_body, 200
            return json.dumps(self.payload, ensure_ascii=False).encode("utf-8"), 200
        if self.fail_landing is not None:
            raise TransportError(f"HTTP {self.fail_landing}", status_code=self.fail_landing)
        return self.landing.encode("utf-8"), 200

    def close(self) -> None:
        self.closed = True


class ExplodingTransport:
    """Fails the test if anything touches the network."""

    def request(self, *a, **k):
        raise AssertionError(f"unexpected network call: {a!r}")

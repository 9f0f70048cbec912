"""
Translate Client
----------------
Exports:
- TRANSLATE_COM_ADDR, TRANSLATE_CN_ADDR, SUPPORTED_ADDRS
- new_client(server_addr, transport_config) -> TranslateClient
- TranslateClient (translate, simple_translate, request_params)
- default_client() and module-level translate / simple_translate wrappers

Pipeline per call: validate languages -> TKK for the host -> tk token ->
GET /translate_a/single -> TranslateResult. At most two round trips
(landing page on a cold/expired TKK, then the translate call).
"""

from __future__ import annotations

import hashlib
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from .. import languages
from .errors import DecodeError, TranslateError, UnsupportedAddressError, ValidationError
from .models import TranslateResult
from .tkk_cache import DEFAULT_SWEEP_SEC, DEFAULT_TTL_SEC, TKKCache, TTLCache
from .token import sign
from .transport import StaticProxy, TransportConfig

__all__ = [
    "TRANSLATE_COM_ADDR",
    "TRANSLATE_CN_ADDR",
    "SUPPORTED_ADDRS",
    "DEFAULT_DATA_TYPES",
    "TranslateClient",
    "new_client",
    "default_client",
    "translate",
    "simple_translate",
]

logger = logging.getLogger("tktranslate.clients.translate_client")

TRANSLATE_COM_ADDR = "https://translate.google.com"
TRANSLATE_CN_ADDR = "http://translate.google.cn"
SUPPORTED_ADDRS = (TRANSLATE_COM_ADDR, TRANSLATE_CN_ADDR)

# dt values select response sections:
#   t: sentences      bd: dict         at: alternative_translations
#   rm: transliteration  ss: synsets   rw: related_words
#   ex: examples      ld: ld_result
DEFAULT_DATA_TYPES = ("t", "bd")


def _result_key(sl: str, tl: str, q: str) -> str:
    return hashlib.sha1(f"{sl}>{tl}:{q}".encode("utf-8")).hexdigest()


class TranslateClient:
    """
    Client bound to one endpoint host. Shares one TKKCache across all calls;
    safe to use from several threads.
    """

    def __init__(
        self,
        server_addr: str,
        transport: Any,
        tkk_cache: Optional[TKKCache] = None,
        result_ttl: Optional[float] = None,
    ) -> None:
        self.server_addr = server_addr
        self.transport = transport
        self.tkk_cache = tkk_cache or TKKCache(transport)
        self.result_cache: Optional[TTLCache] = (
            TTLCache(ttl=result_ttl, sweep_interval=min(result_ttl, DEFAULT_SWEEP_SEC))
            if result_ttl
            else None
        )

    def __repr__(self) -> str:
        return f"TranslateClient({self.server_addr!r})"

    # --- request shape ---
    def request_params(self, sl: str, tl: str, tk: str, q: str) -> Dict[str, Any]:
        return {
            "client": "t",
            "sl": sl,  # source language
            "tl": tl,  # target language
            "dj": 1,  # dict-shaped JSON (see TranslateResult)
            "ie": "UTF-8",  # input encoding
            "oe": "UTF-8",  # output encoding
            "tk": tk,
            "q": q,
            "dt": list(DEFAULT_DATA_TYPES),
        }

    def _validate(self, sl: str, tl: str) -> None:
        if not languages.is_valid_source(sl):
            raise ValidationError(
                f"source language not supported: {sl!r}",
                field="source",
                code=sl,
                server_addr=self.server_addr,
            )
        if not languages.is_valid_target(tl):
            raise ValidationError(
                f"target language not supported: {tl!r}",
                field="target",
                code=tl,
                server_addr=self.server_addr,
            )

    def _decode(self, body: bytes) -> TranslateResult:
        try:
            payload = json.loads(body.decode("utf-8") if isinstance(body, bytes) else body)
        except (UnicodeDecodeError, ValueError) as e:
            raise DecodeError(f"invalid JSON: {e}", server_addr=self.server_addr) from e
        try:
            return TranslateResult.from_dict(payload)
        except DecodeError as e:
            e.server_addr = self.server_addr
            raise

    # --- public API ---
    def translate(self, sl: str, tl: str, q: str) -> TranslateResult:
        """Translate `q` from `sl` ("auto" allowed) to `tl`."""
        self._validate(sl, tl)

        key = _result_key(sl, tl, q) if self.result_cache is not None else None
        if key is not None:
            hit = self.result_cache.get(key)
            if hit is not None:
                return hit

        try:
            tkk = self.tkk_cache.get(self.server_addr)
        except TranslateError as e:
            logger.error("get tkk error: %s", e)
            raise

        tk = sign(tkk, q)
        url = f"{self.server_addr}/translate_a/single"
        try:
            body, _ = self.transport.request("GET", url, self.request_params(sl, tl, tk, q))
        except TranslateError as e:
            if e.server_addr is None:
                e.server_addr = self.server_addr
            logger.error("translate request failed: %s", e)
            raise

        result = self._decode(body)
        logger.debug(
            "translated | addr=%s sl=%s tl=%s src=%s sentences=%d",
            self.server_addr,
            sl,
            tl,
            result.src,
            len(result.sentences),
        )
        if key is not None:
            self.result_cache.set(key, result)
        return result

    def simple_translate(self, sl: str, tl: str, q: str) -> str:
        """Translation text only: sentence translations concatenated in order."""
        return self.translate(sl, tl, q).text

    def close(self) -> None:
        closer = getattr(self.transport, "close", None)
        if callable(closer):
            closer()

    def __enter__(self) -> "TranslateClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def new_client(
    server_addr: str,
    transport_config: Optional[TransportConfig] = None,
    *,
    transport: Any = None,
    tkk_cache: Optional[TKKCache] = None,
    tkk_ttl: float = DEFAULT_TTL_SEC,
    tkk_sweep_interval: float = DEFAULT_SWEEP_SEC,
    result_ttl: Optional[float] = None,
) -> TranslateClient:
    """
    Build a client for one of SUPPORTED_ADDRS. No network I/O happens here.
    `transport` overrides `transport_config` (used by tests to inject fakes).
    """
    if server_addr not in SUPPORTED_ADDRS:
        raise UnsupportedAddressError(
            f"addr not supported: {server_addr!r}", server_addr=server_addr
        )
    if transport is None:
        transport = (transport_config or TransportConfig()).build()
    if tkk_cache is None:
        tkk_cache = TKKCache(transport, ttl=tkk_ttl, sweep_interval=tkk_sweep_interval)
    return TranslateClient(server_addr, transport, tkk_cache=tkk_cache, result_ttl=result_ttl)


@lru_cache(maxsize=1)
def default_client() -> TranslateClient:
    """
    Client built from settings (config.yaml / env). Built on first call, then
    reused; `default_client.cache_clear()` drops it.
    """
    from ..config import get_settings

    s = get_settings()
    cfg = TransportConfig(timeout=s.timeout, proxy=StaticProxy(s.proxy) if s.proxy else None)
    if s.user_agent:
        cfg.user_agent = s.user_agent
    return new_client(
        s.server_addr,
        cfg,
        tkk_ttl=s.tkk_ttl,
        tkk_sweep_interval=s.tkk_sweep_interval,
        result_ttl=s.result_ttl,
    )


# =================== Module-level wrappers ===================
def translate(
    sl: str, tl: str, q: str, *, client: Optional[TranslateClient] = None
) -> TranslateResult:
    return (client or default_client()).translate(sl, tl, q)


def simple_translate(
    sl: str, tl: str, q: str, *, client: Optional[TranslateClient] = None
) -> str:
    return (client or default_client()).simple_translate(sl, tl, q)

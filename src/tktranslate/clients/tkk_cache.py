"""
TKK Cache (signing key pair per server address)
-----------------------------------------------
- TKK: the (h1, h2) pair embedded in the host's landing page
- parse_tkk: extract the pair from either known page shape
- TTLCache: thread-safe dict with per-entry expiry, lazy eviction on read
- TKKCache: get(server_addr) -> TKK, fetching through the transport on miss

Defaults follow the observed endpoint behaviour: a pair is fresh for
10 minutes; expired entries are swept at most every 5 minutes.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from .errors import KeyAcquisitionError, TranslateError

__all__ = [
    "TKK",
    "TTLCache",
    "TKKCache",
    "parse_tkk",
    "DEFAULT_TTL_SEC",
    "DEFAULT_SWEEP_SEC",
]

logger = logging.getLogger("tktranslate.clients.tkk_cache")

DEFAULT_TTL_SEC: float = 10 * 60
DEFAULT_SWEEP_SEC: float = 5 * 60

# tkk:'406398.2087938574'  /  TKK='406398.2087938574'
_TKK_PLAIN = re.compile(r"""tkk\s*[:=]\s*['"](-?\d+)\.(-?\d+)['"]""", re.IGNORECASE)
# TKK=eval('((function(){var a\x3d4264492758;var b\x3d-1857761990;return 406398+\x27.\x27+(a+b)})())')
_TKK_EVAL = re.compile(
    r"var\s+a\s*(?:\\x3d|=)\s*(-?\d+);\s*var\s+b\s*(?:\\x3d|=)\s*(-?\d+);"
    r"\s*return\s+(-?\d+)\s*\+"
)
_MISSING = object()


@dataclass(frozen=True)
class TKK:
    h1: int
    h2: int
    fetched_at: float = field(default=0.0, compare=False)

    def __str__(self) -> str:
        return f"{self.h1}.{self.h2}"


def parse_tkk(html: str) -> Tuple[int, int]:
    """Return (h1, h2) from landing-page markup; KeyAcquisitionError if absent."""
    if not isinstance(html, str) or not html:
        raise KeyAcquisitionError("empty landing page")
    m = _TKK_PLAIN.search(html)
    if m:
        return int(m.group(1)), int(m.group(2))
    m = _TKK_EVAL.search(html)
    if m:
        a, b, h1 = int(m.group(1)), int(m.group(2)), int(m.group(3))
        return h1, a + b
    raise KeyAcquisitionError("tkk not found in landing page")


class TTLCache:
    """
    Mapping with per-entry expiry timestamps.
    Reads check expiry lazily; sweep() drops every expired entry and is
    triggered from set() at most once per sweep_interval.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SEC,
        sweep_interval: float = DEFAULT_SWEEP_SEC,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = float(ttl)
        self.sweep_interval = float(sweep_interval)
        self._clock = clock
        self._data: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def get(self, key: Hashable, default: Any = None) -> Any:
        now = self._clock()
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return default
            expires_at, value = item
            if now >= expires_at:
                del self._data[key]
                return default
            return value

    def set(self, key: Hashable, value: Any) -> None:
        now = self._clock()
        with self._lock:
            self._data[key] = (now + self.ttl, value)
            if self.sweep_interval > 0 and now - self._last_sweep >= self.sweep_interval:
                self._sweep_locked(now)

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._data.pop(key, None)

    def expire(self, key: Hashable) -> None:
        """Mark an entry stale without removing it (next read misses)."""
        with self._lock:
            item = self._data.get(key)
            if item is not None:
                self._data[key] = (float("-inf"), item[1])

    def sweep(self) -> int:
        with self._lock:
            return self._sweep_locked(self._clock())

    def _sweep_locked(self, now: float) -> int:
        dead = [k for k, (exp, _) in self._data.items() if now >= exp]
        for k in dead:
            del self._data[k]
        self._last_sweep = now
        return len(dead)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class TKKCache:
    """
    One live TKK per server address.

    Two callers racing on a missing/expired entry may both fetch; the last
    write wins and either pair is valid.
    """

    def __init__(
        self,
        transport: Any,
        ttl: float = DEFAULT_TTL_SEC,
        sweep_interval: float = DEFAULT_SWEEP_SEC,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.transport = transport
        self._clock = clock
        self._cache = TTLCache(ttl=ttl, sweep_interval=sweep_interval, clock=clock)

    def get(self, server_addr: str) -> TKK:
        key = server_addr.rstrip("/")
        tkk: Optional[TKK] = self._cache.get(key)
        if tkk is not None:
            return tkk
        tkk = self._fetch(key)
        self._cache.set(key, tkk)
        logger.debug("tkk refreshed | addr=%s tkk=%s", key, tkk)
        return tkk

    def _fetch(self, server_addr: str) -> TKK:
        try:
            body, _ = self.transport.request("GET", f"{server_addr}/", None)
        except TranslateError as e:
            raise KeyAcquisitionError(
                f"failed to fetch landing page: {e.message}", server_addr=server_addr
            ) from e
        html = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else str(body)
        try:
            h1, h2 = parse_tkk(html)
        except KeyAcquisitionError as e:
            e.server_addr = server_addr
            raise
        return TKK(h1=h1, h2=h2, fetched_at=self._clock())

    def invalidate(self, server_addr: str) -> None:
        self._cache.delete(server_addr.rstrip("/"))

    def expire(self, server_addr: str) -> None:
        self._cache.expire(server_addr.rstrip("/"))

    def __contains__(self, server_addr: str) -> bool:
        return server_addr.rstrip("/") in self._cache

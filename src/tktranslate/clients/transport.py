"""
Form Transport (requests-backed)
--------------------------------
The only place that talks HTTP. The translate pipeline sees it as
"perform a form GET/POST, return (raw bytes, status) or raise".

- GET  -> params encoded in the query string (lists become repeated keys)
- POST -> params sent as an x-www-form-urlencoded body
- User-Agent pinned to a desktop Safari string
- Optional per-request proxy selection through a ProxyResolver
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

import requests

from .errors import TransportError

__all__ = [
    "UA_SAFARI",
    "ProxyResolver",
    "StaticProxy",
    "FormTransport",
    "TransportConfig",
]

logger = logging.getLogger("tktranslate.clients.transport")

UA_SAFARI = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15"
)
_DEFAULT_TIMEOUT: float = 10.0


class ProxyResolver(Protocol):
    """Chooses a proxy for a prepared request; None means connect directly."""

    def resolve_proxy(self, request: requests.PreparedRequest) -> Optional[str]:
        ...


class StaticProxy:
    """Routes every request through the same proxy URL."""

    def __init__(self, address: str) -> None:
        if not address:
            raise ValueError("StaticProxy requires an address")
        self.address = address

    def resolve_proxy(self, request: requests.PreparedRequest) -> Optional[str]:
        return self.address

    def __repr__(self) -> str:
        return f"StaticProxy({self.address!r})"


class FormTransport:
    """Thin requests.Session wrapper; safe for mocking in unit tests."""

    def __init__(
        self,
        timeout: float = _DEFAULT_TIMEOUT,
        user_agent: str = UA_SAFARI,
        proxy: Optional[ProxyResolver] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.proxy = proxy
        self.session = session or requests.Session()

    def _prepare(
        self, method: str, url: str, params: Optional[Mapping[str, Any]]
    ) -> requests.PreparedRequest:
        method = method.upper()
        headers = {"User-Agent": self.user_agent}
        if method == "GET":
            req = requests.Request(method, url, params=dict(params or {}), headers=headers)
        elif method == "POST":
            req = requests.Request(method, url, data=dict(params or {}), headers=headers)
        else:
            raise ValueError(f"Unsupported method: {method!r}")
        return self.session.prepare_request(req)

    def _proxies(self, prepared: requests.PreparedRequest) -> Dict[str, str]:
        if self.proxy is None:
            return {}
        addr = self.proxy.resolve_proxy(prepared)
        if not addr:
            return {}
        return {"http": addr, "https": addr}

    def request(
        self, method: str, url: str, params: Optional[Mapping[str, Any]] = None
    ) -> Tuple[bytes, int]:
        """
        Perform the call and return (body, status_code).
        Raises TransportError on connection failure, timeout or non-2xx status.
        """
        prepared = self._prepare(method, url, params)
        try:
            resp = self.session.send(
                prepared, timeout=self.timeout, proxies=self._proxies(prepared)
            )
        except requests.RequestException as e:
            logger.warning("http request failed:[%d] %s", 0, e)
            raise TransportError(f"{type(e).__name__}: {e}") from e

        code = resp.status_code
        if not 200 <= code < 300:
            logger.warning("http request failed:[%d] %s", code, url)
            raise TransportError(f"HTTP {code} from {url}", status_code=code)
        return resp.content, code

    def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Tuple[bytes, int]:
        return self.request("GET", url, params)

    def post(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Tuple[bytes, int]:
        return self.request("POST", url, params)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FormTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@dataclass
class TransportConfig:
    timeout: float = _DEFAULT_TIMEOUT
    user_agent: str = UA_SAFARI
    proxy: Optional[ProxyResolver] = None

    def build(self, session: Optional[requests.Session] = None) -> FormTransport:
        return FormTransport(
            timeout=self.timeout,
            user_agent=self.user_agent,
            proxy=self.proxy,
            session=session,
        )

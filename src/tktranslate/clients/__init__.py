"""
tktranslate – Clients Package
-----------------------------
Public API of the signed translate client.

Exports:
- TranslateClient, new_client, default_client
- TKKCache / TTLCache / TKK, sign
- TranslateResult and its parts
- FormTransport, TransportConfig, StaticProxy

Also re-exports the error types for centralized exception handling.
"""

from .errors import (
    DecodeError,
    KeyAcquisitionError,
    TranslateError,
    TransportError,
    UnsupportedAddressError,
    ValidationError,
)
from .models import DictEntry, LanguageDetection, Sentence, TranslateResult
from .tkk_cache import TKK, TKKCache, TTLCache, parse_tkk
from .token import sign
from .translate_client import (
    SUPPORTED_ADDRS,
    TRANSLATE_CN_ADDR,
    TRANSLATE_COM_ADDR,
    TranslateClient,
    default_client,
    new_client,
    simple_translate,
    translate,
)
from .transport import FormTransport, ProxyResolver, StaticProxy, TransportConfig

__all__ = [
    # Client
    "TranslateClient",
    "new_client",
    "default_client",
    "translate",
    "simple_translate",
    "SUPPORTED_ADDRS",
    "TRANSLATE_CN_ADDR",
    "TRANSLATE_COM_ADDR",
    # Signing
    "TKK",
    "TKKCache",
    "TTLCache",
    "parse_tkk",
    "sign",
    # Model
    "TranslateResult",
    "Sentence",
    "LanguageDetection",
    "DictEntry",
    # Transport
    "FormTransport",
    "TransportConfig",
    "ProxyResolver",
    "StaticProxy",
    # Errors
    "TranslateError",
    "UnsupportedAddressError",
    "ValidationError",
    "KeyAcquisitionError",
    "TransportError",
    "DecodeError",
]

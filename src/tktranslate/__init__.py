"""
tktranslate
-----------
Client for the public /translate_a/single web endpoint: fetches and caches
the host's TKK key pair, signs each query with the matching `tk` token and
decodes the JSON answer.

    from tktranslate import new_client, TRANSLATE_COM_ADDR
    client = new_client(TRANSLATE_COM_ADDR)
    client.simple_translate("auto", "en", "你好")
"""

from .clients import (
    SUPPORTED_ADDRS,
    TRANSLATE_CN_ADDR,
    TRANSLATE_COM_ADDR,
    DecodeError,
    KeyAcquisitionError,
    TransportConfig,
    TranslateClient,
    TranslateError,
    TranslateResult,
    TransportError,
    UnsupportedAddressError,
    ValidationError,
    default_client,
    new_client,
    simple_translate,
    translate,
)
from .languages import AUTO, SUPPORTED_LANGUAGES, is_supported, language

__version__ = "0.3.0"

__all__ = [
    "AUTO",
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_ADDRS",
    "TRANSLATE_CN_ADDR",
    "TRANSLATE_COM_ADDR",
    "TranslateClient",
    "TranslateResult",
    "TransportConfig",
    "new_client",
    "default_client",
    "translate",
    "simple_translate",
    "language",
    "is_supported",
    "TranslateError",
    "UnsupportedAddressError",
    "ValidationError",
    "KeyAcquisitionError",
    "TransportError",
    "DecodeError",
]

"""
tktranslate – Client Errors
---------------------------
Centralized exceptions for the translate client. Every error carries the
server address and the pipeline stage that failed so callers can diagnose a
failure without digging into internals.

Usage:
    raise KeyAcquisitionError("tkk not found in page", server_addr=addr)
    raise DecodeError("response is not a JSON object", server_addr=addr)
"""

from typing import Optional

__all__ = [
    "TranslateError",
    "UnsupportedAddressError",
    "ValidationError",
    "KeyAcquisitionError",
    "TransportError",
    "DecodeError",
]


class TranslateError(RuntimeError):
    """Base exception for all translate client errors."""

    stage = "translate"

    def __init__(self, message: str, *, server_addr: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.server_addr = server_addr

    def __str__(self) -> str:
        ctx = [f"stage={self.stage}"]
        if self.server_addr:
            ctx.append(f"addr={self.server_addr}")
        return f"{self.message} ({', '.join(ctx)})"


class UnsupportedAddressError(TranslateError, ValueError):
    """Client constructed with an address outside the known endpoint hosts."""

    stage = "construct"


class ValidationError(TranslateError, ValueError):
    """Unsupported source or target language; raised before any network call."""

    stage = "validate"

    def __init__(
        self,
        message: str,
        *,
        field: str = "",
        code: str = "",
        server_addr: Optional[str] = None,
    ) -> None:
        super().__init__(message, server_addr=server_addr)
        self.field = field
        self.code = code


class KeyAcquisitionError(TranslateError):
    """Signing key pair (TKK) could not be fetched or parsed from the host."""

    stage = "tkk"


class TransportError(TranslateError):
    """HTTP call failed (connection, timeout, non-2xx status)."""

    stage = "transport"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        server_addr: Optional[str] = None,
    ) -> None:
        super().__init__(message, server_addr=server_addr)
        self.status_code = status_code


class DecodeError(TranslateError):
    """Response body is not valid JSON or does not match the expected shape."""

    stage = "decode"

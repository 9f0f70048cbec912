"""
Token Signer
------------
Computes the `tk` query parameter from the host's TKK pair and the query
text. This reproduces the endpoint's own browser-side checksum bit for bit
(the algorithm published by third-party reverse engineering of the web
client, e.g. the `gtoken` module of py-googletrans):

    bytes = utf8(utf16_code_units(query))      # JS charCodeAt re-encoding
    a = h1
    for b in bytes: a = xr(a + b, "+-a^+6")
    a = xr(a, "+-3^+b+-f") ^ h2                # as unsigned 32-bit
    a %= 1_000_000
    tk = f"{a}.{a ^ h1}"

All arithmetic is carried modulo 2**32, which is what the JavaScript int32
operators produce once the final value is read back as unsigned.
"""

from __future__ import annotations

from typing import Any, List

__all__ = ["sign", "utf8_code_units", "MASK32"]

MASK32 = 0xFFFFFFFF
_SALT_PER_BYTE = "+-a^+6"
_SALT_FINAL = "+-3^+b+-f"


def _utf16_units(text: str) -> List[int]:
    units: List[int] = []
    for ch in text:
        cp = ord(ch)
        if cp < 0x10000:
            units.append(cp)
        else:
            cp -= 0x10000
            units.append(0xD800 + (cp >> 10))
            units.append(0xDC00 + (cp & 0x3FF))
    return units


def utf8_code_units(text: str) -> List[int]:
    """
    UTF-8 bytes of `text` exactly as the reference JS builds them from
    UTF-16 code units. Lone surrogates are encoded as 3-byte sequences
    instead of raising, matching the browser.
    """
    a = _utf16_units(text)
    e: List[int] = []
    g = 0
    size = len(a)
    while g < size:
        c = a[g]
        if c < 0x80:
            e.append(c)
        else:
            if c < 0x800:
                e.append(c >> 6 | 0xC0)
            else:
                if (c & 0xFC00) == 0xD800 and g + 1 < size and (a[g + 1] & 0xFC00) == 0xDC00:
                    g += 1
                    c = 0x10000 + ((c & 0x3FF) << 10) + (a[g] & 0x3FF)
                    e.append(c >> 18 | 0xF0)
                    e.append(c >> 12 & 0x3F | 0x80)
                else:
                    e.append(c >> 12 | 0xE0)
                e.append(c >> 6 & 0x3F | 0x80)
            e.append(c & 0x3F | 0x80)
        g += 1
    return e


def _xr(a: int, salt: str) -> int:
    for i in range(0, len(salt) - 2, 3):
        d = salt[i + 2]
        shift = ord(d) - 87 if d >= "a" else int(d)
        if salt[i + 1] == "+":
            d_val = (a & MASK32) >> shift  # JS >>>
        else:
            d_val = (a << shift) & MASK32
        if salt[i] == "+":
            a = (a + d_val) & MASK32
        else:
            a = (a ^ d_val) & MASK32
    return a


def sign(tkk: Any, query: str) -> str:
    """
    Signed token for `query` under the key pair `tkk`.

    `tkk` may be a TKK instance (anything with h1/h2) or a plain (h1, h2)
    pair. Pure function: same inputs, same token.
    """
    if hasattr(tkk, "h1") and hasattr(tkk, "h2"):
        h1, h2 = int(tkk.h1), int(tkk.h2)
    else:
        h1, h2 = (int(x) for x in tkk)

    a = h1 & MASK32
    for b in utf8_code_units(query):
        a = _xr(a + b, _SALT_PER_BYTE)
    a = _xr(a, _SALT_FINAL)
    a = (a ^ h2) & MASK32
    a %= 1000000
    return f"{a}.{a ^ h1}"


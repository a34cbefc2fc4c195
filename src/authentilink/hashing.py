# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Content fingerprint for cache keys.

32-bit rolling polynomial hash (``h * 31 + c``) over UTF-16 code units,
rendered in base 36.  Keys are stable across processes and match the
browser extension's cache keys for the same text.  Collisions are possible;
the cache stores the source text to detect them.
"""

from __future__ import annotations

import struct

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    out: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_DIGITS[rem])
    return sign + "".join(reversed(out))


def content_fingerprint(text: str) -> str:
    """Return the base-36 fingerprint of *text*.  Never raises."""
    h = 0
    data = text.encode("utf-16-le", "surrogatepass")
    for (unit,) in struct.iter_unpack("<H", data):
        h = _to_int32((h << 5) - h + unit)
    return _base36(h)

"""Request nonce (``RqUID``) generation.

Every outbound request (identity exchange, completion, upload) carries a
fresh RFC-4122 version 4 UUID in the ``RqUID`` header. Randomness comes from
the OS CSPRNG; when the platform has none, a non-cryptographic PRNG is used
and the version and variant bits are forced so the value is still a valid
v4 UUID.
"""
from __future__ import annotations

import os
import random
import uuid
from typing import Callable, Optional

EntropySource = Callable[[int], bytes]


def _prng_bytes(n: int) -> bytes:
    return random.getrandbits(8 * n).to_bytes(n, "big")


def _secure_bytes(n: int) -> bytes:
    try:
        return os.urandom(n)
    except NotImplementedError:
        return _prng_bytes(n)


def new_nonce(entropy: Optional[EntropySource] = None) -> str:
    """Return a 36-character canonical UUID v4 string.

    Parameters:
        entropy: Optional byte source ``f(n) -> bytes`` (tests inject a
            deterministic one). Defaults to the OS CSPRNG with PRNG fallback.
    """
    raw = bytearray((entropy or _secure_bytes)(16))
    raw[6] = (raw[6] & 0x0F) | 0x40
    raw[8] = (raw[8] & 0x3F) | 0x80
    return str(uuid.UUID(bytes=bytes(raw)))


__all__ = ["new_nonce", "EntropySource"]

"""GigaChat provider package.

Public surface: the provider, its credential session and the protocol
translation functions (history reshaping, payload building, chunk
normalization) usable on their own.
"""

from .auth import CredentialSession
from .client import GigaChatProvider
from .content import flatten
from .history import reshape
from .nonce import new_nonce
from .payload import build_payload
from .stream_helpers import SingleCallNormalizer, parse_chunk

__all__ = [
    "GigaChatProvider",
    "CredentialSession",
    "SingleCallNormalizer",
    "build_payload",
    "flatten",
    "new_nonce",
    "parse_chunk",
    "reshape",
]

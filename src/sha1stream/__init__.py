"""Incremental SHA-1 hashing backed by :mod:`hashlib` or a pure Python engine."""

from __future__ import annotations

from .engine import DigestEngine, ScratchBuffer
from .errors import AlreadyFinalizedError, ScratchBufferBusyError, Sha1StreamError
from .hashutils import Hasher, NativeHasher, active_provider, create_hasher, sha1

__version__ = "0.1.0"

__all__ = [
    "AlreadyFinalizedError",
    "DigestEngine",
    "Hasher",
    "NativeHasher",
    "ScratchBuffer",
    "ScratchBufferBusyError",
    "Sha1StreamError",
    "active_provider",
    "create_hasher",
    "sha1",
]

"""SHA-1 hashers with a graceful fallback for minimal Python builds.

This module wraps :mod:`hashlib` and provides a SHA-1 constructor that keeps
working even when Python is built without the OpenSSL-backed ``_hashlib``
module, or when a restricted (e.g. FIPS) build refuses to construct SHA-1.
In such environments we use the pure Python :class:`~sha1stream.engine.DigestEngine`.

Availability is checked once, at import time.  Both variants follow the same
:class:`Hasher` contract: ``update`` takes bytes or a string of byte-sized code
units, and ``digest`` returns the lowercase hex digest exactly once.
"""

from __future__ import annotations

import hashlib as _stdlib_hashlib
import logging
from types import ModuleType
from typing import Optional, Protocol

from . import config
from .engine import Data, DigestEngine, ScratchBuffer, to_bytes
from .errors import AlreadyFinalizedError, ScratchBufferBusyError

logger = logging.getLogger(__name__)


class Hasher(Protocol):
    name: str
    provider: str

    def update(self, data: Data) -> None:
        ...

    def digest(self) -> str:
        ...

    def release(self) -> None:
        ...

    def __enter__(self) -> "Hasher":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...


class NativeHasher:
    """Adapter giving :func:`hashlib.sha1` the :class:`Hasher` contract."""

    name = "sha1"
    provider = "native"
    digest_size = 20
    block_size = 64

    __slots__ = ("_hash", "_finalized")

    def __init__(self) -> None:
        self._hash = _stdlib_hashlib.sha1()
        self._finalized = False

    def __enter__(self) -> "NativeHasher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @property
    def finalized(self) -> bool:
        return self._finalized

    def update(self, data: Data) -> None:
        if self._finalized:
            raise AlreadyFinalizedError("update")
        self._hash.update(to_bytes(data))

    def digest(self) -> str:
        if self._finalized:
            raise AlreadyFinalizedError("digest")
        self._finalized = True
        return self._hash.hexdigest()

    hexdigest = digest

    def release(self) -> None:
        """Abandon the session; later calls raise :class:`AlreadyFinalizedError`."""

        self._finalized = True


def _builtin_sha1_available(module: Optional[ModuleType] = _stdlib_hashlib) -> bool:
    if module is None:
        return False
    try:
        constructor = module.sha1  # type: ignore[attr-defined]
    except AttributeError:
        return False
    try:
        constructor(b"")
    except ValueError:
        return False
    return True


NATIVE_AVAILABLE = _builtin_sha1_available()
if NATIVE_AVAILABLE:
    logger.debug("using hashlib.sha1 for SHA-1 digests")
else:  # pragma: no cover - specific to minimal Python builds
    logger.warning("hashlib.sha1 is unavailable; falling back to the pure Python engine")

_SHARED_SCRATCH = ScratchBuffer()


def _use_pure(pure: Optional[bool]) -> bool:
    if pure is None:
        pure = config.FORCE_PURE
    return pure or not NATIVE_AVAILABLE


def active_provider() -> str:
    """Return the provider :func:`create_hasher` picks by default."""

    return "pure" if _use_pure(None) else "native"


def create_hasher(*, pure: Optional[bool] = None, scratch: ScratchBuffer | None = None) -> Hasher:
    """Return a fresh hasher in its initial state.

    ``pure`` forces (``True``) or declines (``False``) the pure Python engine;
    by default the configuration decides.  The native provider is never used
    when it is unavailable.  Passing ``scratch`` implies the pure engine.
    """

    if scratch is not None or _use_pure(pure):
        return DigestEngine(scratch)
    return NativeHasher()


def sha1(data: Data) -> str:
    """Return the hex SHA-1 digest of ``data`` in a single call."""

    if not _use_pure(None):
        h = NativeHasher()
        h.update(data)
        return h.digest()

    try:
        engine = DigestEngine(_SHARED_SCRATCH)
    except ScratchBufferBusyError:
        logger.debug("shared scratch buffer busy; using a private buffer")
        engine = DigestEngine()
    with engine:
        engine.update(data)
        return engine.digest()


__all__ = [
    "Hasher",
    "NativeHasher",
    "NATIVE_AVAILABLE",
    "active_provider",
    "create_hasher",
    "sha1",
]

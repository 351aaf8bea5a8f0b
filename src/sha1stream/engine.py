"""Pure Python SHA-1 engine for interpreters without a usable :mod:`hashlib`.

The engine packs input bytes straight into an 80-word message buffer, four
bytes per word in big-endian order, and runs the compression function every
time the sixteen input words are full.  Nothing but the current partial block
is kept in memory, so arbitrarily long inputs can be fed in any number of
``update`` calls.

All arithmetic is done on 32-bit unsigned words: every sum and rotation is
masked with ``0xFFFFFFFF``.

The 80-word buffer may be borrowed from a :class:`ScratchBuffer` instead of
being allocated per engine.  A scratch buffer can only be held by one live
engine at a time; claiming a busy buffer raises
:class:`~sha1stream.errors.ScratchBufferBusyError`.
"""

from __future__ import annotations

import threading
import weakref
from typing import Iterable, List, Optional, Sequence, Union

from .errors import AlreadyFinalizedError, ScratchBufferBusyError

BytesLike = Union[bytes, bytearray, memoryview]
Data = Union[str, BytesLike, Iterable[int]]

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF
SCHEDULE_WORDS = 80
BLOCK_WORDS = 16

# Initial chaining values defined by FIPS 180-4.
_INITIAL_STATE: Sequence[int] = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
    0xC3D2E1F0,
)


def to_bytes(data: Data) -> bytes:
    """Return ``data`` as raw bytes.

    Strings are read as one UTF-16 code unit per byte, so a character above
    U+FFFF contributes two bytes.  Like iterables of ints, each unit keeps
    only its low eight bits.
    """

    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError:
            # Big-endian pairs; the low byte of each unit is the second.
            return data.encode("utf-16-be", "surrogatepass")[1::2]
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    try:
        units = iter(data)
    except TypeError:
        raise TypeError(f"unsupported data type for hashing: {type(data)!r}") from None
    return bytes(int(unit) & 0xFF for unit in units)


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & MASK32


class ScratchBuffer:
    """An 80-word message buffer that engines may borrow one at a time."""

    __slots__ = ("words", "_lock", "_holder")

    def __init__(self) -> None:
        self.words: List[int] = [0] * SCHEDULE_WORDS
        self._lock = threading.Lock()
        self._holder: Optional[int] = None

    @property
    def in_use(self) -> bool:
        return self._lock.locked()

    def claim(self) -> List[int]:
        # Non-blocking: a reentrant claim from the same thread fails too.
        if not self._lock.acquire(blocking=False):
            raise ScratchBufferBusyError(self._holder)
        self._holder = threading.get_ident()
        # An abandoned session may have left a partial block behind.
        for i in range(BLOCK_WORDS):
            self.words[i] = 0
        return self.words

    def release(self) -> None:
        self._holder = None
        self._lock.release()


class DigestEngine:
    """Incremental SHA-1 computed from first principles.

    ``update`` may be called any number of times with chunks of any size;
    ``digest`` pads the message, processes the final block and returns the
    40-character lowercase hex digest.  ``digest`` is terminal: any later
    call to ``update`` or ``digest`` raises
    :class:`~sha1stream.errors.AlreadyFinalizedError`.

    Instances are not thread-safe.  Pass ``scratch`` to reuse a shared
    :class:`ScratchBuffer` instead of allocating a private one; it is held
    until ``digest`` returns, :meth:`release` is called, or the engine is
    garbage collected.
    """

    name = "sha1"
    provider = "pure"
    digest_size = 20
    block_size = 64

    __slots__ = (
        "_h",
        "_w",
        "_offset",
        "_shift",
        "_bit_length",
        "_scratch",
        "_finalized",
        "_finalizer",
        "__weakref__",
    )

    def __init__(self, scratch: ScratchBuffer | None = None) -> None:
        if scratch is not None:
            self._w = scratch.claim()
        else:
            self._w = [0] * SCHEDULE_WORDS
        self._scratch = scratch
        self._finalizer = weakref.finalize(self, scratch.release) if scratch is not None else None
        self._h = list(_INITIAL_STATE)
        self._offset = 0  # word being filled, 0-15
        self._shift = 24  # bit position of the next byte within that word
        self._bit_length = 0
        self._finalized = False

    def __enter__(self) -> "DigestEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @property
    def finalized(self) -> bool:
        return self._finalized

    def update(self, data: Data) -> None:
        if self._finalized:
            raise AlreadyFinalizedError("update")
        chunk = to_bytes(data)
        self._bit_length += len(chunk) * 8

        # Same as _write(), with the cursor held in locals.
        w = self._w
        offset, shift = self._offset, self._shift
        for byte in chunk:
            w[offset] |= byte << shift
            if shift:
                shift -= 8
                continue
            offset += 1
            shift = 24
            if offset == BLOCK_WORDS:
                self._process_block()
                offset = 0
        self._offset, self._shift = offset, shift

    def digest(self) -> str:
        if self._finalized:
            raise AlreadyFinalizedError("digest")
        write = self._write

        write(0x80)
        # The length needs words 14 and 15 to itself.
        if self._offset > 14 or (self._offset == 14 and self._shift < 24):
            self._process_block()
        # Words up to 13 past the cursor are still zero from the last reset.
        self._offset = 14
        self._shift = 24

        length = self._bit_length & MASK64
        for shift in range(56, -8, -8):
            write((length >> shift) & 0xFF)
        # The last length byte completed word 15 and processed the block.

        result = "".join(f"{h:08x}" for h in self._h)
        self._finalized = True
        self._release_scratch()
        return result

    hexdigest = digest

    def release(self) -> None:
        """Abandon the session and give back a borrowed scratch buffer."""

        self._finalized = True
        self._release_scratch()

    def _release_scratch(self) -> None:
        if self._scratch is not None:
            scratch, self._scratch = self._scratch, None
            self._w = [0] * SCHEDULE_WORDS
            self._finalizer.detach()
            scratch.release()

    def _write(self, byte: int) -> None:
        self._w[self._offset] |= (byte & 0xFF) << self._shift
        if self._shift:
            self._shift -= 8
            return
        self._offset += 1
        self._shift = 24
        if self._offset == BLOCK_WORDS:
            self._process_block()

    def _process_block(self) -> None:
        w = self._w
        for i in range(BLOCK_WORDS, SCHEDULE_WORDS):
            w[i] = _rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1)

        a, b, c, d, e = self._h
        for i in range(SCHEDULE_WORDS):
            if i < 20:
                f = d ^ (b & (c ^ d))
                k = 0x5A827999
            elif i < 40:
                f = b ^ c ^ d
                k = 0x6ED9EBA1
            elif i < 60:
                f = (b & c) | (d & (b | c))
                k = 0x8F1BBCDC
            else:
                f = b ^ c ^ d
                k = 0xCA62C1D6
            temp = (_rotl(a, 5) + f + e + k + w[i]) & MASK32
            e = d
            d = c
            c = _rotl(b, 30)
            b = a
            a = temp

        h = self._h
        h[0] = (h[0] + a) & MASK32
        h[1] = (h[1] + b) & MASK32
        h[2] = (h[2] + c) & MASK32
        h[3] = (h[3] + d) & MASK32
        h[4] = (h[4] + e) & MASK32

        for i in range(BLOCK_WORDS):
            w[i] = 0
        self._offset = 0
        self._shift = 24


__all__ = ["DigestEngine", "ScratchBuffer", "to_bytes"]

from __future__ import annotations

from typing import Optional


class Sha1StreamError(RuntimeError):
    """Base class for usage faults raised by :mod:`sha1stream`."""


class AlreadyFinalizedError(Sha1StreamError):
    """Raised when a hasher is used again after :meth:`digest` returned."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"hasher already finalized; cannot call {operation}()")


class ScratchBufferBusyError(Sha1StreamError):
    """Raised when a shared scratch buffer is claimed by a live session."""

    def __init__(self, holder_thread: Optional[int]) -> None:
        self.holder_thread = holder_thread
        message = "scratch buffer is in use by another hashing session"
        if holder_thread is not None:
            message = f"{message} (thread {holder_thread})"
        super().__init__(message)


__all__ = ["Sha1StreamError", "AlreadyFinalizedError", "ScratchBufferBusyError"]

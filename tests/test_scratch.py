from __future__ import annotations

import gc
import hashlib
import threading

import pytest

from sha1stream import hashutils
from sha1stream.engine import DigestEngine, ScratchBuffer
from sha1stream.errors import ScratchBufferBusyError


def test_engine_holds_scratch_until_digest():
    scratch = ScratchBuffer()
    engine = DigestEngine(scratch)
    assert scratch.in_use
    engine.update(b"abc")
    assert engine.digest() == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert not scratch.in_use


def test_second_claim_is_rejected():
    scratch = ScratchBuffer()
    first = DigestEngine(scratch)
    with pytest.raises(ScratchBufferBusyError) as exc:
        DigestEngine(scratch)
    assert "in use" in str(exc.value)
    assert exc.value.holder_thread == threading.get_ident()
    first.digest()


def test_claim_from_other_thread_is_rejected():
    scratch = ScratchBuffer()
    owner = DigestEngine(scratch)
    errors = []

    def contend():
        try:
            DigestEngine(scratch)
        except ScratchBufferBusyError as exc:
            errors.append(exc)

    worker = threading.Thread(target=contend)
    worker.start()
    worker.join()

    assert len(errors) == 1
    owner.digest()


def test_sequential_sessions_reuse_buffer():
    scratch = ScratchBuffer()
    for data in (b"x" * 100, b"abc", b"", b"y" * 64):
        engine = DigestEngine(scratch)
        engine.update(data)
        assert engine.digest() == hashlib.sha1(data).hexdigest()
    assert not scratch.in_use


def test_abandoned_session_leaves_clean_buffer():
    scratch = ScratchBuffer()
    with DigestEngine(scratch) as engine:
        engine.update(b"leftover bytes that never get hashed")
    assert not scratch.in_use

    engine = DigestEngine(scratch)
    engine.update(b"abc")
    assert engine.digest() == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_finalized_engine_stops_touching_scratch():
    scratch = ScratchBuffer()
    engine = DigestEngine(scratch)
    assert engine._w is scratch.words
    engine.digest()
    assert engine._w is not scratch.words

    other = DigestEngine(scratch)
    other.update(b"z" * 10)
    assert scratch.words[0] == 0x7A7A7A7A
    assert other.digest() == hashlib.sha1(b"z" * 10).hexdigest()


def test_one_shot_falls_back_when_shared_buffer_busy(monkeypatch):
    monkeypatch.setattr(hashutils, "NATIVE_AVAILABLE", False)
    holder = DigestEngine(hashutils._SHARED_SCRATCH)
    try:
        assert hashutils.sha1("abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"
    finally:
        holder.release()
    assert not hashutils._SHARED_SCRATCH.in_use


def test_one_shot_releases_shared_buffer_on_error(monkeypatch):
    monkeypatch.setattr(hashutils, "NATIVE_AVAILABLE", False)
    with pytest.raises(TypeError):
        hashutils.sha1(3.5)
    assert not hashutils._SHARED_SCRATCH.in_use


def test_dropped_engine_returns_scratch():
    scratch = ScratchBuffer()
    engine = hashutils.create_hasher(scratch=scratch)
    engine.update(b"never finished")
    del engine
    gc.collect()

    assert not scratch.in_use
    reused = DigestEngine(scratch)
    reused.update(b"abc")
    assert reused.digest() == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_finished_engine_does_not_release_twice():
    scratch = ScratchBuffer()
    engine = DigestEngine(scratch)
    engine.digest()
    holder = DigestEngine(scratch)
    del engine
    gc.collect()
    # The next owner keeps its claim.
    assert scratch.in_use
    holder.release()

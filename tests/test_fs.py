from __future__ import annotations

import hashlib
import io

import pytest

from sha1stream import config, fs


@pytest.mark.parametrize("pure", [True, False])
def test_hash_stream_in_small_chunks(pure):
    data = bytes(range(256)) * 5
    digest = fs.hash_stream(io.BytesIO(data), chunk_size=7, pure=pure)
    assert digest == hashlib.sha1(data).hexdigest()


def test_hash_stream_empty():
    assert fs.hash_stream(io.BytesIO(b"")) == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_hash_path_with_progress(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(config, "PROGRESS_MIN_SIZE", 0)
    target = tmp_path / "blob.bin"
    data = b"\xa5" * 5000
    target.write_bytes(data)

    digest = fs.hash_path(target, chunk_size=512, progress=True, pure=True)

    assert digest == hashlib.sha1(data).hexdigest()
    assert "blob.bin" in capsys.readouterr().err


def test_progress_skipped_for_small_files(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(config, "PROGRESS_MIN_SIZE", 1 << 20)
    target = tmp_path / "small.txt"
    target.write_bytes(b"abc")

    assert fs.hash_path(target, progress=True) == "a9993e364706816aba3e25717850c26c9cd0d89d"
    assert capsys.readouterr().err == ""


def test_hash_path_uses_configured_chunk_size(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CHUNK_SIZE", 3)
    target = tmp_path / "data.txt"
    target.write_bytes(b"The quick brown fox jumps over the lazy dog")
    assert fs.hash_path(str(target), pure=True) == "2fd4e1c67a2d28fced849ee1bb76e7391b93eb12"


def test_hash_path_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.hash_path(tmp_path / "missing")


def test_hash_bytes():
    assert fs.hash_bytes(b"abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from tqdm import tqdm

from . import config
from .hashutils import create_hasher, sha1


def hash_stream(
    fh: BinaryIO,
    *,
    total: Optional[int] = None,
    chunk_size: Optional[int] = None,
    progress: Optional[bool] = None,
    pure: Optional[bool] = None,
    desc: str = "Hashing",
) -> str:
    """Read ``fh`` to EOF and return the hex SHA-1 of its contents.

    A progress bar is only drawn when ``total`` is known and at least
    ``config.PROGRESS_MIN_SIZE`` bytes.
    """

    size = chunk_size or config.CHUNK_SIZE
    show = config.PROGRESS if progress is None else progress
    hasher = create_hasher(pure=pure)

    if not show or not total or total < config.PROGRESS_MIN_SIZE:
        for chunk in iter(lambda: fh.read(size), b""):
            hasher.update(chunk)
        return hasher.digest()

    with tqdm(total=total, desc=desc, unit="B", unit_scale=True, ncols=80, colour="cyan") as bar:
        while True:
            chunk = fh.read(size)
            if not chunk:
                break
            hasher.update(chunk)
            bar.update(len(chunk))
    return hasher.digest()


def hash_path(path: Union[str, os.PathLike], **kwargs) -> str:
    p = Path(path)
    with p.open("rb") as fh:
        kwargs.setdefault("desc", p.name)
        return hash_stream(fh, total=p.stat().st_size, **kwargs)


def hash_bytes(data: bytes) -> str:
    return sha1(data)


__all__ = ["hash_stream", "hash_path", "hash_bytes"]

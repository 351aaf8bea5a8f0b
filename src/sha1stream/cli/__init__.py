"""Command line entry points for :mod:`sha1stream`.

The :func:`main` function defined here is imported by the ``sha1stream``
console script and by ``python -m sha1stream``.
"""

from __future__ import annotations

from .main import main

__all__ = ["main"]

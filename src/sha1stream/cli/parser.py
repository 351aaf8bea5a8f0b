"""Argument parser construction for the CLI."""

from __future__ import annotations

import argparse


def _positive_int(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {value!r}") from None
    if size < 1:
        raise argparse.ArgumentTypeError("size must be at least 1")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha1stream",
        description="Print or check SHA-1 checksums.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="files to read; '-' or none reads stdin")
    parser.add_argument("-c", "--check", action="store_true", help="read checksums from the FILEs and verify them")
    parser.add_argument("-p", "--pure", action="store_true", help="use the pure Python engine even if hashlib is available")
    parser.add_argument("--progress", action="store_true", help="show a progress bar for large files")
    parser.add_argument("--chunk-size", type=_positive_int, metavar="BYTES", help="read size per update")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


__all__ = ["build_parser"]

"""CLI entry point for :mod:`sha1stream`."""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..fs import hash_path, hash_stream
from .parser import build_parser

logger = logging.getLogger(__name__)

PROG = "sha1stream"
_CHECK_LINE = re.compile(r"^([0-9a-fA-F]{40}) [ *](.+)$")


def _hash_name(name: str, options: Dict[str, Any]) -> str:
    if name == "-":
        return hash_stream(sys.stdin.buffer, **options)
    return hash_path(name, **options)


def _report(name: str, exc: OSError) -> None:
    reason = exc.strerror or str(exc)
    print(f"{PROG}: {name}: {reason}", file=sys.stderr)


def _read_checklist(name: str) -> List[str]:
    if name == "-":
        return sys.stdin.read().splitlines()
    with open(name, "r", encoding="utf-8") as fh:
        return fh.read().splitlines()


def parse_checklist(lines: Iterable[str]) -> Tuple[List[Tuple[str, str]], int]:
    """Return ``([(digest, filename), ...], malformed_line_count)``."""

    entries: List[Tuple[str, str]] = []
    malformed = 0
    for line in lines:
        if not line.strip():
            continue
        match = _CHECK_LINE.match(line)
        if match is None:
            malformed += 1
            continue
        entries.append((match.group(1).lower(), match.group(2)))
    return entries, malformed


def _check(names: List[str], options: Dict[str, Any]) -> int:
    status = 0
    for name in names:
        try:
            lines = _read_checklist(name)
        except OSError as exc:
            _report(name, exc)
            status = 1
            continue

        entries, malformed = parse_checklist(lines)
        if malformed:
            print(f"{PROG}: {name}: {malformed} line(s) improperly formatted", file=sys.stderr)
        if not entries:
            print(f"{PROG}: {name}: no properly formatted SHA1 checksum lines found", file=sys.stderr)
            status = 1
            continue

        for expected, target in entries:
            try:
                actual = hash_path(target, **options)
            except OSError as exc:
                _report(target, exc)
                print(f"{target}: FAILED open or read")
                status = 1
                continue
            if actual == expected:
                print(f"{target}: OK")
            else:
                logger.debug("%s: expected %s, got %s", target, expected, actual)
                print(f"{target}: FAILED")
                status = 1
    return status


def main(argv: Optional[Iterable[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(list(argv))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    options: Dict[str, Any] = {
        "chunk_size": args.chunk_size,
        "progress": True if args.progress else None,
        "pure": True if args.pure else None,
    }
    names = args.files or ["-"]

    if args.check:
        return _check(names, options)

    status = 0
    for name in names:
        try:
            digest = _hash_name(name, options)
        except OSError as exc:
            _report(name, exc)
            status = 1
            continue
        print(f"{digest}  {name}")
    return status


__all__ = ["main", "parse_checklist"]

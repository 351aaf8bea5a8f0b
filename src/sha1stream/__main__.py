"""Module entry point for running ``python -m sha1stream``."""

from .cli import main as _main


def main() -> int:
    """Execute :mod:`sha1stream`'s CLI entry point."""

    return _main()


if __name__ == "__main__":  # pragma: no cover - exercised via CLI
    raise SystemExit(main())

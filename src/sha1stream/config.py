from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping

# =========================== Config / Defaults ================================
CONF_FILE = Path(
    os.environ.get(
        "SHA1STREAM_CONF",
        Path.home() / ".config" / "sha1stream" / "sha1stream.conf",
    )
)                                          # KEY=VALUE, e.g. FORCE_PURE=yes
DEFAULT_CHUNK_SIZE = 1 << 16
DEFAULT_PROGRESS_MIN_SIZE = 1 << 20

# Module-level configuration cache; populated via _apply_conf()
CONF: Dict[str, str] = {}
FORCE_PURE = False
CHUNK_SIZE = DEFAULT_CHUNK_SIZE
PROGRESS = False
PROGRESS_MIN_SIZE = DEFAULT_PROGRESS_MIN_SIZE


def load_conf(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    out: Dict[str, str] = {}
    for ln in path.read_text(encoding="utf-8").splitlines():
        ln = ln.strip()
        if not ln or ln.startswith("#"):
            continue
        if "=" in ln:
            k, v = ln.split("=", 1)
            out[k.strip().upper()] = v.strip()
    return out


def _parse_bool(val: str) -> bool:
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _get_bool(key: str, default: bool) -> bool:
    val = CONF.get(key)
    if val is None:
        return default
    return _parse_bool(val)


def _get_size(key: str, default: int, minimum: int) -> int:
    val = CONF.get(key)
    if val is None:
        return default
    try:
        size = int(val)
    except ValueError:
        logging.warning("Invalid %s=%r; using default %d", key, val, default)
        return default
    if size < minimum:
        logging.warning("%s=%d is below %d; using default %d", key, size, minimum, default)
        return default
    return size


def _apply_conf(conf: Mapping[str, str]) -> None:
    global CONF, FORCE_PURE, CHUNK_SIZE, PROGRESS, PROGRESS_MIN_SIZE

    CONF = dict(conf)
    FORCE_PURE = _get_bool("FORCE_PURE", False)
    env_force = os.environ.get("SHA1STREAM_FORCE_PURE")
    if env_force is not None:
        FORCE_PURE = _parse_bool(env_force)

    CHUNK_SIZE = _get_size("CHUNK_SIZE", DEFAULT_CHUNK_SIZE, 1)
    PROGRESS = _get_bool("PROGRESS", False)
    PROGRESS_MIN_SIZE = _get_size("PROGRESS_MIN_SIZE", DEFAULT_PROGRESS_MIN_SIZE, 0)


def reload(path: Path | None = None) -> None:
    """Re-read ``path`` (default :data:`CONF_FILE`) and the environment."""

    _apply_conf(load_conf(path or CONF_FILE))


reload()


__all__ = [
    "CONF_FILE",
    "CONF",
    "FORCE_PURE",
    "CHUNK_SIZE",
    "PROGRESS",
    "PROGRESS_MIN_SIZE",
    "load_conf",
    "reload",
]

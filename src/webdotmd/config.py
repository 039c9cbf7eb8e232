"""Load settings from environment (.env and env vars)."""

from __future__ import annotations

import os
from pathlib import Path

# Load .env from project root if present
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)


def _str(key: str, default: str = "") -> str:
    return (os.environ.get(key) or "").strip() or default


def _int(key: str, default: int) -> int:
    raw = _str(key)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _bool(key: str, default: bool = False) -> bool:
    raw = _str(key).lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


# Document format
CONTENT_SENTINEL = _str("WEBDOTMD_CONTENT_SENTINEL", ":content:")
LIST_INDENT = _int("WEBDOTMD_LIST_INDENT", 4)

# Site builds
MAX_WORKERS = _int("WEBDOTMD_MAX_WORKERS", 4)
SKIP_INVALID_PAGES = _bool("WEBDOTMD_SKIP_INVALID_PAGES")
OUTPUT_EXTENSION = _str("WEBDOTMD_OUTPUT_EXTENSION", ".html")

# Logging
LOG_LEVEL = _str("WEBDOTMD_LOG_LEVEL", "INFO").upper()

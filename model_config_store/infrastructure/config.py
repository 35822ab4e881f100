from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Dict


def _parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse a simple .env file (KEY=VALUE per line, '#' comments, quotes stripped)."""
    env: Dict[str, str] = {}
    if dotenv_path.exists():
        with contextlib.suppress(OSError):
            for raw in dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines():
                s = raw.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k:
                    env[k] = v
    return env


def env_str(name: str, default: str) -> str:
    """Process env first, then .env in CWD, then ``default``."""
    v = os.getenv(name)
    if v is not None and v.strip():
        return v.strip()
    local = _parse_dotenv(Path(".env")).get(name, "")
    return local.strip() or default


def elasticsearch_url() -> str:
    return env_str("MODEL_STORE_URL", "http://localhost:9200").rstrip("/")


def write_index_name() -> str:
    return env_str("MODEL_STORE_WRITE_INDEX", ".ml-inference-000001")


def index_pattern() -> str:
    return env_str("MODEL_STORE_INDEX_PATTERN", ".ml-inference-*")


def http_timeout_seconds() -> float:
    try:
        return float(env_str("MODEL_STORE_HTTP_TIMEOUT", "15"))
    except ValueError:
        return 15.0


def max_workers() -> int:
    """
    Worker threads backing the asynchronous REST adapter.
    Defaults to 4 when MODEL_STORE_MAX_WORKERS is not set, invalid or below 1.
    """
    try:
        n = int(env_str("MODEL_STORE_MAX_WORKERS", "4"))
    except ValueError:
        return 4
    return n if n >= 1 else 4

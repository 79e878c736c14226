from __future__ import annotations

import os
from pathlib import Path

_BASE = Path(__file__).resolve().parent

LOG_LEVEL = os.getenv("QBANK_LOG_LEVEL", "INFO").upper()

# hard cap on a single uploaded/pasted bank
MAX_INPUT_CHARS = int(os.getenv("QBANK_MAX_INPUT_CHARS", "1000000"))

SAMPLES_DIR = Path(os.getenv("QBANK_SAMPLES_DIR", str(_BASE / "data" / "samples")))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "QBANK_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if o.strip()
]


def admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "")


def api_key() -> str:
    return os.getenv("QBANK_API_KEY", "")

"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_int(name: str, default: int) -> int:
    """Return an integer environment variable or raise an error."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Server ---------------------------------------------------------------------
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# The game server polls from anywhere, so CORS is open unless narrowed.
ALLOWED_CORS_ORIGINS = _unique(_split_csv(os.getenv("ALLOWED_CORS_ORIGINS"))) or ["*"]


# Storage --------------------------------------------------------------------
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
if STORAGE_BACKEND not in {"memory", "sqlite"}:
    raise RuntimeError("STORAGE_BACKEND must be 'memory' or 'sqlite'")

DATABASE_PATH = Path(os.getenv("DATABASE_PATH", "data/donations.db"))
DB_RESET = _env_bool("DB_RESET", False)


# Queue behaviour ------------------------------------------------------------
MAX_QUEUE_SIZE = _env_int("MAX_QUEUE_SIZE", 20)
DONATION_LIFETIME_SEC = _env_int("DONATION_LIFETIME_SEC", 120)
DELIVERED_LIFETIME_SEC = _env_int("DELIVERED_LIFETIME_SEC", 30)
CLEANUP_INTERVAL_SEC = _env_int("CLEANUP_INTERVAL_SEC", 30)
TOP_SPENDERS_LIMIT = _env_int("TOP_SPENDERS_LIMIT", 10)


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CLEANUP_INTERVAL_SEC",
    "DATABASE_PATH",
    "DB_RESET",
    "DELIVERED_LIFETIME_SEC",
    "DONATION_LIFETIME_SEC",
    "HOST",
    "LOG_LEVEL",
    "MAX_QUEUE_SIZE",
    "PORT",
    "STORAGE_BACKEND",
    "TOP_SPENDERS_LIMIT",
]

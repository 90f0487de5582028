"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CLEANUP_INTERVAL_SEC,
    DATABASE_PATH,
    DB_RESET,
    DELIVERED_LIFETIME_SEC,
    DONATION_LIFETIME_SEC,
    HOST,
    LOG_LEVEL,
    MAX_QUEUE_SIZE,
    PORT,
    STORAGE_BACKEND,
    TOP_SPENDERS_LIMIT,
)
from .database import sqlite_engine
from .errors import InvalidPayloadError, RelayError, StorageError
from .time import Clock, iso_from_millis, iso_now, now_millis

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
    "Clock",
    "InvalidPayloadError",
    "RelayError",
    "StorageError",
    "iso_from_millis",
    "iso_now",
    "now_millis",
    "sqlite_engine",
]

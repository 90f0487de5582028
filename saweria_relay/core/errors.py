"""Domain exceptions raised by the ingest pipeline and the stores."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for errors surfaced to API clients."""


class InvalidPayloadError(RelayError):
    """The webhook body could not be read as a key-value object."""


class StorageError(RelayError):
    """The backing store failed to read or write."""


__all__ = ["InvalidPayloadError", "RelayError", "StorageError"]

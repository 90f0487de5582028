"""Relay that queues Saweria donations for a polling game server."""

__version__ = "1.0.0"

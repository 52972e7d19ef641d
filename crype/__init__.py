"""Crypto payment orders: address generation, SQLite order storage and status updates."""

__version__ = "0.1.0"
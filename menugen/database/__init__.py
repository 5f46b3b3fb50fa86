"""Persistent storage for Menugen."""

from .manager import DatabaseManager

__all__ = ["DatabaseManager"]

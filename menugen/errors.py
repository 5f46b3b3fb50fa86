"""
Error types for Menugen.

All errors raised by the generator and its default collaborators derive from
MenugenError so callers can catch a single base class.
"""


class MenugenError(Exception):
    """Base class for all Menugen errors."""


class ConfigNotFound(MenugenError):
    """The structure source does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Structure file not found: {path}")


class StructureParseError(MenugenError):
    """The structure source is malformed or has the wrong shape."""


class InvalidInput(MenugenError, ValueError):
    """A container definition or key cannot be used to build a container."""


class StorageError(MenugenError):
    """A call against the persistent store failed."""

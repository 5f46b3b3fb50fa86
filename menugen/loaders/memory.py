"""
In-memory loader for Menugen.

Serves a structure that is already held in memory, either as parsed YAML
data or as a StructureDescription. Used by tests and by callers that build
the structure programmatically.
"""

from typing import Any, Optional

from ..models import StructureDescription
from .base import BaseStructureLoader


class InMemoryStructureLoader(BaseStructureLoader):
    """
    Loader that returns a fixed structure.
    """

    def __init__(self, structure: Optional[Any] = None):
        """
        Initialize the loader.

        Args:
            structure: A StructureDescription or raw mapping as produced by a YAML parser
        """
        if isinstance(structure, StructureDescription):
            self._structure = structure
        else:
            self._structure = StructureDescription.from_raw(structure)

    def load(self) -> StructureDescription:
        return self._structure

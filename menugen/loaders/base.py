"""
Base loader interface for Menugen.

This module defines the abstract interface that all structure loaders must implement.
"""

from abc import ABC, abstractmethod

from ..models import StructureDescription


class BaseStructureLoader(ABC):
    """
    Abstract base class for all structure loaders.

    Each loader turns a menu structure source into a validated
    StructureDescription.
    """

    @abstractmethod
    def load(self) -> StructureDescription:
        """
        Load the menu structure.

        Returns:
            The structure description; empty if the source does not exist
        """
        pass

"""
Menugen: declarative menu structure generator.

Reads a YAML description of menus and nested menu links and stores it as
menu and link records, reusing menus that already exist.
"""

__version__ = "0.1.0"
__author__ = "Menugen Project"

# Import main components
from .database import DatabaseManager
from .errors import ConfigNotFound, InvalidInput, MenugenError, StorageError, StructureParseError
from .generator import StructureGenerator
from .loaders import BaseStructureLoader, InMemoryStructureLoader, YamlStructureLoader
from .models import (
    Container,
    ContainerDefinition,
    GenerationReport,
    Item,
    ItemDefinition,
    StructureDescription,
)
from .transliteration import Transliterator

__all__ = [
    "DatabaseManager",
    "StructureGenerator",
    "BaseStructureLoader",
    "InMemoryStructureLoader",
    "YamlStructureLoader",
    "Transliterator",
    "Container",
    "ContainerDefinition",
    "GenerationReport",
    "Item",
    "ItemDefinition",
    "StructureDescription",
    "MenugenError",
    "ConfigNotFound",
    "StructureParseError",
    "InvalidInput",
    "StorageError"
]

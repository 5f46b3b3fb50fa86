"""Data models for Menugen."""

from .structure import ContainerDefinition, ItemDefinition, StructureDescription
from .records import Container, Item, GenerationReport

__all__ = [
    "ContainerDefinition",
    "ItemDefinition",
    "StructureDescription",
    "Container",
    "Item",
    "GenerationReport"
]

"""Structure loaders for Menugen."""

from .base import BaseStructureLoader
from .memory import InMemoryStructureLoader
from .yaml_file import YamlStructureLoader

__all__ = ["BaseStructureLoader", "InMemoryStructureLoader", "YamlStructureLoader"]

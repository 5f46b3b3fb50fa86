"""
YAML file loader for Menugen.

This module reads the menu structure file from disk and parses it into a
StructureDescription. A missing file is an empty structure; a malformed one
is fatal.
"""

import logging
from pathlib import Path
from typing import Union

import yaml

from ..errors import ConfigNotFound, StructureParseError
from ..models import StructureDescription
from .base import BaseStructureLoader


class YamlStructureLoader(BaseStructureLoader):
    """
    Loader for menu structures stored as YAML files.
    """

    def __init__(self, structure_path: Union[str, Path]):
        """
        Initialize the YAML loader.

        Args:
            structure_path: Path to the structure file (e.g. gen_menu.yml)
        """
        self.structure_path = Path(structure_path)

    def load(self) -> StructureDescription:
        """
        Read and parse the structure file.

        Returns:
            The parsed structure, or an empty one if the file does not exist

        Raises:
            StructureParseError: If the file is not valid YAML or has the wrong shape
        """
        try:
            content = self.read()
        except ConfigNotFound:
            logging.warning(f"No menu structure at {self.structure_path}; nothing to generate")
            return StructureDescription()

        structure = self.parse(content)
        logging.info(f"Loaded {len(structure.containers)} menu definition(s) from {self.structure_path}")
        return structure

    def read(self) -> str:
        """
        Read the raw structure file.

        Raises:
            ConfigNotFound: If the file does not exist
        """
        if not self.structure_path.is_file():
            raise ConfigNotFound(self.structure_path)

        with open(self.structure_path, 'r', encoding='utf-8') as f:
            return f.read()

    def parse(self, content: str) -> StructureDescription:
        """
        Parse YAML text into a structure description.

        Args:
            content: The YAML document

        Returns:
            The validated structure description
        """
        try:
            raw = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logging.error(f"Failed to parse {self.structure_path}: {e}")
            raise StructureParseError(f"Malformed YAML in {self.structure_path}: {e}") from e

        return StructureDescription.from_raw(raw)

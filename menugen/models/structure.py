"""
Structure description models for Menugen.

This module defines the parsed, validated form of a menu structure file.
The shape is checked once here, so the generator can walk the tree without
re-validating at every level.
"""

from typing import Any, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from ..errors import StructureParseError


def _mapping_or_empty(value: Any) -> Any:
    """Treat a null mapping as empty and turn YAML scalar keys (2024, yes) into strings."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(key): child for key, child in value.items()}
    return value


class ItemDefinition(BaseModel):
    """
    Definition of a single menu link and, recursively, its children.
    """

    model_config = ConfigDict(extra="forbid")

    path: str = Field(
        ...,
        description="Opaque target reference (internal path, route or external URL)"
    )

    weight: int = Field(
        default=0,
        description="Display-order hint stored on the link"
    )

    attributes: Dict[str, str] = Field(
        default_factory=dict,
        description="Link attributes merged over the host defaults"
    )

    items: Dict[str, 'ItemDefinition'] = Field(
        default_factory=dict,
        description="Child links keyed by title, in source order"
    )

    @field_validator("items", "attributes", mode="before")
    @classmethod
    def _normalize_mappings(cls, value: Any) -> Any:
        return _mapping_or_empty(value)

    @field_validator("weight", mode="before")
    @classmethod
    def _null_weight(cls, value: Any) -> Any:
        return 0 if value is None else value


class ContainerDefinition(BaseModel):
    """
    Definition of a menu and its top-level links.

    An empty label is accepted here and rejected when the container is
    reconciled, so it surfaces as InvalidInput rather than a parse error.
    """

    model_config = ConfigDict(extra="forbid")

    label: str = Field(
        default="",
        description="Human readable menu label"
    )

    summary: str = Field(
        default="",
        description="Menu description"
    )

    lang: str = Field(
        default="en",
        description="Language code used for transliteration and stored on the menu"
    )

    items: Dict[str, ItemDefinition] = Field(
        default_factory=dict,
        description="Top-level links keyed by title, in source order"
    )

    @field_validator("label", "summary", "lang", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("items", mode="before")
    @classmethod
    def _normalize_items(cls, value: Any) -> Any:
        return _mapping_or_empty(value)


class StructureDescription(BaseModel):
    """
    Ordered mapping from container key to container definition.
    """

    containers: Dict[str, ContainerDefinition] = Field(
        default_factory=dict,
        description="Container definitions keyed by raw container key"
    )

    @field_validator("containers", mode="before")
    @classmethod
    def _normalize_containers(cls, value: Any) -> Any:
        return _mapping_or_empty(value)

    @classmethod
    def from_raw(cls, raw: Any) -> "StructureDescription":
        """
        Build a structure description from freshly parsed YAML data.

        Args:
            raw: The object returned by the YAML parser

        Returns:
            The validated structure description

        Raises:
            StructureParseError: If the data does not have the expected shape
        """
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise StructureParseError(
                f"Structure must be a mapping of menus, got {type(raw).__name__}"
            )
        try:
            return cls(containers=raw)
        except ValidationError as e:
            raise StructureParseError(f"Invalid menu structure: {e}") from e

    def items(self) -> Iterator[Tuple[str, ContainerDefinition]]:
        """Iterate over (container key, definition) pairs in source order."""
        return iter(self.containers.items())

    def is_empty(self) -> bool:
        return not self.containers


ItemDefinition.model_rebuild()

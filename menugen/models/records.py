"""
Persisted record models for Menugen.

These are the typed forms of the rows the store keeps for menus and menu
links. The database layer maps rows to and from these models explicitly.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class Container(BaseModel):
    """
    A persisted menu.
    """

    id: str = Field(
        ...,
        description="Machine name derived from the container key; unique in the store"
    )

    label: str = Field(
        ...,
        description="Human readable menu label"
    )

    description: str = Field(
        default="",
        description="Menu description"
    )

    language: str = Field(
        default="en",
        description="Language code of the menu"
    )


class Item(BaseModel):
    """
    A persisted menu link, optionally nested under another link.
    """

    uuid: Optional[str] = Field(
        None,
        description="Unique identifier assigned by the store on creation"
    )

    title: str = Field(
        ...,
        description="Link title"
    )

    target_uri: str = Field(
        ...,
        description="Opaque destination of the link"
    )

    container_id: str = Field(
        ...,
        description="Machine name of the menu the link belongs to"
    )

    weight: int = Field(
        default=0,
        description="Display-order hint"
    )

    parent_ref: Optional[str] = Field(
        None,
        description="UUID of the parent link in the same menu, if any"
    )

    attributes: Dict[str, str] = Field(
        default_factory=dict,
        description="Link attributes"
    )

    enabled: bool = True
    expanded: bool = False


class GenerationReport(BaseModel):
    """
    Summary of one generation pass.
    """

    containers_created: List[str] = Field(
        default_factory=list,
        description="Ids of menus created during the pass"
    )

    containers_reused: List[str] = Field(
        default_factory=list,
        description="Ids of menus that already existed"
    )

    items_created: int = 0
    items_reused: int = 0

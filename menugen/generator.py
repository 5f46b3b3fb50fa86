"""
Structure generator for Menugen.

Walks a menu structure description and reconciles it against the store:
each top-level entry becomes a menu (created once, reused afterwards) and
each nested entry becomes a menu link wired to its parent link.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union

from pydantic import ValidationError

from .config import ConfigManager, get_config
from .errors import InvalidInput
from .loaders import BaseStructureLoader, YamlStructureLoader
from .models import (
    Container,
    ContainerDefinition,
    GenerationReport,
    Item,
    ItemDefinition,
    StructureDescription,
)
from .transliteration import Transliterator


class ContainerStore(Protocol):
    def container_exists(self, container_id: str) -> bool: ...
    def load_container(self, container_id: str) -> Optional[Container]: ...
    def create_container(self, container: Container) -> Container: ...


class NameInUseCheck(Protocol):
    def menu_name_in_use(self, container_id: str) -> bool: ...


class ItemStore(Protocol):
    def create_item(self, item: Item) -> Item: ...
    def find_item(self, container_id: str, parent_ref: Optional[str],
                  title: str, target_uri: str) -> Optional[Item]: ...


class TransliterationService(Protocol):
    def transliterate(self, text: str, langcode: str = "en", unknown_character: str = "?") -> str: ...


class StructureGenerator:
    """
    Turns a declarative menu structure into stored menus and menu links.

    Menus are reconciled by machine name, so running the generator again
    reuses them. Links carry no natural key and are created on every pass
    unless dedupe_items is enabled.
    """

    REPLACE_PATTERN = re.compile(r"[^a-z0-9-]+")
    REPLACEMENT = "-"

    def __init__(
        self,
        loader: BaseStructureLoader,
        container_store: ContainerStore,
        name_in_use: NameInUseCheck,
        item_store: ItemStore,
        transliterator: Optional[TransliterationService] = None,
        supports_attributes: bool = True,
        default_attributes: Optional[Dict[str, str]] = None,
        dedupe_items: bool = False,
        default_language: str = "en"
    ):
        """
        Initialize the generator with its collaborators.

        Args:
            loader: Source of the structure description
            container_store: Storage for menus
            name_in_use: Check for menu names already referenced by links
            item_store: Storage for menu links
            transliterator: Folds menu keys to ASCII; defaults to Transliterator()
            supports_attributes: Whether the host stores link attributes
            default_attributes: Attributes every new link starts with
            dedupe_items: Reuse an identical existing link instead of creating another
            default_language: Language used when a menu sets none
        """
        self.loader = loader
        self.container_store = container_store
        self.name_in_use = name_in_use
        self.item_store = item_store
        self.transliterator = transliterator or Transliterator()
        self.supports_attributes = supports_attributes
        self.default_attributes = dict(default_attributes or {})
        self.dedupe_items = dedupe_items
        self.default_language = default_language or "en"

    @classmethod
    def from_config(cls, db, cfg: Optional[ConfigManager] = None) -> "StructureGenerator":
        """
        Build a generator wired to a DatabaseManager and the YAML structure file.

        Args:
            db: A connected DatabaseManager, used for menus, links and the name check
            cfg: Configuration to read; defaults to the global configuration

        Returns:
            The configured generator
        """
        cfg = cfg or get_config()
        return cls(
            loader=YamlStructureLoader(cfg.structure_file),
            container_store=db,
            name_in_use=db,
            item_store=db,
            supports_attributes=cfg.supports_attributes,
            default_attributes=cfg.default_attributes,
            dedupe_items=cfg.dedupe_items,
            default_language=cfg.default_language
        )

    def load_structure(self) -> StructureDescription:
        """Load the structure description from the configured source."""
        return self.loader.load()

    def derive_container_id(self, raw_key: str, langcode: Optional[str] = None) -> str:
        """
        Derive a menu machine name from a raw key.

        The key is transliterated for the given language, lowercased, and every
        run of characters outside [a-z0-9-] is collapsed into a single "-".

        Args:
            raw_key: The key as written in the structure file
            langcode: Language used for transliteration

        Returns:
            The machine name

        Raises:
            InvalidInput: If nothing usable is left after transliteration
        """
        langcode = langcode or self.default_language
        transliterated = self.transliterator.transliterate(raw_key, langcode, "_")
        container_id = self.REPLACE_PATTERN.sub(self.REPLACEMENT, transliterated.lower())

        if not container_id.strip(self.REPLACEMENT):
            raise InvalidInput(f"Menu key '{raw_key}' does not produce a usable machine name")

        return container_id

    def menu_name_exists(self, container_id: str) -> bool:
        """
        Check whether a menu name is taken.

        A name is taken if a menu with that id is stored, or if any link is
        already assigned to it.
        """
        if self.container_store.container_exists(container_id):
            return True

        return self.name_in_use.menu_name_in_use(container_id)

    def reconcile_container(
        self,
        raw_key: str,
        definition: Union[ContainerDefinition, Mapping[str, Any]]
    ) -> Container:
        """
        Create the menu for a structure entry, or reuse the existing one.

        Existing menus are returned as stored; their label and description are
        never updated from the definition.

        Args:
            raw_key: The top-level key from the structure file
            definition: The menu definition

        Returns:
            The stored or reused menu

        Raises:
            InvalidInput: If the key or label is empty, or the key yields no machine name
            StorageError: If a store call fails
        """
        container, _ = self._reconcile_container(raw_key, definition)
        return container

    def _reconcile_container(self, raw_key: str, definition: Any) -> Tuple[Container, bool]:
        definition = self._coerce_definition(raw_key, definition)

        if not raw_key or not definition.label:
            raise InvalidInput('You must provide a key and a label for the menu.')

        langcode = definition.lang or self.default_language
        container_id = self.derive_container_id(raw_key, langcode)

        if self.menu_name_exists(container_id):
            existing = self.container_store.load_container(container_id)
            if existing is not None:
                logging.info(f"Reusing existing menu '{container_id}'")
                return existing, False

            # The name is only reserved by links; attach to it without storing a menu row.
            logging.info(f"Menu name '{container_id}' is already in use by links; not creating a menu")
            return self._build_container(container_id, definition, langcode), False

        container = self.container_store.create_container(
            self._build_container(container_id, definition, langcode)
        )
        logging.info(f"Created menu '{container_id}' ({container.label})")
        return container, True

    def new_item(self, container: Container) -> Item:
        """
        Build a blank, unsaved link bound to a menu.
        """
        return Item(
            title="",
            target_uri="",
            container_id=container.id,
            attributes=dict(self.default_attributes) if self.supports_attributes else {}
        )

    def reconcile_items(
        self,
        container: Container,
        items: Mapping[str, ItemDefinition],
        parent: Optional[Item] = None
    ) -> List[Item]:
        """
        Store a tree of link definitions under a menu.

        Links are stored depth first in source order, each parent before its
        children. The walk uses an explicit stack, so the depth of the tree is
        not limited by the interpreter's recursion limit.

        Args:
            container: The menu the links belong to
            items: Link definitions keyed by title
            parent: Link to nest the top of the tree under, if any

        Returns:
            The stored links in the order they were processed

        Raises:
            StorageError: If a store call fails
        """
        return [item for item, _ in self._reconcile_items(container, items, parent)]

    def _reconcile_items(
        self,
        container: Container,
        items: Mapping[str, ItemDefinition],
        parent: Optional[Item]
    ) -> List[Tuple[Item, bool]]:
        processed: List[Tuple[Item, bool]] = []
        stack: List[Tuple[str, ItemDefinition, Optional[Item]]] = [
            (title, definition, parent) for title, definition in reversed(list(items.items()))
        ]

        while stack:
            title, definition, parent_item = stack.pop()
            item, created = self._store_item(container, title, definition, parent_item)
            processed.append((item, created))

            for child_title, child in reversed(list(definition.items.items())):
                stack.append((child_title, child, item))

        return processed

    def generate(self) -> GenerationReport:
        """
        Generate every menu in the configured structure.

        The run stops at the first error, which propagates to the caller.
        Menus and links stored before the error remain in place.

        Returns:
            Report of created and reused menus and links
        """
        structure = self.load_structure()
        report = GenerationReport()

        for raw_key, definition in structure.items():
            container, created = self._reconcile_container(raw_key, definition)
            if created:
                report.containers_created.append(container.id)
            else:
                report.containers_reused.append(container.id)

            for _, item_created in self._reconcile_items(container, definition.items, None):
                if item_created:
                    report.items_created += 1
                else:
                    report.items_reused += 1

        logging.info(
            f"Menu generation finished: {len(report.containers_created)} menu(s) created, "
            f"{len(report.containers_reused)} reused, {report.items_created} link(s) created"
        )
        return report

    def _store_item(
        self,
        container: Container,
        title: str,
        definition: ItemDefinition,
        parent: Optional[Item]
    ) -> Tuple[Item, bool]:
        parent_ref = parent.uuid if parent is not None else None

        if self.dedupe_items:
            existing = self.item_store.find_item(container.id, parent_ref, title, definition.path)
            if existing is not None:
                logging.debug(f"Reusing link '{title}' in menu '{container.id}'")
                return existing, False

        item = self.new_item(container).model_copy(update={
            "title": title,
            "target_uri": definition.path,
            "weight": definition.weight,
            "parent_ref": parent_ref,
        })

        if definition.attributes:
            if self.supports_attributes:
                item.attributes = {**item.attributes, **definition.attributes}
            else:
                logging.debug(f"Link attributes not supported; dropping attributes of '{title}'")

        stored = self.item_store.create_item(item)
        logging.debug(f"Created link '{title}' -> {definition.path} in menu '{container.id}'")
        return stored, True

    def _build_container(self, container_id: str, definition: ContainerDefinition, langcode: str) -> Container:
        return Container(
            id=container_id,
            label=definition.label,
            description=definition.summary or "",
            language=langcode
        )

    def _coerce_definition(self, raw_key: str, definition: Any) -> ContainerDefinition:
        if isinstance(definition, ContainerDefinition):
            return definition
        try:
            return ContainerDefinition.model_validate(definition or {})
        except ValidationError as e:
            raise InvalidInput(f"Invalid definition for menu '{raw_key}': {e}") from e

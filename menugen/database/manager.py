"""
Database manager for Menugen.

This module handles all persistence of menus and menu links using DuckDB.
It is the default container store, name-in-use check and item store used by
the structure generator.
"""

import duckdb
import json
import logging
import uuid
from typing import List, Optional
from datetime import datetime

from ..errors import StorageError
from ..models import Container, Item


class DatabaseManager:
    """
    Manages the DuckDB database holding menus and menu links.
    """

    _ITEM_COLUMNS = (
        "uuid, title, target_uri, container_id, weight, parent_ref, "
        "attributes, enabled, expanded"
    )

    def __init__(self, db_path: str = "menugen.db"):
        """
        Initialize the database manager.

        Args:
            db_path: Path to the DuckDB database file, or ":memory:"
        """
        self.db_path = db_path
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        try:
            self.connection = duckdb.connect(self.db_path)
        except duckdb.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def _execute(self, query: str, params: Optional[list] = None):
        if not self.connection:
            raise RuntimeError("Database connection not established")

        try:
            return self.connection.execute(query, params or [])
        except duckdb.Error as e:
            logging.error(f"Database call failed: {e}")
            raise StorageError(str(e)) from e

    def initialize_database(self):
        """
        Create all necessary tables if they don't exist.
        """
        self._execute("""
            CREATE TABLE IF NOT EXISTS containers (
                id VARCHAR PRIMARY KEY,
                label VARCHAR NOT NULL,
                description VARCHAR NOT NULL DEFAULT '',
                language VARCHAR NOT NULL DEFAULT 'en',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Links reference menus by name only; a link may reserve a menu name
        # that has no row in the containers table.
        self._execute("CREATE SEQUENCE IF NOT EXISTS item_seq;")
        self._execute("""
            CREATE TABLE IF NOT EXISTS items (
                uuid VARCHAR PRIMARY KEY,
                seq BIGINT DEFAULT nextval('item_seq'),
                title VARCHAR NOT NULL,
                target_uri VARCHAR NOT NULL,
                container_id VARCHAR NOT NULL,
                weight INTEGER NOT NULL DEFAULT 0,
                parent_ref VARCHAR,
                attributes TEXT NOT NULL DEFAULT '{}',
                enabled BOOLEAN NOT NULL DEFAULT TRUE,
                expanded BOOLEAN NOT NULL DEFAULT FALSE,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    # Containers

    def container_exists(self, container_id: str) -> bool:
        """
        Check whether a menu row with this id exists.

        Args:
            container_id: The menu machine name

        Returns:
            True if the menu exists
        """
        result = self._execute("""
            SELECT COUNT(*) FROM (
                SELECT 1 FROM containers WHERE id = ? LIMIT 1
            )
        """, [container_id]).fetchone()
        return bool(result and result[0])

    def menu_name_in_use(self, container_id: str) -> bool:
        """
        Check whether any link is assigned to this menu name.

        Args:
            container_id: The menu machine name

        Returns:
            True if at least one link references the name
        """
        result = self._execute(
            "SELECT 1 FROM items WHERE container_id = ? LIMIT 1",
            [container_id]
        ).fetchone()
        return result is not None

    def load_container(self, container_id: str) -> Optional[Container]:
        """
        Retrieve a menu by id.

        Args:
            container_id: The menu machine name

        Returns:
            The menu if found, None otherwise
        """
        result = self._execute("""
            SELECT id, label, description, language
            FROM containers
            WHERE id = ?
        """, [container_id]).fetchone()

        if result:
            return Container(
                id=result[0],
                label=result[1],
                description=result[2],
                language=result[3]
            )
        return None

    def create_container(self, container: Container) -> Container:
        """
        Persist a new menu.

        Args:
            container: The menu to store

        Returns:
            The stored menu

        Raises:
            StorageError: If the insert fails, including when the id is already taken
        """
        self._execute("""
            INSERT INTO containers (id, label, description, language, created_at)
            VALUES (?, ?, ?, ?, ?)
        """, [
            container.id,
            container.label,
            container.description,
            container.language,
            datetime.now()
        ])
        return container

    def list_containers(self) -> List[Container]:
        """List all menus ordered by id."""
        results = self._execute("""
            SELECT id, label, description, language
            FROM containers
            ORDER BY id
        """).fetchall()

        return [
            Container(id=row[0], label=row[1], description=row[2], language=row[3])
            for row in results
        ]

    # Items

    def create_item(self, item: Item) -> Item:
        """
        Persist a new menu link and assign its uuid.

        Args:
            item: The link to store; its uuid is ignored

        Returns:
            A copy of the link carrying the assigned uuid

        Raises:
            StorageError: If the parent link is not stored in the same menu, or the insert fails
        """
        if item.parent_ref is not None:
            parent = self._execute(
                "SELECT 1 FROM items WHERE uuid = ? AND container_id = ?",
                [item.parent_ref, item.container_id]
            ).fetchone()
            if parent is None:
                raise StorageError(
                    f"Parent link {item.parent_ref} does not exist in menu '{item.container_id}'"
                )

        stored = item.model_copy(update={"uuid": str(uuid.uuid4())})
        self._execute("""
            INSERT INTO items (
                uuid, title, target_uri, container_id, weight, parent_ref,
                attributes, enabled, expanded, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, [
            stored.uuid,
            stored.title,
            stored.target_uri,
            stored.container_id,
            stored.weight,
            stored.parent_ref,
            json.dumps(stored.attributes, sort_keys=True),
            stored.enabled,
            stored.expanded,
            datetime.now()
        ])
        return stored

    def find_item(
        self,
        container_id: str,
        parent_ref: Optional[str],
        title: str,
        target_uri: str
    ) -> Optional[Item]:
        """
        Find the first link with the given position, title and target.

        Args:
            container_id: The menu machine name
            parent_ref: UUID of the parent link, or None for top-level links
            title: Link title
            target_uri: Link target

        Returns:
            The oldest matching link, or None
        """
        query = f"""
            SELECT {self._ITEM_COLUMNS}
            FROM items
            WHERE container_id = ?
              AND title = ?
              AND target_uri = ?
        """
        params = [container_id, title, target_uri]

        if parent_ref is None:
            query += " AND parent_ref IS NULL"
        else:
            query += " AND parent_ref = ?"
            params.append(parent_ref)

        query += " ORDER BY seq LIMIT 1"
        result = self._execute(query, params).fetchone()

        return self._row_to_item(result) if result else None

    def get_item(self, item_uuid: str) -> Optional[Item]:
        """Retrieve a link by uuid."""
        result = self._execute(
            f"SELECT {self._ITEM_COLUMNS} FROM items WHERE uuid = ?",
            [item_uuid]
        ).fetchone()
        return self._row_to_item(result) if result else None

    def list_items(self, container_id: Optional[str] = None) -> List[Item]:
        """
        List links in creation order, optionally filtered by menu.

        Args:
            container_id: Optional filter by menu machine name

        Returns:
            List of links
        """
        if container_id:
            results = self._execute(f"""
                SELECT {self._ITEM_COLUMNS}
                FROM items
                WHERE container_id = ?
                ORDER BY seq
            """, [container_id]).fetchall()
        else:
            results = self._execute(f"""
                SELECT {self._ITEM_COLUMNS}
                FROM items
                ORDER BY seq
            """).fetchall()

        return [self._row_to_item(row) for row in results]

    def _row_to_item(self, row) -> Item:
        return Item(
            uuid=row[0],
            title=row[1],
            target_uri=row[2],
            container_id=row[3],
            weight=row[4],
            parent_ref=row[5],
            attributes=json.loads(row[6]) if row[6] else {},
            enabled=row[7],
            expanded=row[8]
        )

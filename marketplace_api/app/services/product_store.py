"""
Durable key-value store for products.

``ProductStore`` maps a product id to a :class:`Product` and keeps the
mapping in the ``products`` table of an SQLite file, so records inserted
before a restart are still there afterwards.  Every call opens its own
connection and closes it before returning.  Lookups go through the
primary key index on ``id``.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from marketplace_api.app.core.db import get_connection, init_db
from marketplace_api.app.schemas.product import Product


class ProductStore:
    """Key-value access to the ``products`` table."""

    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url

    def init_db(self) -> None:
        """Create or migrate the schema of the underlying database."""
        version = init_db(self.database_url)
        logging.getLogger(__name__).info("Product store ready (schema version %s)", version)

    def contains_key(self, product_id: str) -> bool:
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                "SELECT 1 FROM products WHERE id = ?", (product_id,)
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    def get(self, product_id: str) -> Optional[Product]:
        """Return the product stored under ``product_id`` or ``None``."""
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            ).fetchone()
            if not row:
                return None
            return self._row_to_product(row)
        finally:
            conn.close()

    def insert(self, product_id: str, product: Product) -> None:
        """Insert ``product`` under ``product_id``, replacing any existing record."""
        conn = get_connection(self.database_url)
        try:
            conn.execute(
                """
                INSERT INTO products (id, name, price, location, description, image, owner)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    price = excluded.price,
                    location = excluded.location,
                    description = excluded.description,
                    image = excluded.image,
                    owner = excluded.owner
                """,
                (
                    product_id,
                    product.name,
                    product.price,
                    product.location,
                    product.description,
                    product.image,
                    product.owner,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def remove(self, product_id: str) -> Optional[Product]:
        """Delete the record under ``product_id``.

        Returns the removed product, or ``None`` if there was nothing to
        remove.
        """
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                "SELECT * FROM products WHERE id = ?", (product_id,)
            ).fetchone()
            if not row:
                return None
            conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
            conn.commit()
            return self._row_to_product(row)
        finally:
            conn.close()

    def values(self) -> List[Product]:
        """Return every stored product, ordered by id."""
        conn = get_connection(self.database_url)
        try:
            rows = conn.execute("SELECT * FROM products ORDER BY id ASC").fetchall()
            return [self._row_to_product(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_product(row: sqlite3.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            price=row["price"],
            location=row["location"],
            description=row["description"],
            image=row["image"],
            owner=row["owner"],
        )

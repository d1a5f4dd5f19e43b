"""SQLite persistence for catalog products."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path

from catalog.api.models import Product
from catalog.services.errors import InsufficientStockError, ProductNotFoundError

log = logging.getLogger(__name__)


class ProductStore:
    """Stores and queries products in SQLite."""

    def __init__(self, db_path: Path | str = ":memory:") -> None:
        self._conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._write_lock = threading.Lock()
        self._create_tables()

    def _create_tables(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS products (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                price INTEGER NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                stock INTEGER NOT NULL
            )
        """)
        self._conn.commit()

    @staticmethod
    def _to_product(row: sqlite3.Row) -> Product:
        return Product(**dict(row))

    def count(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM products").fetchone()[0]

    def seed(self, count: int) -> int:
        """Insert demo products 1..count when the table is empty.

        Returns the number of rows inserted.
        """
        if self.count() > 0:
            return 0
        rows = [
            (f"Product {i}", i * 1000, f"Description {i}", 1000)
            for i in range(1, count + 1)
        ]
        with self._write_lock:
            self._conn.executemany(
                "INSERT INTO products (name, price, description, stock) VALUES (?, ?, ?, ?)",
                rows,
            )
            self._conn.commit()
        log.info("Seeded %d products", len(rows))
        return len(rows)

    def find_by_id(self, product_id: int) -> Product:
        row = self._conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,)
        ).fetchone()
        if row is None:
            raise ProductNotFoundError(product_id)
        return self._to_product(row)

    def find_all(self) -> list[Product]:
        rows = self._conn.execute("SELECT * FROM products ORDER BY id").fetchall()
        return [self._to_product(r) for r in rows]

    def create(self, name: str, price: int, description: str = "", stock: int = 0) -> Product:
        with self._write_lock:
            cur = self._conn.execute(
                "INSERT INTO products (name, price, description, stock) VALUES (?, ?, ?, ?)",
                (name, price, description, stock),
            )
            self._conn.commit()
        return Product(id=cur.lastrowid, name=name, price=price,
                       description=description, stock=stock)

    def decrease_stock(self, product_id: int, quantity: int) -> Product:
        """Remove quantity from stock. Raises if stock would go negative."""
        with self._write_lock:
            product = self.find_by_id(product_id)
            if product.stock < quantity:
                raise InsufficientStockError(product_id, product.stock, quantity)
            self._conn.execute(
                "UPDATE products SET stock = stock - ? WHERE id = ?",
                (quantity, product_id),
            )
            self._conn.commit()
        return product.model_copy(update={"stock": product.stock - quantity})

    def close(self) -> None:
        self._conn.close()

from __future__ import annotations

from contextlib import closing
import json
import sqlite3
from typing import List, Optional

from domain.models import ShoppingCart
from domain.repositories import Repository


class SqliteShoppingCartRepository(Repository[ShoppingCart]):
    """
    SQLite-backed implementation of `Repository` for shopping carts.

    Owns the `shopping_carts` table. Loaded carts carry no customer
    reference; `SqliteAccountRepository` links them back when it loads
    the owning customer.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_table(self) -> None:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS shopping_carts (
                    id INTEGER PRIMARY KEY,
                    customer_id INTEGER,
                    games TEXT NOT NULL DEFAULT '[]'
                )
                """
            )
            conn.commit()

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> ShoppingCart:
        return ShoppingCart(id=int(row[0]), customer=None, games=json.loads(row[2]))

    def create(self, entity: ShoppingCart) -> None:
        customer_id = entity.customer.id if entity.customer is not None else None
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(
                "INSERT INTO shopping_carts (id, customer_id, games) VALUES (?, ?, ?)",
                (entity.id, customer_id, json.dumps(entity.games)),
            )
            conn.commit()

    def get_all(self) -> List[ShoppingCart]:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute("SELECT id, customer_id, games FROM shopping_carts ORDER BY rowid")
            return [self._to_domain(row) for row in cur.fetchall()]

    def get_by_id(self, entity_id: int) -> Optional[ShoppingCart]:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute("SELECT id, customer_id, games FROM shopping_carts WHERE id = ?", (entity_id,))
            row = cur.fetchone()
            if not row:
                return None
            return self._to_domain(row)

    def delete(self, entity_id: int) -> None:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM shopping_carts WHERE id = ?", (entity_id,))
            conn.commit()

from __future__ import annotations

from contextlib import closing
import json
import sqlite3
from typing import List, Optional

from domain.models import Admin, Customer, Developer, Role, User
from domain.repositories import Repository
from infrastructure.db.shopping_cart_repository_sqlite import SqliteShoppingCartRepository

_COLUMNS = "id, username, email, password, role, balance, games, games_library, reviews"


class SqliteAccountRepository(Repository[User]):
    """
    SQLite-backed implementation of `Repository` for accounts of any role.

    Each instance owns one table (e.g. `users`, `admins`, `customers`)
    and maps its rows to the dataclass matching the stored role. List
    fields are stored as JSON text. When a cart repository is given,
    loaded customers get their shopping cart linked back.
    """

    def __init__(
        self,
        db_path: str,
        table: str,
        cart_repository: Optional[SqliteShoppingCartRepository] = None,
    ) -> None:
        if not table.isidentifier():
            raise ValueError(f"Invalid table name: {table!r}")
        self._db_path = db_path
        self._table = table
        self._cart_repository = cart_repository
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_table(self) -> None:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id INTEGER PRIMARY KEY,
                    username TEXT NOT NULL,
                    email TEXT NOT NULL,
                    password TEXT NOT NULL,
                    role TEXT NOT NULL,
                    balance REAL NOT NULL DEFAULT 0,
                    games TEXT NOT NULL DEFAULT '[]',
                    games_library TEXT NOT NULL DEFAULT '[]',
                    reviews TEXT NOT NULL DEFAULT '[]'
                )
                """
            )
            conn.commit()

    def _to_domain(self, row: sqlite3.Row) -> User:
        user_id, username, email, password, role = int(row[0]), row[1], row[2], row[3], row[4]

        if role == Role.ADMIN.value:
            return Admin(user_id, username, email, password, role)
        if role == Role.DEVELOPER.value:
            return Developer(user_id, username, email, password, role, games=json.loads(row[6]))
        if role == Role.CUSTOMER.value:
            customer = Customer(
                user_id,
                username,
                email,
                password,
                role,
                balance=float(row[5]),
                games_library=json.loads(row[7]),
                reviews=json.loads(row[8]),
            )
            if self._cart_repository is not None:
                cart = self._cart_repository.get_by_id(user_id)
                if cart is not None:
                    cart.customer = customer
                    customer.shopping_cart = cart
            return customer
        return User(user_id, username, email, password, role)

    def create(self, entity: User) -> None:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(
                f"INSERT INTO {self._table} ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    entity.id,
                    entity.username,
                    entity.email,
                    entity.password,
                    entity.role.value if isinstance(entity.role, Role) else entity.role,
                    getattr(entity, "balance", 0.0),
                    json.dumps(getattr(entity, "games", [])),
                    json.dumps(getattr(entity, "games_library", [])),
                    json.dumps(getattr(entity, "reviews", [])),
                ),
            )
            conn.commit()

    def get_all(self) -> List[User]:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} ORDER BY rowid")
            rows = cur.fetchall()
        return [self._to_domain(row) for row in rows]

    def get_by_id(self, entity_id: int) -> Optional[User]:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(f"SELECT {_COLUMNS} FROM {self._table} WHERE id = ?", (entity_id,))
            row = cur.fetchone()
        if not row:
            return None
        return self._to_domain(row)

    def delete(self, entity_id: int) -> None:
        with closing(self._get_connection()) as conn, conn:
            cur = conn.cursor()
            cur.execute(f"DELETE FROM {self._table} WHERE id = ?", (entity_id,))
            conn.commit()

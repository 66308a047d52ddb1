"""SQLite storage for categories and transactions."""

from __future__ import annotations

import os
import sqlite3
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any

from kakeboor.categories import Category
from kakeboor.transactions import Transaction
from kakeboor.types import _as_utc, _rfc3339

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        category_type TEXT NOT NULL,
        icon TEXT,
        color TEXT,
        created_at TEXT NOT NULL DEFAULT (datetime('now'))
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        amount INTEGER NOT NULL,
        category_id INTEGER NOT NULL,
        description TEXT NOT NULL,
        transaction_date TEXT NOT NULL,
        transaction_type TEXT NOT NULL,
        created_at TEXT NOT NULL DEFAULT (datetime('now')),
        updated_at TEXT NOT NULL DEFAULT (datetime('now')),
        FOREIGN KEY (category_id) REFERENCES categories(id)
    )
    """,
)

_CATEGORY_COLUMNS = "id, name, category_type, icon, color, created_at"
_TRANSACTION_COLUMNS = (
    "id, amount, category_id, description, transaction_date, "
    "transaction_type, created_at, updated_at"
)


class NotFoundError(LookupError):
    """Raised when a record with the requested id does not exist."""

    def __init__(self, kind: str, identifier: int | None) -> None:
        super().__init__(f"{kind} with id {identifier} not found")
        self.kind = kind
        self.identifier = identifier


def _moment(text: str) -> datetime:
    return _as_utc(datetime.fromisoformat(text))


def _category(row: sqlite3.Row) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        category_type=row["category_type"],
        icon=row["icon"],
        color=row["color"],
        created_at=_moment(row["created_at"]),
    )


def _transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        amount=row["amount"],
        category_id=row["category_id"],
        description=row["description"],
        transaction_date=_moment(row["transaction_date"]),
        transaction_type=row["transaction_type"],
        created_at=_moment(row["created_at"]),
        updated_at=_moment(row["updated_at"]),
    )


class Database:
    """A connection to the budget database; usable as a context manager."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def _write(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        with self._lock, self._conn:
            return self._conn.execute(sql, params)

    def _read(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, params).fetchall()

    def create_tables(self) -> None:
        """Create the tables if they do not exist yet."""
        with self._lock, self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    # Categories

    def list_categories(self) -> list[Category]:
        rows = self._read(f"SELECT {_CATEGORY_COLUMNS} FROM categories ORDER BY id")
        return [_category(row) for row in rows]

    def get_category(self, category_id: int) -> Category | None:
        rows = self._read(
            f"SELECT {_CATEGORY_COLUMNS} FROM categories WHERE id = ?", (category_id,)
        )
        return _category(rows[0]) if rows else None

    def create_category(self, category: Category) -> Category:
        """Insert the category and return it with its new id."""
        created_at = _as_utc(category.created_at)
        cursor = self._write(
            "INSERT INTO categories (name, category_type, icon, color, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (
                category.name,
                category.category_type,
                category.icon,
                category.color,
                _rfc3339(created_at),
            ),
        )
        return replace(category, id=cursor.lastrowid, created_at=created_at)

    def update_category(self, category: Category) -> Category:
        """Store the changed fields; raise NotFoundError if the row is gone."""
        if category.id is None:
            raise NotFoundError("Category", None)
        cursor = self._write(
            "UPDATE categories SET name = ?, category_type = ?, icon = ?, color = ? "
            "WHERE id = ?",
            (category.name, category.category_type, category.icon, category.color, category.id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Category", category.id)
        return category

    def delete_category(self, category_id: int) -> None:
        cursor = self._write("DELETE FROM categories WHERE id = ?", (category_id,))
        if cursor.rowcount == 0:
            raise NotFoundError("Category", category_id)

    # Transactions

    def list_transactions(self) -> list[Transaction]:
        rows = self._read(f"SELECT {_TRANSACTION_COLUMNS} FROM transactions ORDER BY id")
        return [_transaction(row) for row in rows]

    def get_transaction(self, transaction_id: int) -> Transaction | None:
        rows = self._read(
            f"SELECT {_TRANSACTION_COLUMNS} FROM transactions WHERE id = ?", (transaction_id,)
        )
        return _transaction(rows[0]) if rows else None

    def create_transaction(self, transaction: Transaction) -> Transaction:
        """Insert the transaction and return it with its new id."""
        stored = replace(
            transaction,
            transaction_date=_as_utc(transaction.transaction_date),
            created_at=_as_utc(transaction.created_at),
            updated_at=_as_utc(transaction.updated_at),
        )
        cursor = self._write(
            "INSERT INTO transactions (amount, category_id, description, transaction_date, "
            "transaction_type, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                stored.amount,
                stored.category_id,
                stored.description,
                _rfc3339(stored.transaction_date),
                stored.transaction_type,
                _rfc3339(stored.created_at),
                _rfc3339(stored.updated_at),
            ),
        )
        return replace(stored, id=cursor.lastrowid)

    def update_transaction(self, transaction: Transaction) -> Transaction:
        """Store the changed fields; raise NotFoundError if the row is gone."""
        if transaction.id is None:
            raise NotFoundError("Transaction", None)
        stored = replace(
            transaction,
            transaction_date=_as_utc(transaction.transaction_date),
            updated_at=_as_utc(transaction.updated_at),
        )
        cursor = self._write(
            "UPDATE transactions SET amount = ?, category_id = ?, description = ?, "
            "transaction_date = ?, transaction_type = ?, updated_at = ? WHERE id = ?",
            (
                stored.amount,
                stored.category_id,
                stored.description,
                _rfc3339(stored.transaction_date),
                stored.transaction_type,
                _rfc3339(stored.updated_at),
                stored.id,
            ),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Transaction", transaction.id)
        return stored

    def delete_transaction(self, transaction_id: int) -> None:
        cursor = self._write("DELETE FROM transactions WHERE id = ?", (transaction_id,))
        if cursor.rowcount == 0:
            raise NotFoundError("Transaction", transaction_id)
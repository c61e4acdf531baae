"""
db.py
SQLite table gateway + initialization (creates DB/tables/triggers, seeds account, prayers, default admin).

Views never write SQL: they go through select/insert/update/delete, addressed by
table name, filter and sort column. The account totals are kept by triggers.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

import models
from config import settings

DB_FILE = Path(settings.DB_FILE)
if not DB_FILE.is_absolute():
    DB_FILE = Path(__file__).with_name(settings.DB_FILE)


class StoreError(Exception):
    """Any failure reported by the data store; `message` is shown to the user verbatim."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@contextmanager
def get_conn():
    try:
        conn = sqlite3.connect(DB_FILE, check_same_thread=False)
    except sqlite3.Error as exc:
        raise StoreError(str(exc)) from exc
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        yield conn
        conn.commit()
    except sqlite3.Error as exc:
        raise StoreError(str(exc)) from exc
    finally:
        conn.close()


def execute(sql: str, params: tuple = ()) -> int:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.lastrowid


def executemany(sql: str, seq_of_params: list[tuple]) -> None:
    with get_conn() as conn:
        conn.executemany(sql, seq_of_params)


def fetch_one(sql: str, params: tuple = ()):
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchone()


def fetch_all(sql: str, params: tuple = ()) -> list[sqlite3.Row]:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchall()


# ---------- Generic table access ----------

def _check(table: str, cols=()) -> list[str]:
    if table not in models.TABLES:
        raise StoreError(f'relation "{table}" does not exist')
    known = models.columns(table)
    for col in cols:
        if col not in known:
            raise StoreError(f'column "{col}" of relation "{table}" does not exist')
    return known


def _where(filters: dict | None) -> tuple[str, list]:
    if not filters:
        return "", []
    clause = " AND ".join(f"{col} = ?" for col in filters)
    return f" WHERE {clause}", list(filters.values())


def select(table: str, order_by: str, descending: bool = False, filters: dict | None = None) -> list[sqlite3.Row]:
    _check(table, [order_by, *(filters or {})])
    where, params = _where(filters)
    direction = "DESC" if descending else "ASC"
    # id breaks ties so rows inserted later come first in descending lists
    sql = f"SELECT * FROM {table}{where} ORDER BY {order_by} {direction}, id {direction}"
    return fetch_all(sql, tuple(params))


def select_one(table: str, filters: dict):
    _check(table, list(filters))
    where, params = _where(filters)
    return fetch_one(f"SELECT * FROM {table}{where} LIMIT 1", tuple(params))


def insert(table: str, values: dict) -> int:
    _check(table, list(values))
    cols = ", ".join(values)
    marks = ", ".join("?" for _ in values)
    return execute(f"INSERT INTO {table}({cols}) VALUES({marks})", tuple(values.values()))


def update(table: str, row_id: int, values: dict) -> None:
    known = _check(table, list(values))
    if not values:
        raise StoreError("No columns to update")
    assignments = [f"{col} = ?" for col in values]
    if "updated_at" in known and "updated_at" not in values:
        assignments.append("updated_at = CURRENT_TIMESTAMP")
    execute(
        f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ?",
        (*values.values(), row_id),
    )


def delete(table: str, row_id: int) -> None:
    _check(table)
    execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))


# ---------- Schema ----------

def _one_of(values) -> str:
    return ", ".join(f"'{v}'" for v in values)


def _create_tables() -> None:
    execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS profiles (
            id INTEGER PRIMARY KEY,
            full_name TEXT NOT NULL,
            phone TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(id) REFERENCES users(id) ON DELETE CASCADE
        )
        """
    )

    execute(
        f"""
        CREATE TABLE IF NOT EXISTS user_roles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL UNIQUE,
            role TEXT NOT NULL CHECK(role IN ({_one_of(models.ROLES)})),
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS accounts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            balance REAL NOT NULL DEFAULT 0,
            total_chanda_collected REAL NOT NULL DEFAULT 0,
            total_expenses REAL NOT NULL DEFAULT 0,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    execute(
        f"""
        CREATE TABLE IF NOT EXISTS expenses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            amount REAL NOT NULL CHECK(amount > 0),
            category TEXT NOT NULL DEFAULT 'general'
                CHECK(category IN ({_one_of(models.EXPENSE_CATEGORIES)})),
            description TEXT,
            expense_date TEXT NOT NULL DEFAULT (date('now', 'localtime')),
            created_by INTEGER,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(created_by) REFERENCES users(id) ON DELETE SET NULL
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS chanda_collections (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            member_name TEXT NOT NULL,
            amount REAL NOT NULL CHECK(amount > 0),
            collection_date TEXT NOT NULL DEFAULT (date('now', 'localtime')),
            collection_type TEXT,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS assets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            item_name TEXT NOT NULL,
            quantity INTEGER DEFAULT 1 CHECK(quantity >= 0),
            condition TEXT,
            category TEXT,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS committee_members (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            role TEXT NOT NULL,
            phone TEXT,
            email TEXT,
            is_leader INTEGER NOT NULL DEFAULT 0,
            is_accountant INTEGER NOT NULL DEFAULT 0,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS namaz_timings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            prayer_name TEXT NOT NULL UNIQUE,
            prayer_time TEXT NOT NULL,
            display_order INTEGER NOT NULL,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
        """
    )

    execute(
        f"""
        CREATE TABLE IF NOT EXISTS notifications (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            message TEXT NOT NULL,
            priority TEXT DEFAULT 'normal' CHECK(priority IN ({_one_of(models.NOTICE_PRIORITIES)})),
            created_by INTEGER,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(created_by) REFERENCES users(id) ON DELETE SET NULL
        )
        """
    )

    # Small settings table (used to force password change on first login)
    execute(
        """
        CREATE TABLE IF NOT EXISTS app_settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )


def _create_account_triggers() -> None:
    # balance = total_chanda_collected - total_expenses, kept by the store itself
    for table, column, sign in (
        ("expenses", "total_expenses", "-"),
        ("chanda_collections", "total_chanda_collected", "+"),
    ):
        undo = "+" if sign == "-" else "-"
        execute(
            f"""
            CREATE TRIGGER IF NOT EXISTS {table}_after_insert AFTER INSERT ON {table}
            BEGIN
                UPDATE accounts
                SET {column} = {column} + NEW.amount,
                    balance = balance {sign} NEW.amount,
                    updated_at = CURRENT_TIMESTAMP;
            END
            """
        )
        execute(
            f"""
            CREATE TRIGGER IF NOT EXISTS {table}_after_delete AFTER DELETE ON {table}
            BEGIN
                UPDATE accounts
                SET {column} = {column} - OLD.amount,
                    balance = balance {undo} OLD.amount,
                    updated_at = CURRENT_TIMESTAMP;
            END
            """
        )


def _get_setting(key: str, default: str | None = None) -> str | None:
    row = fetch_one("SELECT value FROM app_settings WHERE key = ?", (key,))
    if row:
        return str(row["value"])
    return default


def _set_setting(key: str, value: str) -> None:
    execute(
        """
        INSERT INTO app_settings(key, value) VALUES(?, ?)
        ON CONFLICT(key) DO UPDATE SET value=excluded.value
        """,
        (key, value),
    )


def _seed(default_admin_hash: str) -> None:
    if not fetch_one("SELECT id FROM accounts LIMIT 1"):
        execute("INSERT INTO accounts(balance, total_chanda_collected, total_expenses) VALUES(0, 0, 0)")
        logger.info("Seeded account singleton")

    if not fetch_one("SELECT id FROM namaz_timings LIMIT 1"):
        executemany(
            "INSERT INTO namaz_timings(prayer_name, prayer_time, display_order) VALUES(?,?,?)",
            models.DEFAULT_PRAYERS,
        )
        logger.info("Seeded {count} namaz timings", count=len(models.DEFAULT_PRAYERS))

    admin = fetch_one("SELECT user_id FROM user_roles WHERE role = 'admin' LIMIT 1")
    if not admin:
        now = datetime.now(timezone.utc).isoformat(timespec="seconds")
        user_id = execute(
            "INSERT INTO users(username, password_hash, created_at) VALUES(?,?,?)",
            (settings.DEFAULT_ADMIN_USERNAME, default_admin_hash, now),
        )
        execute("INSERT INTO profiles(id, full_name) VALUES(?, ?)", (user_id, "Administrator"))
        execute("INSERT INTO user_roles(user_id, role) VALUES(?, 'admin')", (user_id,))
        _set_setting("force_password_change", "1")
        logger.info("Created default admin {username!r}", username=settings.DEFAULT_ADMIN_USERNAME)
    else:
        # ensure setting exists
        if _get_setting("force_password_change") is None:
            _set_setting("force_password_change", "0")


def init_db(default_admin_hash: str) -> None:
    """
    Initialize the database.
    - Create tables and the account triggers
    - Seed the account row and the prayer timings
    - Insert default admin (admin/admin123) if no admin exists
    - Force password change on first login
    """
    _create_tables()
    _create_account_triggers()
    _seed(default_admin_hash)
    logger.debug("Database ready at {path}", path=DB_FILE)


def is_force_password_change() -> bool:
    val = fetch_one("SELECT value FROM app_settings WHERE key = ?", ("force_password_change",))
    return bool(val and str(val["value"]) == "1")


def clear_force_password_change() -> None:
    _set_setting("force_password_change", "0")

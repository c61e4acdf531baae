"""
models.py
Record kinds (one frozen dataclass per table) and the fixed enumerations.
"""

from __future__ import annotations
from dataclasses import dataclass, fields

EXPENSE_CATEGORIES = ["general", "maintenance", "utilities", "salary", "event", "supplies"]
NOTICE_PRIORITIES = ["low", "normal", "high"]
CHANDA_TYPES = ["weekly", "monthly", "special"]
ROLES = ["admin", "user"]

# Seeded once; prayers can be re-timed but never added or removed
DEFAULT_PRAYERS = [
    ("Fajr", "05:30:00", 1),
    ("Dhuhr", "13:15:00", 2),
    ("Asr", "16:45:00", 3),
    ("Maghrib", "18:30:00", 4),
    ("Isha", "20:00:00", 5),
    ("Jumu'ah", "13:30:00", 6),
]


@dataclass(frozen=True)
class Account:
    id: int
    balance: float
    total_chanda_collected: float
    total_expenses: float
    updated_at: str | None


@dataclass(frozen=True)
class Expense:
    id: int
    title: str
    amount: float
    category: str
    description: str | None
    expense_date: str
    created_by: int | None
    created_at: str | None


@dataclass(frozen=True)
class ChandaCollection:
    id: int
    member_name: str
    amount: float
    collection_date: str
    collection_type: str | None
    notes: str | None
    created_at: str | None


@dataclass(frozen=True)
class Asset:
    id: int
    item_name: str
    quantity: int | None
    condition: str | None
    category: str | None
    notes: str | None
    created_at: str | None
    updated_at: str | None


@dataclass(frozen=True)
class CommitteeMember:
    id: int
    name: str
    role: str
    phone: str | None
    email: str | None
    is_leader: bool
    is_accountant: bool
    created_at: str | None
    updated_at: str | None


@dataclass(frozen=True)
class NamazTiming:
    id: int
    prayer_name: str
    prayer_time: str
    display_order: int
    created_at: str | None
    updated_at: str | None


@dataclass(frozen=True)
class Notification:
    id: int
    title: str
    message: str
    priority: str | None
    created_by: int | None
    created_at: str | None


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password_hash: str
    created_at: str


@dataclass(frozen=True)
class Profile:
    id: int
    full_name: str
    phone: str | None
    created_at: str | None
    updated_at: str | None


@dataclass(frozen=True)
class UserRole:
    id: int
    user_id: int
    role: str  # 'admin' or 'user'
    created_at: str | None


TABLES = {
    "accounts": Account,
    "expenses": Expense,
    "chanda_collections": ChandaCollection,
    "assets": Asset,
    "committee_members": CommitteeMember,
    "namaz_timings": NamazTiming,
    "notifications": Notification,
    "users": User,
    "profiles": Profile,
    "user_roles": UserRole,
}


def columns(table: str) -> list[str]:
    return [f.name for f in fields(TABLES[table])]


def from_row(table: str, row):
    """Build the table's dataclass from a sqlite3.Row (or any mapping)."""
    cls = TABLES[table]
    data = dict(row)
    if cls is CommitteeMember:
        data["is_leader"] = bool(data["is_leader"])
        data["is_accountant"] = bool(data["is_accountant"])
    return cls(**{name: data[name] for name in columns(table)})

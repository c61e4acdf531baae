"""
auth.py
Identity utilities (bcrypt hashing, verify, login, sign-up, change password, role lookup).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import bcrypt
from loguru import logger

import db
from models import ROLES


@dataclass(frozen=True)
class Viewer:
    """Who is looking at the console; passed down explicitly instead of living in globals."""

    user_id: int
    username: str
    full_name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def _to_bcrypt_secret(password: str) -> bytes:
    """
    bcrypt only uses the first 72 BYTES of the password.
    We truncate to 72 bytes to avoid ValueError and to make behavior explicit.
    """
    pw = password.encode("utf-8")
    if len(pw) > 72:
        pw = pw[:72]
    return pw


def hash_password(password: str) -> str:
    """
    Returns a bcrypt hash as a UTF-8 string (stored in SQLite).
    """
    secret = _to_bcrypt_secret(password)
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(secret, salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against stored bcrypt hash.
    """
    secret = _to_bcrypt_secret(password)
    stored = password_hash.encode("utf-8")
    return bcrypt.checkpw(secret, stored)


def get_user_by_username(username: str):
    return db.select_one("users", {"username": username})


def login(username: str, password: str) -> int | None:
    user = get_user_by_username(username)
    if not user or not verify_password(password, user["password_hash"]):
        logger.warning("Failed login for {username!r}", username=username)
        return None
    logger.info("User {username!r} logged in", username=username)
    return user["id"]


def register(username: str, password: str, full_name: str, phone: str | None = None) -> int:
    """
    Create a user with a profile and the plain 'user' role, all in one transaction.
    Admins are only ever seeded; a duplicate username raises db.StoreError.
    """
    now = datetime.now(timezone.utc).isoformat(timespec="seconds")
    password_hash = hash_password(password)
    with db.get_conn() as conn:
        user_id = conn.execute(
            "INSERT INTO users(username, password_hash, created_at) VALUES(?,?,?)",
            (username, password_hash, now),
        ).lastrowid
        conn.execute(
            "INSERT INTO profiles(id, full_name, phone) VALUES(?,?,?)",
            (user_id, full_name, phone or None),
        )
        conn.execute("INSERT INTO user_roles(user_id, role) VALUES(?, 'user')", (user_id,))
    logger.info("Registered user {username!r}", username=username)
    return user_id


def change_password(user_id: int, new_password: str) -> None:
    db.update("users", user_id, {"password_hash": hash_password(new_password)})
    # the forced first-login change belongs to the seeded admin only
    if get_role(user_id) == "admin":
        db.clear_force_password_change()
    logger.info("Password changed for user {user_id}", user_id=user_id)


def get_role(user_id: int) -> str:
    row = db.select_one("user_roles", {"user_id": user_id})
    return row["role"] if row and row["role"] in ROLES else "user"

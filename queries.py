"""
queries.py
Named, cached reads (one per table) and the mutation pipeline shared by every module.

A successful mutation invalidates the named reads it affects; the rerun that follows
refetches them. Nothing is updated optimistically.
"""

from __future__ import annotations

from typing import Callable, Iterable

import streamlit as st
from loguru import logger

import auth
import db
import models

_REGISTRY: dict[str, list] = {}


def query(key: str):
    """Cache a read with st.cache_data and register it under `key` for invalidation."""

    def wrap(fn):
        cached = st.cache_data(show_spinner=False)(fn)
        _REGISTRY.setdefault(key, []).append(cached)
        return cached

    return wrap


def invalidate(*keys: str) -> None:
    for key in keys:
        for cached in _REGISTRY.get(key, []):
            cached.clear()
        logger.debug("Invalidated query {key!r}", key=key)


def invalidate_all() -> None:
    invalidate(*_REGISTRY)


def _rows(table: str, order_by: str, descending: bool = False) -> list:
    return [models.from_row(table, r) for r in db.select(table, order_by, descending=descending)]


@query("account")
def account() -> models.Account | None:
    row = db.select_one("accounts", {})
    return models.from_row("accounts", row) if row else None


@query("profile")
def profile(user_id: int) -> models.Profile | None:
    row = db.select_one("profiles", {"id": user_id})
    return models.from_row("profiles", row) if row else None


@query("role")
def role(user_id: int) -> str:
    return auth.get_role(user_id)


@query("expenses")
def expenses() -> list[models.Expense]:
    return _rows("expenses", "expense_date", descending=True)


@query("chanda")
def chanda() -> list[models.ChandaCollection]:
    return _rows("chanda_collections", "collection_date", descending=True)


@query("assets")
def assets() -> list[models.Asset]:
    return _rows("assets", "item_name")


@query("committee")
def committee() -> list[models.CommitteeMember]:
    return _rows("committee_members", "name")


@query("namaz-timings")
def namaz_timings() -> list[models.NamazTiming]:
    return _rows("namaz_timings", "display_order")


@query("notifications")
def notifications() -> list[models.Notification]:
    return _rows("notifications", "created_at", descending=True)


# ---------- Toasts ----------

def toast(message: str, icon: str = "❌") -> None:
    st.toast(message, icon=icon)


def flash(message: str) -> None:
    # shown by flush_toasts() on the rerun that follows a successful mutation
    st.session_state.setdefault("_toasts", []).append(message)


def flush_toasts() -> None:
    for message in st.session_state.pop("_toasts", []):
        toast(message, icon="✅")


# ---------- Mutations ----------

def mutate(
    action: Callable[[], object],
    *,
    invalidates: Iterable[str] = (),
    success: str | None = None,
    failure: str = "Request failed",
    on_success: Callable[[], None] | None = None,
) -> bool:
    """
    Run one insert/update/delete round trip.

    Returns True on success (queries invalidated, on_success run, success toast queued).
    On a store error or a bad form value, shows "<failure>: <message>" right away and
    returns False without running on_success, so an open dialog keeps its values.
    """
    try:
        action()
    except (db.StoreError, ValueError) as exc:
        logger.warning("{failure}: {exc}", failure=failure, exc=exc)
        toast(f"{failure}: {exc}")
        return False

    keys = tuple(invalidates)
    invalidate(*keys)
    logger.info("Mutation succeeded, refetching {keys}", keys=list(keys))
    if on_success is not None:
        on_success()
    if success:
        flash(success)
    return True

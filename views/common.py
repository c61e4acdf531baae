"""
views/common.py
Pieces every module renders the same way: the header row, guarded list loading,
the row picker + delete button, and the form submit wrapper.
"""

from __future__ import annotations

from typing import Callable

import streamlit as st

import db
import queries
import utils


def header(title: str, caption: str, *, add_label: str | None = None, add_key: str | None = None) -> bool:
    """Title + caption, and (admins only, when add_label is given) an add button. True when clicked."""
    left, right = st.columns([4, 1], vertical_alignment="bottom")
    with left:
        st.subheader(title)
        st.caption(caption)
    if add_label is None:
        return False
    return right.button(add_label, key=add_key, type="primary", width="stretch")


def load(fetch: Callable[[], list], what: str) -> list | None:
    # a failing select only breaks its own tab
    try:
        return fetch()
    except db.StoreError as exc:
        st.error(f"Could not load {what}: {exc.message}")
        return None


def delete_control(
    rows,
    *,
    describe: Callable,
    table: str,
    key: str,
    invalidates: tuple[str, ...],
    success: str,
    failure: str,
) -> None:
    """Select one loaded row and delete it straight away (no confirmation step)."""
    if not rows:
        return
    options = {f"{describe(r)} - ID {r.id}": r.id for r in rows}
    left, right = st.columns([3, 1], vertical_alignment="bottom")
    choice = left.selectbox("Select a row to delete", ["(none)"] + list(options), key=f"{key}_pick")
    if right.button("🗑️ Delete", key=f"{key}_delete", disabled=choice == "(none)", width="stretch"):
        row_id = options[choice]
        if queries.mutate(
            lambda: db.delete(table, row_id),
            invalidates=invalidates,
            success=success,
            failure=failure,
        ):
            st.rerun()


def submit(
    action: Callable[[], object],
    *,
    required: dict,
    form_keys,
    invalidates: tuple[str, ...],
    success: str,
    failure: str,
) -> None:
    """
    Handle a submitted dialog form: required-field check, then one mutation.
    Success clears the form and reruns (closing the dialog); failure keeps both.
    """
    errors = utils.missing_fields(**required)
    for e in errors:
        st.error(e)
    if errors:
        return
    if queries.mutate(
        action,
        invalidates=invalidates,
        success=success,
        failure=failure,
        on_success=lambda: utils.reset_fields(st.session_state, form_keys),
    ):
        st.rerun()

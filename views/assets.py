"""
views/assets.py
Physical assets of the masjid.
"""

from __future__ import annotations

import streamlit as st

import db
import queries
import utils
from views import common

FORM_KEYS = ("asset_name", "asset_quantity", "asset_condition", "asset_category", "asset_notes")


def add_asset_form() -> None:
    st.caption("Add a new item to the inventory")
    with st.form("asset_form"):
        item_name = st.text_input("Item Name", key="asset_name")
        quantity = st.text_input("Quantity", value="1", key="asset_quantity")
        condition = st.text_input("Condition", key="asset_condition", placeholder="Good, Fair, Needs Repair, etc.")
        category = st.text_input("Category (Optional)", key="asset_category")
        notes = st.text_input("Notes (Optional)", key="asset_notes")
        submitted = st.form_submit_button("Add Asset", type="primary", width="stretch")

    if submitted:
        common.submit(
            lambda: db.insert(
                "assets",
                {
                    "item_name": item_name.strip(),
                    "quantity": utils.parse_quantity(quantity),
                    "condition": condition.strip() or None,
                    "category": category.strip() or None,
                    "notes": notes.strip() or None,
                },
            ),
            required={"item_name": item_name, "quantity": quantity},
            form_keys=FORM_KEYS,
            invalidates=("assets",),
            success="Asset added successfully",
            failure="Failed to add asset",
        )


add_asset_dialog = st.dialog("Add Asset")(add_asset_form)


def render(is_admin: bool) -> None:
    if common.header(
        "Assets",
        "Inventory of masjid property",
        add_label="➕ Add Asset" if is_admin else None,
        add_key="asset_add",
    ):
        add_asset_dialog()

    assets = common.load(queries.assets, "assets")
    if assets is None:
        return

    df = utils.rows_to_frame(
        assets,
        {
            "Item Name": lambda a: a.item_name,
            "Quantity": lambda a: a.quantity,
            "Condition": lambda a: a.condition or "-",
            "Category": lambda a: a.category or "-",
        },
    )
    st.dataframe(df, width="stretch", hide_index=True)

    if is_admin:
        common.delete_control(
            assets,
            describe=lambda a: a.item_name,
            table="assets",
            key="asset",
            invalidates=("assets",),
            success="Asset deleted",
            failure="Failed to delete asset",
        )

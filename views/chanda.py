"""
views/chanda.py
Chanda (dues) collections with a running total of the loaded rows.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

import db
import queries
import utils
from config import settings
from models import CHANDA_TYPES
from views import common

FORM_KEYS = ("chanda_member", "chanda_amount", "chanda_date", "chanda_type", "chanda_notes")


def add_chanda_form() -> None:
    st.caption("Add a new chanda contribution")
    with st.form("chanda_form"):
        member_name = st.text_input("Member Name", key="chanda_member")
        amount = st.text_input(f"Amount ({settings.CURRENCY_SYMBOL})", key="chanda_amount")
        collection_date = st.date_input("Date", value=date.today(), key="chanda_date")
        collection_type = st.selectbox(
            "Type (Optional)", ["", *CHANDA_TYPES], key="chanda_type", format_func=lambda t: t.title() or "-"
        )
        notes = st.text_input("Notes (Optional)", key="chanda_notes")
        submitted = st.form_submit_button("Record Chanda", key="chanda_submit", type="primary", width="stretch")

    if submitted:
        common.submit(
            lambda: db.insert(
                "chanda_collections",
                {
                    "member_name": member_name.strip(),
                    "amount": utils.parse_amount(amount),
                    "collection_date": collection_date.isoformat(),
                    "collection_type": collection_type or None,
                    "notes": notes.strip() or None,
                },
            ),
            required={"member_name": member_name, "amount": amount},
            form_keys=FORM_KEYS,
            invalidates=("chanda", "account"),
            success="Chanda recorded successfully",
            failure="Failed to record chanda",
        )


add_chanda_dialog = st.dialog("Record Chanda Collection")(add_chanda_form)


def render(is_admin: bool) -> None:
    if common.header(
        "Chanda Collection",
        "Track weekly and total chanda contributions",
        add_label="➕ Add Chanda" if is_admin else None,
        add_key="chanda_add",
    ):
        add_chanda_dialog()

    collections = common.load(queries.chanda, "chanda collections")
    if collections is None:
        return

    # Sum of what is loaded; the dashboard card reads the account total instead
    st.metric("Total Collected", utils.format_currency(utils.sum_amounts(collections)))

    df = utils.rows_to_frame(
        collections,
        {
            "Member Name": lambda c: c.member_name,
            "Amount": lambda c: utils.format_currency(c.amount),
            "Date": lambda c: utils.format_date(c.collection_date),
            "Type": lambda c: (c.collection_type or "").title(),
        },
    )
    st.dataframe(df, width="stretch", hide_index=True)

    if collections:
        st.download_button(
            "Download chanda.csv",
            data=utils.rows_to_csv_bytes(collections),
            file_name="chanda.csv",
            mime="text/csv",
            key="chanda_csv",
        )

    if is_admin:
        common.delete_control(
            collections,
            describe=lambda c: f"{c.member_name} ({utils.format_currency(c.amount)})",
            table="chanda_collections",
            key="chanda",
            invalidates=("chanda", "account"),
            success="Chanda record deleted",
            failure="Failed to delete chanda record",
        )

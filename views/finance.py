"""
views/finance.py
Expenses: newest first, admin add (dialog) and delete. Both refresh the account totals.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

import db
import queries
import utils
from config import settings
from models import EXPENSE_CATEGORIES
from views import common

FORM_KEYS = ("expense_title", "expense_amount", "expense_category", "expense_date", "expense_description")


def add_expense_form(user_id: int | None) -> None:
    st.caption("Record a new expense for the masjid")
    with st.form("expense_form"):
        title = st.text_input("Title", key="expense_title")
        amount = st.text_input(f"Amount ({settings.CURRENCY_SYMBOL})", key="expense_amount")
        category = st.selectbox(
            "Category", EXPENSE_CATEGORIES, key="expense_category", format_func=str.title
        )
        expense_date = st.date_input("Date", value=date.today(), key="expense_date")
        description = st.text_area("Description", key="expense_description", height=90)
        submitted = st.form_submit_button("Add Expense", key="expense_submit", type="primary", width="stretch")

    if submitted:
        common.submit(
            lambda: db.insert(
                "expenses",
                {
                    "title": title.strip(),
                    "amount": utils.parse_amount(amount),
                    "category": category,
                    "expense_date": expense_date.isoformat(),
                    "description": description.strip() or None,
                    "created_by": user_id,
                },
            ),
            required={"title": title, "amount": amount},
            form_keys=FORM_KEYS,
            invalidates=("expenses", "account"),
            success="Expense added successfully",
            failure="Failed to add expense",
        )


add_expense_dialog = st.dialog("Add New Expense")(add_expense_form)


def render(is_admin: bool, user_id: int | None = None) -> None:
    if common.header(
        "Expenses",
        "Track all masjid expenses",
        add_label="➕ Add Expense" if is_admin else None,
        add_key="expense_add",
    ):
        add_expense_dialog(user_id)

    expenses = common.load(queries.expenses, "expenses")
    if expenses is None:
        return

    df = utils.rows_to_frame(
        expenses,
        {
            "Title": lambda e: e.title,
            "Category": lambda e: e.category.title(),
            "Amount": lambda e: utils.format_currency(e.amount),
            "Date": lambda e: utils.format_date(e.expense_date),
        },
    )
    st.dataframe(df, width="stretch", hide_index=True)

    if expenses:
        st.download_button(
            "Download expenses.csv",
            data=utils.rows_to_csv_bytes(expenses),
            file_name="expenses.csv",
            mime="text/csv",
            key="expense_csv",
        )

    if is_admin:
        common.delete_control(
            expenses,
            describe=lambda e: f"{e.title} ({utils.format_currency(e.amount)})",
            table="expenses",
            key="expense",
            invalidates=("expenses", "account"),
            success="Expense deleted successfully",
            failure="Failed to delete expense",
        )

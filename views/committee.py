"""
views/committee.py
Committee roster. 👑 marks the leader, 🧮 the accountant.
"""

from __future__ import annotations

import streamlit as st

import db
import queries
import utils
from views import common

FORM_KEYS = (
    "committee_name",
    "committee_role",
    "committee_phone",
    "committee_email",
    "committee_leader",
    "committee_accountant",
)


def display_name(member) -> str:
    marks = ("👑" if member.is_leader else "") + ("🧮" if member.is_accountant else "")
    return f"{member.name} {marks}".strip()


def contact(member) -> str:
    return " · ".join(v for v in (member.phone, member.email) if v)


def add_member_form() -> None:
    st.caption("Add a new person to the committee")
    with st.form("committee_form"):
        name = st.text_input("Full Name", key="committee_name")
        role = st.text_input("Role", key="committee_role", placeholder="e.g., President, Secretary, Member")
        phone = st.text_input("Phone", key="committee_phone")
        email = st.text_input("Email", key="committee_email")
        c1, c2 = st.columns(2)
        is_leader = c1.checkbox("Leader", key="committee_leader")
        is_accountant = c2.checkbox("Accountant", key="committee_accountant")
        submitted = st.form_submit_button("Add Member", type="primary", width="stretch")

    if submitted:
        common.submit(
            lambda: db.insert(
                "committee_members",
                {
                    "name": name.strip(),
                    "role": role.strip(),
                    "phone": phone.strip() or None,
                    "email": email.strip() or None,
                    "is_leader": int(is_leader),
                    "is_accountant": int(is_accountant),
                },
            ),
            required={"name": name, "role": role},
            form_keys=FORM_KEYS,
            invalidates=("committee",),
            success="Committee member added",
            failure="Failed to add committee member",
        )


add_member_dialog = st.dialog("Add Committee Member")(add_member_form)


def render(is_admin: bool) -> None:
    if common.header(
        "Committee Members",
        "Manage masjid committee and personnel",
        add_label="➕ Add Member" if is_admin else None,
        add_key="committee_add",
    ):
        add_member_dialog()

    members = common.load(queries.committee, "committee members")
    if members is None:
        return

    df = utils.rows_to_frame(
        members,
        {
            "Name": display_name,
            "Role": lambda m: m.role,
            "Contact": contact,
        },
    )
    st.dataframe(df, width="stretch", hide_index=True)

    if is_admin:
        common.delete_control(
            members,
            describe=lambda m: f"{m.name} ({m.role})",
            table="committee_members",
            key="committee",
            invalidates=("committee",),
            success="Member removed",
            failure="Failed to remove member",
        )

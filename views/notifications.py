"""
views/notifications.py
Notice board, newest first.
"""

from __future__ import annotations

import streamlit as st

import db
import queries
import utils
from models import NOTICE_PRIORITIES
from views import common

FORM_KEYS = ("notice_title", "notice_message", "notice_priority")

PRIORITY_COLORS = {"high": "red", "low": "gray"}


def priority_badge(priority: str | None) -> str:
    priority = priority or "normal"
    color = PRIORITY_COLORS.get(priority, "blue")
    return f":{color}-background[{priority.upper()}]"


def add_notice_form(user_id: int | None) -> None:
    st.caption("Post an announcement for the community")
    with st.form("notice_form"):
        title = st.text_input("Title", key="notice_title")
        message = st.text_area("Message", key="notice_message", height=120)
        priority = st.selectbox(
            "Priority",
            NOTICE_PRIORITIES,
            index=NOTICE_PRIORITIES.index("normal"),
            key="notice_priority",
            format_func=str.title,
        )
        submitted = st.form_submit_button("Post Notice", type="primary", width="stretch")

    if submitted:
        common.submit(
            lambda: db.insert(
                "notifications",
                {
                    "title": title.strip(),
                    "message": message.strip(),
                    "priority": priority,
                    "created_by": user_id,
                },
            ),
            required={"title": title, "message": message},
            form_keys=FORM_KEYS,
            invalidates=("notifications",),
            success="Notification posted",
            failure="Failed to post notification",
        )


add_notice_dialog = st.dialog("New Notice")(add_notice_form)


def render(is_admin: bool, user_id: int | None = None) -> None:
    if common.header(
        "Notifications",
        "Announcements and notices",
        add_label="➕ New Notice" if is_admin else None,
        add_key="notice_add",
    ):
        add_notice_dialog(user_id)

    notices = common.load(queries.notifications, "notifications")
    if notices is None:
        return

    for notice in notices:
        with st.container(border=True):
            left, right = st.columns([5, 1])
            with left:
                st.markdown(f"**🔔 {notice.title}** {priority_badge(notice.priority)}")
                st.write(notice.message)
                st.caption(f"Posted {utils.format_date(notice.created_at)}")
            if is_admin and right.button("🗑️", key=f"notice_delete_{notice.id}", help="Delete notice"):
                if queries.mutate(
                    lambda: db.delete("notifications", notice.id),
                    invalidates=("notifications",),
                    success="Notification deleted",
                    failure="Failed to delete notification",
                ):
                    st.rerun()

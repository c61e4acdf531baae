"""
views/namaz.py
Prayer times, one card per prayer in display order. Admins can re-time a prayer;
prayers are never added or removed here.
"""

from __future__ import annotations

import streamlit as st

import db
import queries
import utils
from views import common


def edit_time_form(timing) -> None:
    st.caption(f"Update the time for {timing.prayer_name}")
    key = f"namaz_time_{timing.id}"
    with st.form(f"namaz_form_{timing.id}"):
        new_time = st.text_input("Time (HH:MM)", value=timing.prayer_time, key=key)
        submitted = st.form_submit_button("Update Time", type="primary", width="stretch")

    if submitted:
        common.submit(
            lambda: db.update("namaz_timings", timing.id, {"prayer_time": utils.validate_time(new_time)}),
            required={"time": new_time},
            form_keys=(key,),
            invalidates=("namaz-timings",),
            success="Prayer time updated",
            failure="Failed to update prayer time",
        )


edit_time_dialog = st.dialog("Edit Prayer Time")(edit_time_form)


def render(is_admin: bool) -> None:
    common.header("Namaz Timings", "View and manage prayer times")

    timings = common.load(queries.namaz_timings, "namaz timings")
    if timings is None:
        return

    cols = st.columns(3)
    for i, timing in enumerate(timings):
        with cols[i % 3].container(border=True):
            st.metric(f"🕌 {timing.prayer_name}", utils.format_time(timing.prayer_time))
            if is_admin and st.button("✏️ Edit", key=f"namaz_edit_{timing.id}"):
                edit_time_dialog(timing)

"""
app.py
Streamlit Masjid Management Console.
Run: streamlit run app.py
"""

from __future__ import annotations

import streamlit as st

import auth
import db
import queries
import utils
from config import configure_logging, settings
from views import assets, chanda, committee, finance, namaz, notifications

st.set_page_config(page_title=f"{settings.ORG_NAME} - Management System", page_icon="🕌", layout="wide")


@st.cache_resource(show_spinner=False)
def init_once() -> bool:
    # Initialize logging + DB + default admin if needed
    configure_logging()
    default_hash = auth.hash_password(settings.DEFAULT_ADMIN_PASSWORD)
    db.init_db(default_hash)
    return True


def require_login():
    if "logged_in" not in st.session_state:
        st.session_state.logged_in = False
    if "user_id" not in st.session_state:
        st.session_state.user_id = None


def logout():
    st.session_state.logged_in = False
    st.session_state.user_id = None
    queries.invalidate("profile", "role")


def login_screen():
    st.title(f"🕌 {settings.ORG_NAME}")
    st.caption("Management System")

    sign_in, sign_up = st.tabs(["Sign in", "Create account"])
    with sign_in:
        col1, col2 = st.columns([1, 1])
        with col1:
            username = st.text_input("Username", key="login_username")
            password = st.text_input("Password", type="password", key="login_password")
            if st.button("Login", type="primary", key="login_submit"):
                user_id = auth.login(username.strip(), password)
                if user_id is not None:
                    st.session_state.logged_in = True
                    st.session_state.user_id = user_id
                    st.rerun()
                else:
                    st.error("Invalid username or password.")

        with col2:
            st.info(
                "First run creates a default admin:\n\n"
                f"- username: **{settings.DEFAULT_ADMIN_USERNAME}**\n"
                "- password: **admin123** (unless configured otherwise)\n\n"
                "You will be forced to change it on first login."
            )

    with sign_up:
        full_name = st.text_input("Full name", key="signup_full_name")
        phone = st.text_input("Phone (optional)", key="signup_phone")
        new_username = st.text_input("Username", key="signup_username")
        p1 = st.text_input("Password", type="password", key="signup_password")
        p2 = st.text_input("Confirm password", type="password", key="signup_confirm")
        if st.button("Create account", type="primary", key="signup_submit"):
            errors = utils.missing_fields(full_name=full_name, username=new_username)
            if len(p1) < 6:
                errors.append("Password must be at least 6 characters.")
            elif p1 != p2:
                errors.append("Passwords do not match.")
            for e in errors:
                st.error(e)
            if not errors:
                try:
                    auth.register(new_username.strip(), p1, full_name.strip(), phone.strip())
                except db.StoreError as exc:
                    st.error(f"Could not create account: {exc.message}")
                else:
                    st.success("Account created. You can sign in now.")


def force_change_password_screen():
    st.title("⚠️ Change Password (Required)")

    st.warning("You must change the default password before using the app.")
    new1 = st.text_input("New password", type="password")
    new2 = st.text_input("Confirm new password", type="password")

    if st.button("Update password", type="primary"):
        if len(new1) < 6:
            st.error("Password must be at least 6 characters.")
            return
        if new1 != new2:
            st.error("Passwords do not match.")
            return
        auth.change_password(st.session_state.user_id, new1)
        st.success("Password updated. You can continue.")
        st.rerun()


def current_viewer() -> auth.Viewer | None:
    user_id = st.session_state.user_id
    user = db.select_one("users", {"id": user_id})
    if not user:
        return None
    profile = queries.profile(user_id)
    return auth.Viewer(
        user_id=user_id,
        username=user["username"],
        full_name=profile.full_name if profile else "User",
        role=queries.role(user_id),
    )


def settings_sidebar(viewer: auth.Viewer):
    st.sidebar.title(f"🕌 {settings.ORG_NAME}")
    st.sidebar.caption(f"Logged in as: {viewer.username}")

    with st.sidebar.expander("Change password"):
        p1 = st.text_input("New password", type="password", key="settings_password")
        p2 = st.text_input("Confirm new password", type="password", key="settings_confirm")
        if st.button("Update password", key="settings_update"):
            if len(p1) < 6:
                st.error("Password must be at least 6 characters.")
            elif p1 != p2:
                st.error("Passwords do not match.")
            else:
                auth.change_password(viewer.user_id, p1)
                st.success("Password updated.")


def summary_cards():
    try:
        account = queries.account()
    except db.StoreError as exc:
        st.error(f"Could not load account summary: {exc.message}")
        return
    c1, c2, c3 = st.columns(3)
    c1.metric("Balance", utils.format_currency(account.balance if account else 0))
    c2.metric("Total Chanda", utils.format_currency(account.total_chanda_collected if account else 0))
    c3.metric("Total Expenses", utils.format_currency(account.total_expenses if account else 0))


def dashboard(viewer: auth.Viewer):
    head, who, out = st.columns([4, 2, 1], vertical_alignment="center")
    with head:
        st.title(f"🕌 {settings.ORG_NAME}")
        st.caption("Management System")
    with who:
        st.markdown(f"**{viewer.full_name}**  \n{viewer.role.capitalize()}")
    if out.button("Logout", key="logout"):
        logout()
        st.rerun()

    summary_cards()
    st.divider()

    is_admin = viewer.is_admin
    tabs = st.tabs(["💰 Finance", "👥 Chanda", "📦 Assets", "🧑‍💼 Committee", "🕐 Namaz", "🔔 Notices"])
    with tabs[0]:
        finance.render(is_admin, viewer.user_id)
    with tabs[1]:
        chanda.render(is_admin)
    with tabs[2]:
        assets.render(is_admin)
    with tabs[3]:
        committee.render(is_admin)
    with tabs[4]:
        namaz.render(is_admin)
    with tabs[5]:
        notifications.render(is_admin, viewer.user_id)


# --------- App entry ---------

def run():
    init_once()
    require_login()
    queries.flush_toasts()

    if not st.session_state.logged_in:
        login_screen()
        return

    viewer = current_viewer()
    if viewer is None:
        logout()
        login_screen()
        return

    # Force password change on first login after DB creation
    if viewer.is_admin and db.is_force_password_change():
        force_change_password_screen()
        return

    settings_sidebar(viewer)
    dashboard(viewer)


if __name__ == "__main__":
    run()

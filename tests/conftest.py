import pytest
import streamlit as st

import auth
import db
import queries

ADMIN_PASSWORD = "admin123"
ADMIN_HASH = auth.hash_password(ADMIN_PASSWORD)


@pytest.fixture(autouse=True)
def store(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_FILE", tmp_path / "masjid.db")
    db.init_db(ADMIN_HASH)
    queries.invalidate_all()
    st.cache_resource.clear()
    yield tmp_path / "masjid.db"
    queries.invalidate_all()


@pytest.fixture
def admin_id():
    return db.select_one("users", {"username": "admin"})["id"]


@pytest.fixture
def toasts(monkeypatch):
    """Collect toasts instead of sending them to a Streamlit session."""
    shown, queued = [], []
    monkeypatch.setattr(queries, "toast", lambda message, icon="❌": shown.append(message))
    monkeypatch.setattr(queries, "flash", queued.append)
    return {"shown": shown, "queued": queued}

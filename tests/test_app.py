from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import auth
import db

APP = str(Path(__file__).resolve().parent.parent / "app.py")

WRITE_KEYS = (
    "expense_add",
    "chanda_add",
    "asset_add",
    "committee_add",
    "notice_add",
    "expense_delete",
    "chanda_delete",
    "asset_delete",
    "committee_delete",
    "notice_delete_",
    "namaz_edit_",
)


@pytest.fixture
def seeded(admin_id):
    db.clear_force_password_change()
    db.insert("expenses", {"title": "Generator fuel", "amount": 50, "category": "utilities"})
    db.insert("chanda_collections", {"member_name": "Yusuf", "amount": 100})
    db.insert("chanda_collections", {"member_name": "Bilal", "amount": 250.50})
    db.insert("assets", {"item_name": "Prayer mats", "quantity": 40, "condition": "Good"})
    db.insert("committee_members", {"name": "Ahmed", "role": "President", "is_leader": 1})
    db.insert("notifications", {"title": "Eid prayer", "message": "Eid prayer at 8 AM", "priority": "high"})
    return admin_id


def _run(user_id):
    at = AppTest.from_file(APP, default_timeout=30)
    at.session_state["logged_in"] = True
    at.session_state["user_id"] = user_id
    return at.run()


def _write_controls(at):
    keys = [b.key or "" for b in at.button]
    return [k for k in keys if k.startswith(WRITE_KEYS)]


def test_login_screen_when_signed_out():
    at = AppTest.from_file(APP, default_timeout=30).run()

    assert not at.exception
    assert at.button(key="login_submit")
    assert _write_controls(at) == []


def test_forced_password_change_for_seeded_admin(admin_id):
    at = _run(admin_id)

    assert not at.exception
    assert any("Change Password" in t.value for t in at.title)


def test_dashboard_summary_and_chanda_total(seeded):
    at = _run(seeded)

    assert not at.exception
    metrics = {m.label: m.value for m in at.metric}
    assert metrics["Balance"] == "₹300.50"
    assert metrics["Total Chanda"] == "₹350.50"
    assert metrics["Total Expenses"] == "₹50.00"
    assert metrics["Total Collected"] == "₹350.50"
    assert metrics["🕌 Fajr"] == "05:30"


def test_admin_sees_write_controls_in_every_module(seeded):
    at = _run(seeded)

    controls = _write_controls(at)
    for prefix in WRITE_KEYS:
        assert any(k.startswith(prefix) for k in controls), prefix


def test_plain_user_sees_no_write_controls(seeded):
    user_id = auth.register("member", "secret1", "Member One")

    at = _run(user_id)

    assert not at.exception
    assert _write_controls(at) == []
    assert [s.key for s in at.selectbox if (s.key or "").endswith("_pick")] == []
    metrics = {m.label: m.value for m in at.metric}
    assert metrics["Total Collected"] == "₹350.50"


def test_admin_delete_removes_expense_and_updates_balance(seeded):
    at = _run(seeded)
    picker = at.selectbox(key="expense_pick")
    label = next(o for o in picker.options if o.startswith("Generator fuel"))

    picker.select(label).run()
    at.button(key="expense_delete").click().run()

    assert not at.exception
    assert db.select("expenses", "expense_date") == []
    metrics = {m.label: m.value for m in at.metric}
    assert metrics["Balance"] == "₹350.50"


def _expense_form_page():
    from views import finance

    finance.add_expense_form(None)
    finance.render(True)


def _chanda_form_page():
    from views import chanda

    chanda.add_chanda_form()
    chanda.render(True)


def test_expense_form_keeps_values_on_failure_and_lists_row_on_success(seeded):
    at = AppTest.from_function(_expense_form_page, default_timeout=30).run()
    at.text_input(key="expense_title").input("Paint")
    at.text_input(key="expense_amount").input("-5")
    at.button(key="expense_submit").click().run()

    assert not at.exception
    assert at.text_input(key="expense_title").value == "Paint"
    assert at.text_input(key="expense_amount").value == "-5"
    assert db.select("expenses", "expense_date", filters={"title": "Paint"}) == []

    at.text_input(key="expense_amount").input("500")
    at.button(key="expense_submit").click().run()

    assert not at.exception
    assert at.text_input(key="expense_title").value == ""
    assert at.text_input(key="expense_amount").value == ""
    assert "Paint" in at.dataframe[0].value["Title"].tolist()


def test_chanda_form_requires_member_name(seeded):
    at = AppTest.from_function(_chanda_form_page, default_timeout=30).run()
    at.text_input(key="chanda_amount").input("75")
    at.button(key="chanda_submit").click().run()

    assert not at.exception
    assert any("Member name is required." in e.value for e in at.error)
    assert at.text_input(key="chanda_amount").value == "75"
    assert len(db.select("chanda_collections", "collection_date")) == 2

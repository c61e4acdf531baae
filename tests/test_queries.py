import pytest

import db
import queries
import utils


def _add_chanda(name, amount):
    return lambda: db.insert("chanda_collections", {"member_name": name, "amount": utils.parse_amount(amount)})


def test_successful_create_shows_up_after_refetch(toasts):
    assert queries.expenses() == []
    cleared = []

    ok = queries.mutate(
        lambda: db.insert("expenses", {"title": "Water tank", "amount": 900, "category": "maintenance"}),
        invalidates=("expenses", "account"),
        success="Expense added successfully",
        failure="Failed to add expense",
        on_success=lambda: cleared.append(True),
    )

    assert ok is True
    assert cleared == [True]
    assert [e.title for e in queries.expenses()] == ["Water tank"]
    assert queries.account().total_expenses == pytest.approx(900)
    assert toasts["queued"] == ["Expense added successfully"]
    assert toasts["shown"] == []


def test_failed_create_keeps_form_and_reports_store_message(toasts):
    cleared = []

    ok = queries.mutate(
        lambda: db.insert("expenses", {"title": "Refund", "amount": -10, "category": "general"}),
        invalidates=("expenses", "account"),
        success="Expense added successfully",
        failure="Failed to add expense",
        on_success=lambda: cleared.append(True),
    )

    assert ok is False
    assert cleared == []
    assert toasts["queued"] == []
    assert len(toasts["shown"]) == 1
    assert toasts["shown"][0].startswith("Failed to add expense: ")
    assert "CHECK constraint failed" in toasts["shown"][0]
    assert queries.expenses() == []


def test_bad_number_is_reported_like_a_store_error(toasts):
    ok = queries.mutate(
        _add_chanda("Yusuf", "ten"),
        invalidates=("chanda", "account"),
        failure="Failed to record chanda",
    )

    assert ok is False
    assert toasts["shown"] == ["Failed to record chanda: Amount must be numeric."]


def test_chanda_total_is_sum_of_loaded_rows(toasts):
    for name, amount in (("Yusuf", "100"), ("Bilal", "250.50")):
        assert queries.mutate(_add_chanda(name, amount), invalidates=("chanda", "account"))

    rows = queries.chanda()
    assert utils.format_currency(utils.sum_amounts(rows)) == "₹350.50"
    assert queries.account().total_chanda_collected == pytest.approx(350.50)
    assert queries.account().balance == pytest.approx(350.50)


def test_delete_removes_row_after_refetch(toasts):
    asset_id = db.insert("assets", {"item_name": "Loudspeaker", "quantity": 2})
    assert [a.item_name for a in queries.assets()] == ["Loudspeaker"]

    assert queries.mutate(
        lambda: db.delete("assets", asset_id),
        invalidates=("assets",),
        success="Asset deleted",
        failure="Failed to delete asset",
    )

    assert queries.assets() == []
    assert toasts["queued"] == ["Asset deleted"]


def test_namaz_update_shows_submitted_time(toasts):
    fajr = next(t for t in queries.namaz_timings() if t.prayer_name == "Fajr")

    assert queries.mutate(
        lambda: db.update("namaz_timings", fajr.id, {"prayer_time": utils.validate_time("06:15:00")}),
        invalidates=("namaz-timings",),
        success="Prayer time updated",
    )

    fajr = next(t for t in queries.namaz_timings() if t.prayer_name == "Fajr")
    assert fajr.prayer_time == "06:15:00"
    assert utils.format_time(fajr.prayer_time) == "06:15"


def test_lists_use_fixed_sort_columns():
    db.insert("committee_members", {"name": "Zakir", "role": "Member"})
    db.insert("committee_members", {"name": "Ahmed", "role": "President", "is_leader": 1})
    db.insert("notifications", {"title": "First", "message": "a", "created_at": "2026-10-01 10:00:00"})
    db.insert("notifications", {"title": "Second", "message": "b", "created_at": "2026-10-02 10:00:00"})

    members = queries.committee()
    assert [m.name for m in members] == ["Ahmed", "Zakir"]
    assert members[0].is_leader is True and members[0].is_accountant is False
    assert [n.title for n in queries.notifications()] == ["Second", "First"]
    assert [t.display_order for t in queries.namaz_timings()] == sorted(t.display_order for t in queries.namaz_timings())


def test_role_and_profile_queries(admin_id):
    assert queries.role(admin_id) == "admin"
    assert queries.profile(admin_id).full_name == "Administrator"
    assert queries.profile(999) is None

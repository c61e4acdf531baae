import pytest

import auth
import db


def test_hash_and_verify():
    h = auth.hash_password("s3cret!")
    assert auth.verify_password("s3cret!", h)
    assert not auth.verify_password("wrong", h)


def test_passwords_are_truncated_to_72_bytes():
    h = auth.hash_password("a" * 80)
    assert auth.verify_password("a" * 72, h)


def test_login_default_admin(admin_id):
    assert auth.login("admin", "admin123") == admin_id
    assert auth.login("admin", "nope") is None
    assert auth.login("ghost", "admin123") is None


def test_register_creates_plain_user():
    user_id = auth.register("imran", "secret1", "Imran Khan", "0300 1234567")

    assert auth.login("imran", "secret1") == user_id
    assert auth.get_role(user_id) == "user"
    profile = db.select_one("profiles", {"id": user_id})
    assert profile["full_name"] == "Imran Khan"
    assert profile["phone"] == "0300 1234567"


def test_register_duplicate_username_fails():
    auth.register("imran", "secret1", "Imran Khan")
    with pytest.raises(db.StoreError):
        auth.register("imran", "secret2", "Someone Else")


def test_change_password_clears_forced_change(admin_id):
    assert db.is_force_password_change()

    auth.change_password(admin_id, "newpass1")

    assert auth.login("admin", "newpass1") == admin_id
    assert auth.login("admin", "admin123") is None
    assert not db.is_force_password_change()


def test_role_defaults_to_user_without_assignment():
    assert auth.get_role(12345) == "user"


def test_viewer_admin_flag():
    assert auth.Viewer(1, "admin", "Administrator", "admin").is_admin
    assert not auth.Viewer(2, "imran", "Imran Khan", "user").is_admin


def test_plain_user_password_change_keeps_admin_forced_change():
    member_id = auth.register("member", "secret1", "Member One")

    auth.change_password(member_id, "another1")

    assert auth.login("member", "another1") == member_id
    assert db.is_force_password_change()


def test_failed_registration_leaves_no_user_row():
    with pytest.raises(db.StoreError):
        auth.register("ghost", "secret1", None)

    assert db.select_one("users", {"username": "ghost"}) is None
    # the username is still free
    user_id = auth.register("ghost", "secret1", "Ghost Writer")
    assert auth.get_role(user_id) == "user"

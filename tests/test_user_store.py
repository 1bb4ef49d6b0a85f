"""Tests for the persisted user list and session pointer"""

import json

from authapp.models.user import User
from authapp.services.user_store import UserStore
from authapp.storage.json_store import JsonFileStore


def _user(name="Ann", email="Ann@Example.com") -> User:
    return User(name=name, email=email, password_hash="$2b$04$notarealhash")


def test_load_users_empty_when_nothing_stored(user_store):
    assert user_store.load_users() == []
    assert user_store.load_current_session() is None


def test_save_and_load_users_preserves_order_and_fields(user_store):
    users = [_user("Ann", "ann@example.com"), _user("Bob", "Bob@Example.com")]
    user_store.save_users(users)

    loaded = user_store.load_users()
    assert loaded == users
    assert loaded[1].email == "Bob@Example.com"
    assert loaded[0].created_at == users[0].created_at


def test_users_stored_under_namespaced_key(data_dir):
    store = UserStore(JsonFileStore(data_dir), namespace="com.example")
    store.save_users([_user()])
    store.save_current_session(_user())
    assert (data_dir / "com.example.users.json").exists()
    assert (data_dir / "com.example.currentUser.json").exists()


def test_malformed_user_list_reads_as_empty(user_store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "com.authapp.users.json").write_text("garbage", encoding="utf-8")
    assert user_store.load_users() == []


def test_user_list_with_invalid_record_reads_as_empty(user_store, data_dir):
    user_store.save_users([_user()])
    path = data_dir / "com.authapp.users.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    data.append({"name": "no email"})
    path.write_text(json.dumps(data), encoding="utf-8")

    assert user_store.load_users() == []


def test_user_list_of_wrong_shape_reads_as_empty(user_store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "com.authapp.users.json").write_text('{"users": []}', encoding="utf-8")
    assert user_store.load_users() == []


def test_session_round_trip_and_clear(user_store):
    user = _user()
    user_store.save_current_session(user)
    assert user_store.load_current_session() == user

    user_store.clear_current_session()
    assert user_store.load_current_session() is None
    user_store.clear_current_session()


def test_malformed_session_reads_as_absent(user_store, data_dir):
    data_dir.mkdir(parents=True)
    (data_dir / "com.authapp.currentUser.json").write_text('["not", "a", "user"]', encoding="utf-8")
    assert user_store.load_current_session() is None


def test_find_by_email_ignores_case(user_store):
    ann = _user()
    user_store.save_users([ann, _user("Bob", "bob@example.com")])
    assert user_store.find_by_email("ann@EXAMPLE.com") == ann
    assert user_store.find_by_email("nobody@example.com") is None

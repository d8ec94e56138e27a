import pytest

from stockapp.db import db
from stockapp.models import UserModel
from stockapp.repositories import UserRepository
from stockapp.services import UserService, InvalidUserKind


@pytest.fixture
def user_service(app):
    return UserService(log_rounds=4)


@pytest.mark.parametrize("username, valid", [
    ("alice", True),
    ("al_ic-e9", True),
    ("bob", False),
    ("", False),
    (None, False),
    ("alice smith", False),
    ("alicé", False),
])
def test_validate_username(username, valid):
    assert UserService.validate_username(username) is valid


@pytest.mark.parametrize("password, valid", [
    ("Sup3rsecret", True),
    ("short", False),
    ("has space in it", False),
    ("a" * 72, True),
    ("a" * 73, False),
])
def test_validate_password(password, valid):
    assert UserService.validate_password(password) is valid


def test_create_user_stores_bcrypt_hash(user_service):
    result = user_service.create_user("alice", "Sup3rsecret")

    assert result.ok
    assert result.error is None
    user = UserRepository().get_by_id(result.user_id)
    assert user.username == "alice"
    assert user.password_hash.startswith("$2")
    assert "Sup3rsecret" not in user.password_hash
    assert user.password_hash.startswith(user.password_salt)
    assert user.date_created is not None


def test_create_user_rejects_taken_username(user_service, user):
    result = user_service.create_user("alice", "An0therpass")

    assert not result.ok
    assert result.error.kind == InvalidUserKind.USERNAME_TAKEN


@pytest.mark.parametrize("username, password, kind", [
    ("bob", "Sup3rsecret", InvalidUserKind.USERNAME_INVALID),
    ("robert", "short", InvalidUserKind.PASSWORD_INVALID),
])
def test_create_user_validation(user_service, username, password, kind):
    result = user_service.create_user(username, password)

    assert not result.ok
    assert result.error.kind == kind
    assert db.session.query(UserModel).count() == 0


def test_verify_password(user_service, user):
    assert user_service.verify_password("alice", "Sup3rsecret")
    assert not user_service.verify_password("alice", "Wrongpass1")
    assert not user_service.verify_password("nobody", "Sup3rsecret")
    assert not user_service.verify_password("alice", None)
    assert not user_service.verify_password("alice", "a" * 100)


def test_update_password_rotates_salt(user_service, user):
    before = user_service.load_by_username("alice")

    assert user_service.update_password("alice", "N3wpassword")

    after = user_service.load_by_username("alice")
    assert after.password_salt != before.password_salt
    assert user_service.verify_password("alice", "N3wpassword")
    assert not user_service.verify_password("alice", "Sup3rsecret")


def test_update_password_rejects_invalid_or_unknown(user_service, user):
    assert not user_service.update_password("alice", "short")
    assert not user_service.update_password("nobody", "N3wpassword")
    assert user_service.verify_password("alice", "Sup3rsecret")


def test_delete_user(user_service, user):
    assert user_service.delete_user("alice")
    assert user_service.load_by_username("alice") is None
    assert not user_service.delete_user("alice")


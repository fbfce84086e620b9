import pytest

from repositories.errors import InvalidRecordError
from security.auth import hash_password, verify_password
from services.user_service import UserService


@pytest.fixture
def users(db):
    return UserService(db, encrypt_passwords=True)


class TestUserService:

    def test_stores_hashed_password(self, users):
        user = users.create({"username": "vet", "password": "pa55"})

        assert user.id is not None
        assert user.password != "pa55"
        assert user.password.startswith("$2")

    def test_authenticate_with_hash(self, users):
        users.create({"username": "vet", "password": "pa55", "is_admin": True})

        user = users.authenticate("vet", "pa55")

        assert user.username == "vet"
        assert user.is_admin is True
        assert user.password is None

    def test_authenticate_rejects_wrong_password(self, users):
        users.create({"username": "vet", "password": "pa55"})

        assert users.authenticate("vet", "wrong") is None
        assert users.authenticate("nobody", "pa55") is None

    def test_plain_text_passwords(self, db):
        users = UserService(db, encrypt_passwords=False)
        users.create({"username": "clerk", "password": "plain"})

        assert users.find({"username": "clerk"})[0].password == "plain"
        assert users.authenticate("clerk", "plain", return_plain=True)["username"] == "clerk"

    def test_blank_password_is_rejected(self, users):
        assert users.create({"username": "vet", "password": "  "}) is None
        with pytest.raises(InvalidRecordError):
            users.create({"username": "vet"}, throw_on_error=True)

    def test_password_update_is_hashed(self, users):
        user = users.create({"username": "vet", "password": "old"})

        assert users.update({"id": user.id, "password": "new"}) is True

        assert users.find({"id": user.id})[0].password.startswith("$2")
        assert users.authenticate("vet", "new").username == "vet"
        assert users.authenticate("vet", "old") is None

    def test_blank_password_update_is_rejected(self, users):
        user = users.create({"username": "vet", "password": "old"})

        assert users.update({"id": user.id, "password": " "}) is False
        with pytest.raises(InvalidRecordError):
            users.update({"id": user.id, "password": None}, throw_on_error=True)
        assert users.authenticate("vet", "old") is not None

    def test_duplicate_username_fails(self, users):
        assert users.create({"username": "vet", "password": "a"}) is not None
        assert users.create({"username": "vet", "password": "b"}) is None


class TestPasswordHelpers:

    def test_verify_hashed(self):
        stored = hash_password("secret", rounds=4)

        assert verify_password("secret", stored, encrypted=True)
        assert not verify_password("other", stored, encrypted=True)

    def test_verify_non_hash_value(self):
        assert verify_password("secret", "secret", encrypted=True) is False
        assert verify_password("secret", "secret", encrypted=False) is True

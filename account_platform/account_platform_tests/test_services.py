"""Tests for AuthService and UserService with stand-in collaborators."""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from account_platform.account_service.config import settings
from account_platform.account_service.errors import DuplicateUsernameError
from account_platform.account_service.models import User
from account_platform.account_service.repository import SqlAlchemyUserRepository
from account_platform.account_service.security import PasswordHasher, TokenIssuer
from account_platform.account_service.services import AuthService, UserService


@pytest.fixture(scope="module")
def hasher():
    return PasswordHasher()


@pytest.fixture
def user_repo():
    return MagicMock()


@pytest.fixture
def token_issuer():
    issuer = MagicMock(spec=TokenIssuer)
    issuer.issue.return_value = "token"
    return issuer


def make_user(hasher, user_id=1, username="test", password="password"):
    return User(id=user_id, username=username, password_hash=hasher.hash(password))


def test_authenticate_with_valid_credentials_returns_response(hasher, user_repo, token_issuer):
    user = make_user(hasher)
    user_repo.get_by_username.return_value = user
    service = AuthService(user_repo, hasher, token_issuer)

    response = service.authenticate("test", "password")

    assert response is not None
    assert response.token == "token"
    assert response.user.id == 1
    assert response.user.username == "test"
    token_issuer.issue.assert_called_once_with(user)


def test_authenticate_unknown_user_returns_none(hasher, user_repo, token_issuer):
    user_repo.get_by_username.return_value = None
    service = AuthService(user_repo, hasher, token_issuer)

    assert service.authenticate("unknown_user", "anything") is None
    token_issuer.issue.assert_not_called()


def test_authenticate_unknown_user_still_spends_hash_work(user_repo, token_issuer):
    stub_hasher = MagicMock(spec=PasswordHasher)
    user_repo.get_by_username.return_value = None
    service = AuthService(user_repo, stub_hasher, token_issuer)

    service.authenticate("unknown_user", "anything")

    stub_hasher.dummy_verify.assert_called_once_with()
    stub_hasher.verify.assert_not_called()


def test_authenticate_wrong_password_returns_none(hasher, user_repo, token_issuer):
    user_repo.get_by_username.return_value = make_user(hasher)
    service = AuthService(user_repo, hasher, token_issuer)

    assert service.authenticate("test", "wrong") is None
    token_issuer.issue.assert_not_called()


def test_authenticate_with_corrupt_stored_hash_returns_none(hasher, user_repo, token_issuer):
    user_repo.get_by_username.return_value = User(id=1, username="test", password_hash="corrupt")
    service = AuthService(user_repo, hasher, token_issuer)

    assert service.authenticate("test", "password") is None


def test_authenticate_token_decodes_to_user_id(hasher, user_repo):
    user_repo.get_by_username.return_value = make_user(hasher, user_id=5)
    issuer = TokenIssuer(settings.JWT_SECRET)
    service = AuthService(user_repo, hasher, issuer)

    response = service.authenticate("test", "password")

    claims = issuer.decode(response.token)
    assert claims["sub"] == "5"
    expected = datetime.now(timezone.utc) + timedelta(days=7)
    assert abs(claims["exp"] - expected.timestamp()) < 10


def test_get_passes_through(hasher, user_repo):
    user = make_user(hasher, user_id=3)
    user_repo.get_by_id.return_value = user
    service = UserService(user_repo, hasher)

    assert service.get(3) is user
    user_repo.get_by_id.assert_called_once_with(3)


def test_get_missing_returns_none(hasher, user_repo):
    user_repo.get_by_id.return_value = None
    assert UserService(user_repo, hasher).get(99) is None


def test_create_hashes_password(hasher, user_repo):
    user_repo.add.side_effect = lambda user: user
    service = UserService(user_repo, hasher)

    user = service.create("alice", "s3cret!")

    assert user.username == "alice"
    assert user.password_hash != "s3cret!"
    assert hasher.verify("s3cret!", user.password_hash)
    user_repo.add.assert_called_once()


def test_create_propagates_duplicate(hasher, user_repo):
    user_repo.add.side_effect = DuplicateUsernameError("alice")
    service = UserService(user_repo, hasher)

    with pytest.raises(DuplicateUsernameError):
        service.create("alice", "s3cret!")


def test_create_same_username_twice_against_store(db, hasher):
    service = UserService(SqlAlchemyUserRepository(db), hasher)

    first = service.create("alice", "one")
    with pytest.raises(DuplicateUsernameError):
        service.create("alice", "two")

    assert first.id is not None
    assert db.query(User).filter(User.username == "alice").count() == 1


def test_alice_scenario(db, hasher):
    repo = SqlAlchemyUserRepository(db)
    users = UserService(repo, hasher)
    auth = AuthService(repo, hasher, TokenIssuer(settings.JWT_SECRET))

    created = users.create("alice", "s3cret!")
    fetched = users.get(created.id)
    assert fetched.id == created.id
    assert fetched.username == "alice"
    assert fetched.password_hash != "s3cret!"

    assert auth.authenticate("alice", "s3cret!") is not None
    assert auth.authenticate("alice", "wrong") is None

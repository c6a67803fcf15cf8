import pytest

from movieapi.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
)
from movieapi.models import User, Watchlist
from movieapi.repositories.user_repository import UserRepository
from movieapi.services.auth_service import AuthService


@pytest.fixture
def auth_service(db_session, token_service, password_hasher):
    return AuthService(
        db=db_session,
        token_service=token_service,
        password_hasher=password_hasher,
    )


class TestRegister:
    """AuthService.register"""

    def test_register_then_authenticate_same_user(self, auth_service, token_service):
        registered = auth_service.register("ana", "a@x.com", "secret1")

        logged_in = auth_service.authenticate("a@x.com", "secret1")

        assert logged_in.user.id == registered.user.id
        assert token_service.verify(logged_in.token).user_id == registered.user.id

    def test_register_returns_public_projection(self, auth_service):
        result = auth_service.register("ana", "a@x.com", "secret1")

        assert result.user.model_dump() == {
            "id": result.user.id,
            "username": "ana",
            "email": "a@x.com",
        }

    def test_password_is_stored_hashed(self, auth_service, db_session, password_hasher):
        auth_service.register("ana", "a@x.com", "secret1")

        stored = UserRepository(db_session).get_credentials_by_email("a@x.com")

        assert stored.password != "secret1"
        assert password_hasher.verify("secret1", stored.password)

    def test_duplicate_email_conflicts(self, auth_service):
        auth_service.register("ana", "a@x.com", "secret1")

        with pytest.raises(ConflictError) as exc:
            auth_service.register("bob", "a@x.com", "secret2")
        assert str(exc.value) == "User already exists with this email or username"

    def test_duplicate_username_conflicts(self, auth_service):
        auth_service.register("ana", "a@x.com", "secret1")

        with pytest.raises(ConflictError):
            auth_service.register("ana", "b@x.com", "secret2")

    @pytest.mark.parametrize(
        "username,email,password",
        [("", "a@x.com", "pw"), ("ana", "", "pw"), ("ana", "a@x.com", "")],
    )
    def test_missing_fields(self, auth_service, username, email, password):
        with pytest.raises(BadRequestError) as exc:
            auth_service.register(username, email, password)
        assert str(exc.value) == "All fields are required"

    def test_new_user_has_no_favorites_or_watchlists(self, auth_service, db_session):
        result = auth_service.register("ana", "a@x.com", "secret1")

        user = db_session.get(User, result.user.id)

        assert user.favorites == []
        assert user.watchlists == []
        assert db_session.query(Watchlist).count() == 0


class TestAuthenticate:
    """AuthService.authenticate"""

    def test_wrong_password_and_unknown_email_are_indistinguishable(self, auth_service):
        auth_service.register("ana", "a@x.com", "secret1")

        with pytest.raises(AuthenticationError) as wrong_pw:
            auth_service.authenticate("a@x.com", "wrong")
        with pytest.raises(AuthenticationError) as unknown:
            auth_service.authenticate("nobody@x.com", "secret1")

        assert type(wrong_pw.value) is type(unknown.value)
        assert wrong_pw.value.detail == unknown.value.detail
        assert str(unknown.value) == "Invalid email or password"

    def test_unknown_email_still_burns_a_hash(self, auth_service, monkeypatch):
        calls = []
        monkeypatch.setattr(
            auth_service.password_hasher, "dummy_verify", lambda: calls.append(1)
        )

        with pytest.raises(AuthenticationError):
            auth_service.authenticate("nobody@x.com", "pw")

        assert calls == [1]

    def test_missing_fields(self, auth_service):
        with pytest.raises(BadRequestError) as exc:
            auth_service.authenticate("", "pw")
        assert str(exc.value) == "Email and password are required"


class TestPasswordHashingHook:
    """Hashing runs on flush only when the password changed."""

    def test_unrelated_update_keeps_hash(self, auth_service, db_session):
        result = auth_service.register("ana", "a@x.com", "secret1")
        repo = UserRepository(db_session)
        before = repo.get_credentials_by_email("a@x.com").password

        repo.update(result.user.id, username="ana2")

        after = repo.get_credentials_by_email("a@x.com")
        assert after.username == "ana2"
        assert after.password == before

    def test_password_change_is_rehashed(self, auth_service, db_session, password_hasher):
        result = auth_service.register("ana", "a@x.com", "secret1")
        repo = UserRepository(db_session)

        repo.update(result.user.id, password="newsecret")

        stored = repo.get_credentials_by_email("a@x.com").password
        assert stored != "newsecret"
        assert password_hasher.verify("newsecret", stored)
        assert auth_service.authenticate("a@x.com", "newsecret").user.id == result.user.id

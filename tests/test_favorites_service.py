import pytest

from movieapi.core.exceptions import BadRequestError, ConflictError
from movieapi.repositories.user_repository import UserRepository
from movieapi.services.favorites_service import FavoritesService


@pytest.fixture
def user_id(db_session):
    user = UserRepository(db_session).create_user("ana", "a@x.com", "secret1")
    return user.id


@pytest.fixture
def favorites_service(db_session):
    return FavoritesService(db_session)


class TestFavoritesService:
    def test_add_then_duplicate_conflicts(self, favorites_service, user_id):
        favorites_service.add_favorite(user_id, 550)

        with pytest.raises(ConflictError) as exc:
            favorites_service.add_favorite(user_id, 550)
        assert str(exc.value) == "Movie already in favorites"

        favorites = favorites_service.list_favorites(user_id)
        assert [f.movie_id for f in favorites] == [550]

    def test_list_keeps_insertion_order(self, favorites_service, user_id):
        for movie_id in (303, 101, 202):
            favorites_service.add_favorite(user_id, movie_id)

        favorites = favorites_service.list_favorites(user_id)

        assert [f.movie_id for f in favorites] == [303, 101, 202]
        assert all(f.added_at is not None for f in favorites)

    def test_session_usable_after_conflict(self, favorites_service, user_id):
        favorites_service.add_favorite(user_id, 1)
        with pytest.raises(ConflictError):
            favorites_service.add_favorite(user_id, 1)

        favorites_service.add_favorite(user_id, 2)

        assert [f.movie_id for f in favorites_service.list_favorites(user_id)] == [1, 2]

    def test_same_movie_for_different_users(self, favorites_service, db_session, user_id):
        other = UserRepository(db_session).create_user("bob", "b@x.com", "secret2")

        favorites_service.add_favorite(user_id, 550)
        favorites_service.add_favorite(other.id, 550)

        assert len(favorites_service.list_favorites(other.id)) == 1

    def test_numeric_string_movie_id_is_accepted(self, favorites_service, user_id):
        favorite = favorites_service.add_favorite(user_id, "550")

        assert favorite.movie_id == 550

    @pytest.mark.parametrize("movie_id", [None, "", 0])
    def test_missing_movie_id(self, favorites_service, user_id, movie_id):
        with pytest.raises(BadRequestError) as exc:
            favorites_service.add_favorite(user_id, movie_id)
        assert str(exc.value) == "Movie ID is required"

    def test_non_numeric_movie_id(self, favorites_service, user_id):
        with pytest.raises(BadRequestError):
            favorites_service.add_favorite(user_id, "abc")

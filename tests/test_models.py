import pytest
from sqlalchemy.exc import IntegrityError

from movieapi.models import User, UserFavorite, Watchlist, WatchlistMovie


@pytest.fixture
def user(db_session):
    user = User(username="ana", email="a@x.com", password="secret1")
    db_session.add(user)
    db_session.commit()
    return user


def test_password_is_hashed_on_insert(user, password_hasher):
    assert user.password != "secret1"
    assert password_hasher.verify("secret1", user.password)


def test_user_rows_carry_timestamps(db_session, user):
    db_session.refresh(user)

    assert user.created_at is not None
    assert user.updated_at is not None


def test_favorite_pair_is_unique(db_session, user):
    db_session.add(UserFavorite(user_id=user.id, movie_id=101))
    db_session.commit()

    db_session.add(UserFavorite(user_id=user.id, movie_id=101))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_watchlist_movies_keep_insertion_order(db_session, user):
    watchlist = Watchlist(user_id=user.id, name="Weekend")
    watchlist.movies.extend(
        [WatchlistMovie(movie_id=3), WatchlistMovie(movie_id=1), WatchlistMovie(movie_id=2)]
    )
    db_session.add(watchlist)
    db_session.commit()
    db_session.expire_all()

    loaded = db_session.get(User, user.id)
    assert [w.name for w in loaded.watchlists] == ["Weekend"]
    assert [m.movie_id for m in loaded.watchlists[0].movies] == [3, 1, 2]
    assert loaded.watchlists[0].created_at is not None


def test_deleting_user_removes_owned_rows(db_session, user):
    user.favorites.append(UserFavorite(movie_id=101))
    user.watchlists.append(Watchlist(name="Later", movies=[WatchlistMovie(movie_id=5)]))
    db_session.commit()

    db_session.delete(user)
    db_session.commit()

    assert db_session.query(UserFavorite).count() == 0
    assert db_session.query(Watchlist).count() == 0
    assert db_session.query(WatchlistMovie).count() == 0

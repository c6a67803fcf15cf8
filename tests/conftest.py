import os
import sys
from pathlib import Path

# Must be set before movieapi.config is imported
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TMDB_API_KEY", "test-key")

# Ensure project root is on path for `movieapi` imports
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from movieapi.core.exceptions import UpstreamUnavailableError
from movieapi.database.session import get_db, init_db
from movieapi.main import app

NOT_FOUND = "The resource you requested could not be found."


def make_movie(movie_id: int, **extra):
    movie = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "overview": f"Overview of {movie_id}",
        "poster_path": f"/poster{movie_id}.jpg",
        "backdrop_path": f"/backdrop{movie_id}.jpg",
        "release_date": "2020-01-01",
        "vote_average": 7.5,
        "vote_count": 100,
        "genre_ids": [28],
        "adult": False,
    }
    movie.update(extra)
    return movie


class FakeCatalog:
    """In-memory stand-in for TMDBClient."""

    def __init__(self, movies=None, missing=()):
        self.movies = {m["id"]: m for m in (movies or [])}
        self.missing = set(missing)
        self.calls = []
        self.fail_all = False

    def _fail(self, status=500, message="Internal error"):
        raise UpstreamUnavailableError(error=message, upstream_status=status)

    async def get_movie(self, movie_id, append_to_response=None):
        self.calls.append(("movie", movie_id, append_to_response))
        if self.fail_all:
            self._fail()
        if movie_id in self.missing or movie_id not in self.movies:
            self._fail(404, NOT_FOUND)
        return self.movies[movie_id]

    async def get_popular(self, page=1):
        self.calls.append(("popular", page))
        if self.fail_all:
            self._fail(401, "Invalid API key: You must be granted a valid key.")
        results = list(self.movies.values())
        return {"page": page, "results": results, "total_pages": 1, "total_results": len(results)}

    async def search_movies(self, query, page=1):
        self.calls.append(("search", query, page))
        if self.fail_all:
            self._fail()
        results = [m for m in self.movies.values() if query.lower() in m["title"].lower()]
        return {"page": page, "results": results, "total_pages": 1, "total_results": len(results)}

    async def get_genres(self):
        self.calls.append(("genres",))
        if self.fail_all:
            self._fail()
        return {"genres": [{"id": 28, "name": "Action"}, {"id": 35, "name": "Comedy"}]}

    async def aclose(self):
        pass


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(
        bind=db_engine, autocommit=False, autoflush=False, expire_on_commit=False
    )


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_catalog():
    return FakeCatalog(movies=[make_movie(101), make_movie(202), make_movie(303)])


@pytest.fixture
def client(db_engine, session_factory, fake_catalog):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    container = app.container  # type: ignore[attr-defined]
    app.dependency_overrides[get_db] = override_get_db
    container.services.tmdb_client.override(providers.Object(fake_catalog))
    container.repositories.engine.override(providers.Object(db_engine))

    yield TestClient(app)

    app.dependency_overrides.clear()
    container.services.tmdb_client.reset_override()
    container.repositories.engine.reset_override()


@pytest.fixture
def token_service():
    return app.container.services.token_service()  # type: ignore[attr-defined]


@pytest.fixture
def password_hasher():
    return app.container.services.password_hasher()  # type: ignore[attr-defined]

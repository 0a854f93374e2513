"""
Pytest fixtures for the catalog tests.

Every test gets a fresh in-memory database inside a pushed app context.
"""
from collections.abc import Generator

import pytest

from library_catalog import create_app
from library_catalog.config import TestingConfig
from library_catalog.extensions import db
from library_catalog.models import Book, Genre
from library_catalog.store import BookStore, EntityStore
from library_catalog.workflow import genre_workflow

# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app() -> Generator:
    """Testing app with tables created."""
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def store(app) -> EntityStore:
    return EntityStore(db.session, Genre)


@pytest.fixture
def books(app) -> BookStore:
    return BookStore(db.session)


@pytest.fixture
def workflow(store):
    return genre_workflow(store)


@pytest.fixture
def fantasy(store) -> Genre:
    """Stored genre named "fantasy"."""
    genre = Genre(name="fantasy")
    store.insert(genre)
    return genre


@pytest.fixture
def fantasy_book(fantasy) -> Book:
    book = Book(title="The Name of the Wind", summary="Kvothe's story.", genres=[fantasy])
    db.session.add(book)
    db.session.commit()
    return book


def genre_names():
    db.session.expire_all()
    return sorted(g.name for g in Genre.query.all())

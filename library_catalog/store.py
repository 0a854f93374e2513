import logging
from functools import wraps

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from .errors import NotFoundError, StoreError
from .models import Book, collation_key

logger = logging.getLogger(__name__)


def _store_call(operation):
    """Turn SQLAlchemy failures into StoreError after rolling the session back."""
    @wraps(operation)
    def wrapped(self, *args, **kwargs):
        try:
            return operation(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("%s.%s failed: %s", self.model.__name__, operation.__name__, e)
            raise StoreError(f"Database error: could not {operation.__name__.replace('_', ' ')}") from e
    return wrapped


class EntityStore:
    """Named-entity collection backed by one mapped model.

    Models are expected to have ``id``, ``name`` and ``name_key`` columns,
    with ``name_key`` kept equal to ``collation_key(name)``.
    """

    def __init__(self, session, model):
        self.session = session
        self.model = model

    @_store_call
    def insert(self, entity):
        self.session.add(entity)
        self.session.commit()
        return entity.id

    @_store_call
    def find_by_id(self, entity_id):
        return self.session.get(self.model, entity_id)

    @_store_call
    def find_by_name(self, name):
        stmt = select(self.model).where(self.model.name_key == collation_key(name)).limit(1)
        return self.session.scalars(stmt).first()

    @_store_call
    def update_by_id(self, entity_id, fields):
        entity = self.session.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} not found", status=404)
        for key, value in fields.items():
            setattr(entity, key, value)
        self.session.commit()

    @_store_call
    def delete_by_id(self, entity_id):
        entity = self.session.get(self.model, entity_id)
        if entity is None:
            return
        self.session.delete(entity)
        self.session.commit()

    @_store_call
    def list_all(self):
        return list(self.session.scalars(select(self.model).order_by(self.model.name)))

    @_store_call
    def count(self):
        return self.session.scalar(select(func.count()).select_from(self.model))


class BookStore:
    """Read-only access to books, the records that reference genres."""

    model = Book

    def __init__(self, session):
        self.session = session

    @_store_call
    def find_by_genre(self, genre_id):
        stmt = (
            select(Book)
            .where(Book.genres.any(id=genre_id))
            .order_by(Book.title)
        )
        return list(self.session.scalars(stmt))

    @_store_call
    def count(self):
        return self.session.scalar(select(func.count()).select_from(Book))

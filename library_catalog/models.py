import unicodedata

from sqlalchemy.orm import validates

from .extensions import db
from .sanitize import GENRE_NAME_MAX_LENGTH, MAX_ESCAPE_WIDTH

# Names are stored escaped, so a name that passes validation can be up to five times longer
GENRE_NAME_STORED_LENGTH = GENRE_NAME_MAX_LENGTH * MAX_ESCAPE_WIDTH


def collation_key(name):
    """Comparison key that ignores case but keeps accents ("Fantasy" == "fantasy", "Café" != "Cafe")."""
    return unicodedata.normalize("NFC", name or "").casefold()


book_genres = db.Table(
    'book_genres',
    db.Column('book_id', db.Integer, db.ForeignKey('books.id'), primary_key=True),
    db.Column('genre_id', db.Integer, db.ForeignKey('genres.id'), primary_key=True),
)


# --- Models ---
class Genre(db.Model):
    __tablename__ = 'genres'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(GENRE_NAME_STORED_LENGTH), nullable=False)
    # Indexed but not unique: duplicate names are rejected by the form workflow
    name_key = db.Column(db.String(GENRE_NAME_STORED_LENGTH), nullable=False, index=True)

    books = db.relationship('Book', secondary=book_genres, back_populates='genres')

    @validates('name')
    def _sync_name_key(self, key, value):
        self.name_key = collation_key(value)
        return value

    @property
    def url(self):
        return f"/catalog/genre/{self.id}"

    def __repr__(self):
        return f"<Genre {self.id} {self.name!r}>"


class Book(db.Model):
    __tablename__ = 'books'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False)
    summary = db.Column(db.Text)

    genres = db.relationship('Genre', secondary=book_genres, back_populates='books')

    @property
    def url(self):
        return f"/catalog/book/{self.id}"

from flask import Blueprint, flash, redirect, render_template, request, url_for

from ..errors import NotFoundError
from ..extensions import db
from ..forms import GenreDeleteForm, GenreForm
from ..models import Genre
from ..store import BookStore, EntityStore
from ..workflow import WorkflowState, genre_workflow

bp = Blueprint("catalog", __name__, url_prefix="/catalog")


def genre_store():
    return EntityStore(db.session, Genre)


def book_store():
    return BookStore(db.session)


def _render_genre_form(title, form, genre=None, errors=None):
    return render_template("genre_form.html", title=title, form=form, genre=genre, errors=errors or [])


@bp.route("/")
def index():
    return render_template(
        "index.html",
        title="Local Library Home",
        genre_count=genre_store().count(),
        book_count=book_store().count(),
    )


# ----- Genres -----
@bp.route("/genres")
def genre_list():
    return render_template("genre_list.html", title="Genre List", genre_list=genre_store().list_all())


@bp.route("/genre/<int:genre_id>")
def genre_detail(genre_id):
    genre = genre_store().find_by_id(genre_id)
    books_in_genre = book_store().find_by_genre(genre_id)
    if genre is None:
        raise NotFoundError("Genre not found")
    return render_template("genre_detail.html", title="Genre Detail", genre=genre, genre_books=books_in_genre)


@bp.route("/genre/create", methods=["GET"])
def genre_create_get():
    return _render_genre_form("Create Genre", GenreForm())


@bp.route("/genre/create", methods=["POST"])
def genre_create_post():
    form = GenreForm()
    result = genre_workflow(genre_store()).create(form.name.data)

    if result.state is WorkflowState.REJECTED:
        form.name.data = result.entity.name
        return _render_genre_form("Create Genre", form, genre=result.entity, errors=result.errors)
    if result.state is WorkflowState.PERSISTED:
        flash("Genre created.", "success")
    return redirect(result.redirect_url)


@bp.route("/genre/<int:genre_id>/update", methods=["GET"])
def genre_update_get(genre_id):
    genre = genre_store().find_by_id(genre_id)
    if genre is None:
        raise NotFoundError("No such genre found!")
    return _render_genre_form("Update Genre", GenreForm(obj=genre), genre=genre)


@bp.route("/genre/<int:genre_id>/update", methods=["POST"])
def genre_update_post(genre_id):
    form = GenreForm()
    result = genre_workflow(genre_store()).update(genre_id, form.name.data)

    if result.state is WorkflowState.REJECTED:
        form.name.data = result.entity.name
        return _render_genre_form("Update Genre", form, genre=result.entity, errors=result.errors)
    if result.state is WorkflowState.PERSISTED:
        flash("Genre updated.", "success")
    return redirect(result.redirect_url)


@bp.route("/genre/<int:genre_id>/delete", methods=["GET"])
def genre_delete_get(genre_id):
    genre = genre_store().find_by_id(genre_id)
    books_in_genre = book_store().find_by_genre(genre_id)
    if genre is None:
        return redirect(url_for("catalog.genre_list"))
    form = GenreDeleteForm(genreid=genre.id)
    return render_template("genre_delete.html", title="Delete Genre", genre=genre,
                           genre_books=books_in_genre, form=form)


@bp.route("/genre/<int:genre_id>/delete", methods=["POST"])
def genre_delete_post(genre_id):
    store = genre_store()
    # The books check must cover the record actually deleted
    target = request.form.get("genreid", type=int) or genre_id
    genre = store.find_by_id(target)
    books_in_genre = book_store().find_by_genre(target)

    if books_in_genre:
        # Books still reference this genre: show them instead of deleting
        form = GenreDeleteForm(genreid=target)
        return render_template("genre_delete.html", title="Delete Genre", genre=genre,
                               genre_books=books_in_genre, form=form)

    store.delete_by_id(target)
    if genre is not None:
        flash("Genre deleted.", "success")
    return redirect(url_for("catalog.genre_list"))

from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for

from models.author import Author
from models.book import Book
from models.genre import Genre
from models.schemas.book import BookFormSchema
from models.schemas.common import validate_form
from utils.decorators import entity_required, get_storage

logger = logging.getLogger(__name__)

bp = Blueprint("books", __name__)

form_schema = BookFormSchema()


def to_book_list():
    return redirect(url_for("books.book_list"))


def render_form(title: str, values: dict, errors: list | None = None, book: Book | None = None):
    """Book form with the author and genre choices it offers."""
    storage = get_storage()
    return render_template(
        "book_form.html",
        title=title,
        book=book,
        authors=storage.find(Author, sort=("family_name", "first_name")),
        genres=storage.find(Genre, sort="name"),
        values=values,
        errors=errors or [],
    )


def book_fields(data: dict) -> dict:
    """Loaded form data -> model attributes, resolving genre ids to Genres."""
    fields = dict(data)
    genre_ids = fields.pop("genre_ids", None) or []
    fields["genres"] = get_storage().get_many(Genre, genre_ids)
    return fields


@bp.get("/")
def index():
    """Catalog home: the book list."""
    return book_list()


@bp.get("/books")
def book_list():
    """List all books."""
    books = get_storage().find(Book)
    return render_template("book_list.html", title="Book List", book_list=books)


@bp.get("/book/create")
def book_create_get():
    """Show an empty book form."""
    return render_form("Create Book", {"genre": []})


@bp.post("/book/create")
def book_create_post():
    """Validate and create a book."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Create Book", result.values, result.errors)

    book = get_storage().save(Book(**book_fields(result.data)))
    logger.info("Created book %s (%s)", book.title, book.id)
    return redirect(url_for("books.book_detail", book_id=book.id))


@bp.get("/book/<book_id>")
@entity_required(Book, "book_id")
def book_detail(book_id: str, entity: Book):
    """Show a book, its genres and its copies."""
    return render_template("book_detail.html", title=entity.title, book=entity)


@bp.get("/book/<book_id>/delete")
@entity_required(Book, "book_id", on_missing=to_book_list)
def book_delete_get(book_id: str, entity: Book):
    """Confirm deletion of a book."""
    # Copies go with the book; list them so the confirmation says so
    return render_template(
        "book_delete.html",
        title="Delete Book",
        book=entity,
        book_instances=list(entity.instances),
    )


@bp.post("/book/<book_id>/delete")
def book_delete_post(book_id: str):
    """Delete a book and its copies."""
    storage = get_storage()
    target_id = request.form.get("bookid", "").strip() or book_id
    if storage.get(Book, target_id) is None:
        return to_book_list()

    # Unguarded; the book's copies are deleted with it
    storage.delete(Book, target_id)
    logger.info("Deleted book %s", target_id)
    return to_book_list()


@bp.get("/book/<book_id>/update")
@entity_required(Book, "book_id")
def book_update_get(book_id: str, entity: Book):
    """Show the book form prefilled."""
    return render_form("Update Book", form_schema.dump(entity), book=entity)


@bp.post("/book/<book_id>/update")
@entity_required(Book, "book_id")
def book_update_post(book_id: str, entity: Book):
    """Validate and update a book in place."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Update Book", result.values, result.errors, book=entity)

    book = get_storage().update(Book, book_id, book_fields(result.data))
    logger.info("Updated book %s", book.id)
    return redirect(url_for("books.book_detail", book_id=book.id))

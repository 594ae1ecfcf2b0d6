from __future__ import annotations

import logging
import unicodedata

from flask import Blueprint, redirect, render_template, request, url_for

from models.genre import Genre
from models.integrity import can_delete, dependent_books
from models.schemas.common import validate_form
from models.schemas.genre import GenreFormSchema
from utils.decorators import entity_required, get_storage

logger = logging.getLogger(__name__)

bp = Blueprint("genres", __name__)

form_schema = GenreFormSchema()

DUPLICATE_NAME = "A genre with this name already exists."


def name_key(name: str) -> str:
    """Comparison key for genre names: NFKC-normalized, then case-folded."""
    return unicodedata.normalize("NFKC", name).casefold()


def existing_genre_named(storage, name: str, exclude_id: str | None = None) -> Genre | None:
    """
    Genre whose name matches case-insensitively, if any.
    Compared in Python on name_key(); SQLite's lower() only folds ASCII and
    knows nothing of canonically equivalent forms.
    """
    key = name_key(name)
    for genre in storage.find(Genre, sort="name"):
        if genre.id != exclude_id and name_key(genre.name) == key:
            return genre
    return None


def to_genre_list():
    return redirect(url_for("genres.genre_list"))


def to_genre_detail(genre: Genre):
    return redirect(url_for("genres.genre_detail", genre_id=genre.id))


def render_form(title: str, values: dict, errors: list | None = None, genre: Genre | None = None):
    return render_template(
        "genre_form.html",
        title=title,
        genre=genre,
        values=values,
        errors=errors or [],
    )


def render_delete(genre: Genre, books: list):
    return render_template(
        "genre_delete.html",
        title="Delete Genre",
        genre=genre,
        genre_books=books,
    )


@bp.get("/genres")
def genre_list():
    """List all genres by name."""
    genres = get_storage().find(Genre, sort="name")
    return render_template("genre_list.html", title="Genre List", genre_list=genres)


@bp.get("/genre/create")
def genre_create_get():
    """Show an empty genre form."""
    return render_form("Create Genre", {})


@bp.post("/genre/create")
def genre_create_post():
    """Create a genre, or redirect to the one already using the name."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Create Genre", result.values, result.errors)

    storage = get_storage()
    existing = existing_genre_named(storage, result.data["name"])
    if existing is not None:
        logger.info("Genre %r already exists as %s", result.data["name"], existing.id)
        return to_genre_detail(existing)

    genre = storage.save(Genre(**result.data))
    logger.info("Created genre %s (%s)", genre.name, genre.id)
    return to_genre_detail(genre)


@bp.get("/genre/<genre_id>")
@entity_required(Genre, "genre_id")
def genre_detail(genre_id: str, entity: Genre):
    """Show a genre and the books in it."""
    books = dependent_books(get_storage(), Genre, genre_id)
    return render_template(
        "genre_detail.html",
        title="Genre Detail",
        genre=entity,
        genre_books=books,
    )


@bp.get("/genre/<genre_id>/delete")
@entity_required(Genre, "genre_id", on_missing=to_genre_list)
def genre_delete_get(genre_id: str, entity: Genre):
    """Confirm deletion of a genre."""
    return render_delete(entity, dependent_books(get_storage(), Genre, genre_id))


@bp.post("/genre/<genre_id>/delete")
def genre_delete_post(genre_id: str):
    """Delete a genre unless books still use it."""
    storage = get_storage()
    target_id = request.form.get("genreid", "").strip() or genre_id
    genre = storage.get(Genre, target_id)
    if genre is None:
        return to_genre_list()

    check = can_delete(storage, Genre, target_id)
    if not check.allowed:
        logger.info("Refused delete of genre %s: %d book(s) depend on it", target_id, len(check.blockers))
        return render_delete(genre, check.blockers)

    storage.delete(Genre, target_id)
    logger.info("Deleted genre %s", target_id)
    return to_genre_list()


@bp.get("/genre/<genre_id>/update")
@entity_required(Genre, "genre_id")
def genre_update_get(genre_id: str, entity: Genre):
    """Show the genre form prefilled."""
    return render_form("Update Genre", form_schema.dump(entity), genre=entity)


@bp.post("/genre/<genre_id>/update")
@entity_required(Genre, "genre_id")
def genre_update_post(genre_id: str, entity: Genre):
    """Validate and rename a genre in place."""
    result = validate_form(form_schema, request.form)
    storage = get_storage()
    errors = list(result.errors)
    if result.ok and existing_genre_named(storage, result.data["name"], exclude_id=genre_id):
        errors.append({"field": "name", "message": DUPLICATE_NAME})
    if errors:
        return render_form("Update Genre", result.values, errors, genre=entity)

    genre = storage.update(Genre, genre_id, result.data)
    logger.info("Updated genre %s", genre.id)
    return to_genre_detail(genre)

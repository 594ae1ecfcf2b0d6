from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for

from models.author import Author
from models.integrity import can_delete, dependent_books
from models.schemas.author import AuthorFormSchema
from models.schemas.common import validate_form
from utils.decorators import entity_required, get_storage

logger = logging.getLogger(__name__)

bp = Blueprint("authors", __name__)

form_schema = AuthorFormSchema()


def to_author_list():
    return redirect(url_for("authors.author_list"))


def render_form(title: str, values: dict, errors: list | None = None, author: Author | None = None):
    return render_template(
        "author_form.html",
        title=title,
        author=author,
        values=values,
        errors=errors or [],
    )


def render_delete(author: Author, books: list):
    return render_template(
        "author_delete.html",
        title="Delete Author",
        author=author,
        author_books=books,
    )


@bp.get("/authors")
def author_list():
    """List all authors, by family name then first name."""
    authors = get_storage().find(Author, sort=("family_name", "first_name"))
    return render_template("author_list.html", title="Author List", author_list=authors)


# create must be registered before the <author_id> routes
@bp.get("/author/create")
def author_create_get():
    """Show an empty author form."""
    return render_form("Create Author", {})


@bp.post("/author/create")
def author_create_post():
    """Validate and create an author."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Create Author", result.values, result.errors)

    author = get_storage().save(Author(**result.data))
    logger.info("Created author %s (%s)", author.name, author.id)
    return redirect(url_for("authors.author_detail", author_id=author.id))


@bp.get("/author/<author_id>")
@entity_required(Author, "author_id")
def author_detail(author_id: str, entity: Author):
    """Show an author and their books."""
    books = dependent_books(get_storage(), Author, author_id)
    return render_template(
        "author_detail.html",
        title="Author Detail",
        author=entity,
        author_books=books,
    )


@bp.get("/author/<author_id>/delete")
@entity_required(Author, "author_id", on_missing=to_author_list)
def author_delete_get(author_id: str, entity: Author):
    """Confirm deletion of an author."""
    return render_delete(entity, dependent_books(get_storage(), Author, author_id))


@bp.post("/author/<author_id>/delete")
def author_delete_post(author_id: str):
    """Delete an author unless books still reference them."""
    storage = get_storage()
    # The form's authorid names the record to delete
    target_id = request.form.get("authorid", "").strip() or author_id
    author = storage.get(Author, target_id)
    if author is None:
        return to_author_list()

    check = can_delete(storage, Author, target_id)
    if not check.allowed:
        logger.info("Refused delete of author %s: %d book(s) depend on it", target_id, len(check.blockers))
        return render_delete(author, check.blockers)

    storage.delete(Author, target_id)
    logger.info("Deleted author %s", target_id)
    return to_author_list()


@bp.get("/author/<author_id>/update")
@entity_required(Author, "author_id")
def author_update_get(author_id: str, entity: Author):
    """Show the author form prefilled."""
    return render_form("Update Author", form_schema.dump(entity), author=entity)


@bp.post("/author/<author_id>/update")
@entity_required(Author, "author_id")
def author_update_post(author_id: str, entity: Author):
    """Validate and update an author in place."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Update Author", result.values, result.errors, author=entity)

    author = get_storage().update(Author, author_id, result.data)
    logger.info("Updated author %s", author.id)
    return redirect(url_for("authors.author_detail", author_id=author.id))

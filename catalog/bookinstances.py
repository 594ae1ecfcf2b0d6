from __future__ import annotations

import logging

from flask import Blueprint, redirect, render_template, request, url_for

from models.book import Book
from models.book_instance import BookInstance, LoanStatus
from models.schemas.book_instance import BookInstanceFormSchema
from models.schemas.common import validate_form
from utils.decorators import entity_required, get_storage

logger = logging.getLogger(__name__)

bp = Blueprint("bookinstances", __name__)

form_schema = BookInstanceFormSchema()


def to_bookinstance_list():
    return redirect(url_for("bookinstances.bookinstance_list"))


def render_form(title: str, values: dict, errors: list | None = None, bookinstance: BookInstance | None = None):
    return render_template(
        "bookinstance_form.html",
        title=title,
        bookinstance=bookinstance,
        book_list=get_storage().find(Book, sort="title"),
        statuses=list(LoanStatus),
        values=values,
        errors=errors or [],
    )


@bp.get("/bookinstances")
def bookinstance_list():
    """List all book copies."""
    instances = get_storage().find(BookInstance)
    return render_template("bookinstance_list.html", title="Book Instance List", bookinstance_list=instances)


@bp.get("/bookinstance/create")
def bookinstance_create_get():
    """Show an empty copy form."""
    # Preselect a book when linked from its detail page
    values = {"status": LoanStatus.MAINTENANCE.value, "book": request.args.get("book", "")}
    return render_form("Create BookInstance", values)


@bp.post("/bookinstance/create")
def bookinstance_create_post():
    """Validate and create a book copy."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Create BookInstance", result.values, result.errors)

    instance = get_storage().save(BookInstance(**result.data))
    logger.info("Created book instance %s of book %s", instance.id, instance.book_id)
    return redirect(url_for("bookinstances.bookinstance_detail", bookinstance_id=instance.id))


@bp.get("/bookinstance/<bookinstance_id>")
@entity_required(BookInstance, "bookinstance_id")
def bookinstance_detail(bookinstance_id: str, entity: BookInstance):
    """Show a book copy."""
    return render_template("bookinstance_detail.html", title="Book Instance", bookinstance=entity)


@bp.get("/bookinstance/<bookinstance_id>/delete")
@entity_required(BookInstance, "bookinstance_id", on_missing=to_bookinstance_list)
def bookinstance_delete_get(bookinstance_id: str, entity: BookInstance):
    """Confirm deletion of a book copy."""
    return render_template("bookinstance_delete.html", title="Delete Book Instance", bookinstance=entity)


@bp.post("/bookinstance/<bookinstance_id>/delete")
def bookinstance_delete_post(bookinstance_id: str):
    """Delete a book copy."""
    target_id = request.form.get("bookinstanceid", "").strip() or bookinstance_id
    if get_storage().delete(BookInstance, target_id):
        logger.info("Deleted book instance %s", target_id)
    return to_bookinstance_list()


@bp.get("/bookinstance/<bookinstance_id>/update")
@entity_required(BookInstance, "bookinstance_id")
def bookinstance_update_get(bookinstance_id: str, entity: BookInstance):
    """Show the copy form prefilled."""
    return render_form("Update BookInstance", form_schema.dump(entity), bookinstance=entity)


@bp.post("/bookinstance/<bookinstance_id>/update")
@entity_required(BookInstance, "bookinstance_id")
def bookinstance_update_post(bookinstance_id: str, entity: BookInstance):
    """Validate and update a book copy in place."""
    result = validate_form(form_schema, request.form)
    if not result.ok:
        return render_form("Update BookInstance", result.values, result.errors, bookinstance=entity)

    instance = get_storage().update(BookInstance, bookinstance_id, result.data)
    logger.info("Updated book instance %s", instance.id)
    return redirect(url_for("bookinstances.bookinstance_detail", bookinstance_id=instance.id))

"""
Referential integrity checks for deletes.

An Author or Genre may be deleted only while no Book points at it. Views call
can_delete() on the POST that performs the delete; a result computed for the
confirmation page is never reused.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from models.book import Book
from models.db_storage import resolve_class

# Entity type -> Book filter selecting the books that depend on it
DEPENDENT_BOOK_FILTERS = {
    "Author": "author",
    "Genre": "genres",
}


@dataclass(frozen=True)
class DeleteCheck:
    allowed: bool
    blockers: list = field(default_factory=list)


def dependent_books(storage, entity_type, entity_id: str) -> list:
    """Books referencing the entity, sorted by title. Empty for unguarded types."""
    cls = resolve_class(entity_type)
    key = DEPENDENT_BOOK_FILTERS.get(cls.__name__)
    if key is None or not entity_id:
        return []
    return storage.find(Book, sort="title", **{key: entity_id})


def can_delete(storage, entity_type, entity_id: str) -> DeleteCheck:
    blockers = dependent_books(storage, entity_type, entity_id)
    return DeleteCheck(allowed=not blockers, blockers=blockers)

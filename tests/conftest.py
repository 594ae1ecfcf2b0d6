import pytest

from catalog import create_app
from models import Author, Book, BookInstance, Genre, LoanStatus


@pytest.fixture
def app():
    """App on a fresh in-memory database."""
    app = create_app("testing")
    yield app
    app.extensions["storage"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(app):
    return app.extensions["storage"]


@pytest.fixture
def make_author(storage):
    def _make(first_name="Jane", family_name="Austen", **kwargs):
        return storage.save(Author(first_name=first_name, family_name=family_name, **kwargs))
    return _make


@pytest.fixture
def make_genre(storage):
    def _make(name="Fiction"):
        return storage.save(Genre(name=name))
    return _make


@pytest.fixture
def make_book(storage, make_author):
    def _make(title="Emma", author=None, genres=(), summary="A matchmaker.", isbn="9780141439587"):
        author = author or make_author()
        book = Book(title=title, author_id=author.id, summary=summary, isbn=isbn, genres=list(genres))
        return storage.save(book)
    return _make


@pytest.fixture
def make_instance(storage, make_book):
    def _make(book=None, imprint="Penguin, 2003", status=LoanStatus.AVAILABLE, due_back=None):
        book = book or make_book()
        return storage.save(BookInstance(book_id=book.id, imprint=imprint, status=status, due_back=due_back))
    return _make


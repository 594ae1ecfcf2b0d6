"""
Catalog models and the DBStorage persistence gateway.

There is no module-level storage instance: the application builds one
DBStorage per process (see catalog.create_app) and hands it to whoever needs it.
"""
from models.author import Author
from models.book import Book
from models.book_instance import BookInstance, LoanStatus
from models.db_storage import DBStorage, classes
from models.genre import Genre

__all__ = ["Author", "Book", "BookInstance", "DBStorage", "Genre", "LoanStatus", "classes"]

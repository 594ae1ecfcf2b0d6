from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import RelationshipProperty, load_only, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from models.author import Author
from models.base_model import Base
from models.book import Book
from models.book_instance import BookInstance
from models.genre import Genre

logger = logging.getLogger(__name__)

# Map model names for easy querying
classes = {
    "Author": Author,
    "Book": Book,
    "Genre": Genre,
    "BookInstance": BookInstance,
}


def resolve_class(entity_type):
    """Accept a model class or its name and return the model class."""
    if isinstance(entity_type, str):
        try:
            return classes[entity_type]
        except KeyError:
            raise ValueError(f"Unknown entity type: {entity_type}") from None
    if entity_type not in classes.values():
        raise ValueError(f"Unknown entity type: {entity_type!r}")
    return entity_type


class DBStorage:
    """
    Persistence gateway over the four catalog collections.

    One instance is created per application with the database URL it should
    talk to. reload() opens it, close() ends the current session (per request)
    and dispose() releases the engine at shutdown.
    """

    __engine = None
    __session = None

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize engine for the given URL"""
        url = make_url(database_url)
        engine_kwargs = {"echo": echo}

        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                # One shared connection so every session sees the same in-memory DB
                engine_kwargs["poolclass"] = StaticPool
                engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.__engine = create_engine(url, **engine_kwargs)

        if self.__engine.url.get_backend_name() == "sqlite":
            # Enable SQLite foreign keys (needed for ON DELETE RESTRICT/CASCADE)
            @event.listens_for(self.__engine, "connect")
            def _set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

    def reload(self):
        """Create tables and start session"""
        Base.metadata.create_all(self.__engine)
        session_factory = sessionmaker(bind=self.__engine, expire_on_commit=False)
        self.__session = scoped_session(session_factory)
        logger.debug("Storage opened on %s", self.__engine.url.render_as_string(hide_password=True))

    def find(self, cls, sort=None, projection: Iterable[str] | None = None, **filters) -> list:
        """
        Query objects of one type.

        filters: attribute=value pairs. A column matches by equality, a
        collection relationship matches when it contains the id, and a scalar
        relationship matches when it points at the id.
        sort: attribute name or sequence of names, '-' prefix for descending.
        projection: column names to load; others load lazily on access.
        """
        cls = resolve_class(cls)
        query = self.__session.query(cls)

        for key, value in filters.items():
            attr = getattr(cls, key)
            prop = attr.property
            if isinstance(prop, RelationshipProperty):
                query = query.filter(attr.any(id=value) if prop.uselist else attr.has(id=value))
            else:
                query = query.filter(attr == value)

        if projection:
            query = query.options(load_only(*(getattr(cls, name) for name in projection)))

        if sort:
            keys = [sort] if isinstance(sort, str) else list(sort)
            order_by = []
            for key in keys:
                desc = key.startswith("-")
                col = getattr(cls, key[1:] if desc else key)
                order_by.append(col.desc() if desc else col.asc())
            query = query.order_by(*order_by)

        return query.all()

    def new(self, obj):
        """Add object to session"""
        self.__session.add(obj)

    def save(self, obj=None):
        """Add obj (if given) and commit session; returns obj"""
        if obj is not None:
            self.new(obj)
        try:
            self.__session.commit()
        except SQLAlchemyError:
            self.__session.rollback()
            raise
        return obj

    def get(self, cls, id):
        """Fetch one object by class and ID, None when absent"""
        cls = resolve_class(cls)
        if not id:
            return None
        return self.__session.get(cls, id)

    def get_many(self, cls, ids: Iterable[str]) -> list:
        """Fetch the objects whose ids are in ids; unknown ids are skipped"""
        cls = resolve_class(cls)
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        found = {obj.id: obj for obj in self.__session.query(cls).filter(cls.id.in_(ids)).all()}
        return [found[i] for i in ids if i in found]

    def update(self, cls, id, fields: dict):
        """Replace the given fields in place. The id is never reassigned."""
        obj = self.get(cls, id)
        if obj is None:
            return None
        for key, value in fields.items():
            if key == "id":
                continue
            setattr(obj, key, value)
        return self.save(obj)

    def delete(self, cls, id) -> bool:
        """Hard delete by id; False when nothing matched"""
        obj = self.get(cls, id)
        if obj is None:
            return False
        self.__session.delete(obj)
        self.save()
        return True

    def count(self, cls=None, **filters):
        """Count objects"""
        if cls:
            if filters:
                return len(self.find(cls, **filters))
            return self.__session.query(resolve_class(cls)).count()
        total = 0
        for model in classes.values():
            total += self.__session.query(model).count()
        return total

    def ping(self) -> bool:
        """Round-trip a trivial statement to the database"""
        try:
            with self.__engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database ping failed")
            return False
        return True

    def close(self):
        """Remove session (for request teardown)"""
        if self.__session is not None:
            self.__session.remove()

    def dispose(self):
        """Close the session registry and release pooled connections"""
        self.close()
        self.__engine.dispose()


from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    Table,
    Text,
    Index,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

# Association table (UUID String(36) FKs); genre side RESTRICTs so a genre
# with books can't vanish underneath them
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", String(36), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", String(36), ForeignKey("genres.id", ondelete="RESTRICT"), primary_key=True),
)


class Book(BaseModel, Base):
    __tablename__ = "books"
    URL_SEGMENT = "book"

    title = Column(String(255), nullable=False)
    summary = Column(Text, nullable=False)
    isbn = Column(String(32), nullable=False)

    # Author: RESTRICT deletion while books reference it
    author_id = Column(String(36), ForeignKey("authors.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Relationships
    author = relationship("Author", back_populates="books")
    genres = relationship("Genre", secondary=book_genres, back_populates="books", order_by="Genre.name")
    instances = relationship("BookInstance", back_populates="book", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_books_title", "title"),
    )

    @property
    def genre_ids(self) -> list[str]:
        return [g.id for g in self.genres]

    def __repr__(self):
        return f"<Book id={self.id} title='{self.title}'>"

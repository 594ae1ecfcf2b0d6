from sqlalchemy.orm import relationship
from sqlalchemy import Column, String, Index

from models.base_model import BaseModel, Base
from models.book import book_genres


class Genre(BaseModel, Base):
    __tablename__ = "genres"
    URL_SEGMENT = "genre"

    # Uniqueness is case-insensitive and enforced by the genre views
    name = Column(String(100), nullable=False)

    books = relationship("Book", secondary=book_genres, back_populates="genres")

    __table_args__ = (
        Index("ix_genres_name", "name"),
    )

    def __repr__(self):
        return f"<Genre id={self.id} name='{self.name}'>"

from sqlalchemy import Column, String, Date, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, format_date_med

NO_LIFESPAN = "No information"


class Author(BaseModel, Base):
    __tablename__ = "authors"
    URL_SEGMENT = "author"

    first_name = Column(String(100), nullable=False)  # alphanumeric, validated in schema
    family_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    date_of_death = Column(Date, nullable=True)

    # No cascade: books keep the author alive (see models.integrity)
    books = relationship("Book", back_populates="author")

    __table_args__ = (
        Index("ix_authors_family_name", "family_name"),
    )

    @property
    def name(self) -> str:
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        """Whole calendar years between birth and death, year parts only."""
        if self.date_of_birth is None or self.date_of_death is None:
            return NO_LIFESPAN
        return str(self.date_of_death.year - self.date_of_birth.year)

    @property
    def date_of_birth_formatted(self) -> str:
        return format_date_med(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_date_med(self.date_of_death)

    def __repr__(self):
        return f"<Author id={self.id} name='{self.name}'>"

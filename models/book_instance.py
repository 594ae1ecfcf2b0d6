from enum import Enum

from sqlalchemy import Column, String, ForeignKey, Date
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base, format_date_med


class LoanStatus(str, Enum):
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(BaseModel, Base):
    __tablename__ = "book_instances"
    URL_SEGMENT = "bookinstance"

    book_id = Column(String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True)
    imprint = Column(String(255), nullable=False)
    status = Column(
        SAEnum(
            LoanStatus,
            name="loan_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=LoanStatus.MAINTENANCE,
    )
    due_back = Column(Date, nullable=True)

    book = relationship("Book", back_populates="instances")

    @property
    def due_back_formatted(self) -> str:
        return format_date_med(self.due_back)

    def __repr__(self):
        return f"<BookInstance id={self.id} book_id={self.book_id} status={self.status}>"

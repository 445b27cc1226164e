"""
BookInstance Model

A specific physical copy of a book that someone might borrow.

book_id is not checked on write under SQLite, so a copy may outlive its book
and bookinstance.book then loads as None. PostgreSQL enforces the ForeignKey
and rejects such a write with IntegrityError (a 500 page).
"""

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.utils.formatting import format_date_iso, format_date_medium

if TYPE_CHECKING:
    from catalog.models.book import Book


class BookInstanceStatus(str, Enum):
    """
    Circulation status of a copy.

    - MAINTENANCE: Being repaired or processed (the default for new copies)
    - AVAILABLE: On the shelf
    - LOANED: Borrowed, due back on due_back
    - RESERVED: Held for a patron
    """
    MAINTENANCE = "Maintenance"
    AVAILABLE = "Available"
    LOANED = "Loaned"
    RESERVED = "Reserved"


class BookInstance(Base):
    """
    BookInstance model representing one copy of a book.

    Table: book_instances

    Fields:
    - book_id: The book this is a copy of (required)
    - imprint: Publisher and edition details (required)
    - status: One of BookInstanceStatus values
    - due_back: Date the copy is expected back, if any
    """

    __tablename__ = "book_instances"

    id: Mapped[int] = mapped_column(primary_key=True)

    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id"),
        index=True,
        nullable=False,
    )

    imprint: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Publisher, edition and year"
    )

    # Stored as the enum value so the column reads naturally in SQL
    status: Mapped[str] = mapped_column(
        String(20),
        default=BookInstanceStatus.MAINTENANCE.value,
        index=True,
        nullable=False,
        comment="Maintenance, Available, Loaned or Reserved"
    )

    due_back: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    book: Mapped[Optional["Book"]] = relationship(
        "Book",
        back_populates="instances",
    )

    @property
    def due_back_formatted(self) -> str:
        return format_date_medium(self.due_back)

    @property
    def due_back_iso(self) -> str:
        return format_date_iso(self.due_back)

    @classmethod
    def url_for(cls, bookinstance_id: int) -> str:
        return f"/catalog/bookinstance/{bookinstance_id}"

    @property
    def url(self) -> str:
        return self.url_for(self.id)

    def __repr__(self) -> str:
        return f"BookInstance(id={self.id}, book_id={self.book_id}, status='{self.status}')"

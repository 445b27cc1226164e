"""
Genre Model

Represents a book genre/category in the catalog.

A book can belong to several genres (e.g., "Fantasy" and "Science Fiction").
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.book import Book


class Genre(Base):
    """
    Genre model representing book categories.

    Table: genres

    Relationships:
    - books: Many-to-Many relationship through book_genres table

    The 3-100 character rule for names lives in the genre form.
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name (e.g., 'Fantasy', 'Poetry')"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        secondary="book_genres",
        back_populates="genres",
    )

    @classmethod
    def url_for(cls, genre_id: int) -> str:
        return f"/catalog/genre/{genre_id}"

    @property
    def url(self) -> str:
        return self.url_for(self.id)

    def __repr__(self) -> str:
        return f"Genre(id={self.id}, name='{self.name}')"

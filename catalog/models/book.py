"""
Book Model

The central model of the catalog.

This file also contains the association table for the Book <-> Genre
many-to-many relationship.

References are not checked when a book is written: a book may point at an
author id that no longer exists, in which case book.author loads as None and
the pages show the book without an author.

This holds on SQLite, which leaves foreign keys unenforced unless
PRAGMA foreign_keys is set (catalog.database never sets it). PostgreSQL
enforces the author_id ForeignKey: writing a book for a missing author raises
IntegrityError there and the workflow renders the 500 error page.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.author import Author
    from catalog.models.bookinstance import BookInstance
    from catalog.models.genre import Genre


# =============================================================================
# Association Table
# =============================================================================
book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table linking books to their genres",
)


class Book(Base):
    """
    Book model representing a title held by the library.

    Table: books

    Fields:
    - title: Book title (required)
    - author_id: The book's author (required)
    - summary: Short description of the book
    - isbn: International Standard Book Number

    Relationships:
    - author: Many-to-One
    - genres: Many-to-Many through book_genres
    - instances: One-to-Many, the physical copies of this book

    Example:
        book = Book(
            title="The Name of the Wind",
            author_id=1,
            summary="I have stolen princesses back from sleeping barrow kings...",
            isbn="9781473211896",
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
    )

    summary: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book summary"
    )

    isbn: Mapped[str] = mapped_column(
        String(40),
        nullable=False,
        comment="International Standard Book Number"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped[Optional["Author"]] = relationship(
        "Author",
        back_populates="books",
    )

    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary=book_genres,
        back_populates="books",
    )

    # No cascade: a book with copies cannot be deleted (see services/books.py)
    instances: Mapped[list["BookInstance"]] = relationship(
        "BookInstance",
        back_populates="book",
    )

    @classmethod
    def url_for(cls, book_id: int) -> str:
        return f"/catalog/book/{book_id}"

    @property
    def url(self) -> str:
        return self.url_for(self.id)

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"

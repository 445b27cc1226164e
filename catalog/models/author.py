"""
Author Model

Represents an author in the library catalog.

Derived values (name, lifespan, url, ...) are plain Python properties:
they are computed on every read and never stored.
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.utils.formatting import format_date_iso, format_date_medium

if TYPE_CHECKING:
    from catalog.models.book import Book


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Relationships:
    - books: One-to-Many (an author can write many books)

    Example:
        author = Author(
            first_name="George",
            family_name="Orwell",
            date_of_birth=date(1903, 6, 25),
            date_of_death=date(1950, 1, 21),
        )
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Length limits are enforced by the author form, not by the database
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's first name"
    )
    family_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's family name"
    )

    date_of_birth: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )
    date_of_death: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    # -------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------
    @property
    def name(self) -> str:
        """Display name: "family, first"."""
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        """
        Difference between the years of death and birth.

        Calendar years only: an author born in December 1900 and who died
        in January 1950 has a lifespan of "50". Either date missing gives
        "unknown".
        """
        if self.date_of_birth is None or self.date_of_death is None:
            return "unknown"
        return str(self.date_of_death.year - self.date_of_birth.year)

    @property
    def lifespan_formatted(self) -> str:
        """Birth and death dates for display, e.g. "Jun 25, 1903 - Jan 21, 1950"."""
        birth = format_date_medium(self.date_of_birth, "unknown")
        death = format_date_medium(self.date_of_death, "present/unknown")
        return f"{birth} - {death}"

    @property
    def date_of_birth_iso(self) -> str:
        return format_date_iso(self.date_of_birth)

    @property
    def date_of_death_iso(self) -> str:
        return format_date_iso(self.date_of_death)

    @classmethod
    def url_for(cls, author_id: int) -> str:
        return f"/catalog/author/{author_id}"

    @property
    def url(self) -> str:
        return self.url_for(self.id)

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"

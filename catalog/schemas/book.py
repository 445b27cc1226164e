"""
Book Form

Schema for the book create/update form.

The genre field is a checkbox group: it may be missing (nothing ticked),
sent once, or sent several times. It is always normalized to a list of
genre ids before validation.
"""

from typing import Any, ClassVar

from pydantic import Field

from catalog.models import Book
from catalog.schemas.forms import FormModel, RecordRef, Rule


class BookForm(FormModel):
    """
    Book details with its author and genres given as ids.

    Example (valid):
        {"title": "The Wise Man's Fear", "author": "1",
         "summary": "Picking up the tale of Kvothe...",
         "isbn": "9788401352836", "genre": ["1", "3"]}
    """

    form_rules: ClassVar[dict[str, Rule]] = {
        "title": Rule("Title must not be empty."),
        "author": Rule("Author must not be empty."),
        "summary": Rule("Summary must not be empty."),
        "isbn": Rule("ISBN must not be empty."),
        "genre": Rule("Invalid genre selection.", many=True),
    }

    title: str = Field(min_length=1, max_length=500)
    author: RecordRef
    summary: str = Field(min_length=1)
    isbn: str = Field(min_length=1, max_length=40)
    genre: list[RecordRef] = Field(default_factory=list)

    def to_values(self) -> dict[str, Any]:
        """Map form fields onto Book columns and relationships."""
        return {
            "title": self.title,
            "author_id": self.author,
            "summary": self.summary,
            "isbn": self.isbn,
            "genres": list(self.genre),
        }

    @classmethod
    def values_from(cls, book: Book) -> dict[str, Any]:
        return {
            "title": book.title,
            "author": str(book.author_id),
            "summary": book.summary,
            "isbn": book.isbn,
            "genre": [str(genre.id) for genre in book.genres],
        }

"""
BookInstance Form

Schema for the book copy create/update form.
"""

from typing import Any, ClassVar

from pydantic import Field, field_validator

from catalog.models import BookInstance, BookInstanceStatus
from catalog.schemas.forms import FormModel, OptionalDate, RecordRef, Rule


class BookInstanceForm(FormModel):
    """
    Copy details.

    status defaults to Maintenance when not submitted; due_back may be left
    empty.
    """

    form_rules: ClassVar[dict[str, Rule]] = {
        "book": Rule("Book must be specified."),
        "imprint": Rule("Imprint must be specified."),
        "status": Rule("Status must be Maintenance, Available, Loaned or Reserved."),
        "due_back": Rule("Invalid date", escape=False),
    }

    book: RecordRef
    imprint: str = Field(min_length=1, max_length=500)
    status: BookInstanceStatus = BookInstanceStatus.MAINTENANCE
    due_back: OptionalDate = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        return v or BookInstanceStatus.MAINTENANCE

    def to_values(self) -> dict[str, Any]:
        return {
            "book_id": self.book,
            "imprint": self.imprint,
            "status": self.status.value,
            "due_back": self.due_back,
        }

    @classmethod
    def values_from(cls, bookinstance: BookInstance) -> dict[str, Any]:
        return {
            "book": str(bookinstance.book_id),
            "imprint": bookinstance.imprint,
            "status": bookinstance.status,
            "due_back": bookinstance.due_back_iso,
        }

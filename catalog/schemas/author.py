"""
Author Form

Schema for the author create/update form.

Names are required, at most 100 characters and alphanumeric. Dates are
optional; when given they must be ISO-8601 dates (YYYY-MM-DD).
"""

from typing import Any, ClassVar

from pydantic import Field, ValidationInfo, field_validator

from catalog.models import Author
from catalog.schemas.forms import FormModel, OptionalDate, Rule

NAME_LABELS = {
    "first_name": "First name",
    "family_name": "Family name",
}


class AuthorForm(FormModel):
    """
    Author details.

    Example (valid):
        {"first_name": "Patrick", "family_name": "Rothfuss",
         "date_of_birth": "1973-06-06", "date_of_death": ""}
    """

    form_rules: ClassVar[dict[str, Rule]] = {
        "first_name": Rule("First name must be specified."),
        "family_name": Rule("Family name must be specified."),
        "date_of_birth": Rule("Invalid date of birth", escape=False),
        "date_of_death": Rule("Invalid date of death", escape=False),
    }

    first_name: str = Field(min_length=1, max_length=100)
    family_name: str = Field(min_length=1, max_length=100)
    date_of_birth: OptionalDate = None
    date_of_death: OptionalDate = None

    @field_validator("first_name", "family_name")
    @classmethod
    def name_must_be_alphanumeric(cls, v: str, info: ValidationInfo) -> str:
        """Reject punctuation and spaces in names."""
        if not v.isalnum():
            raise ValueError(f"{NAME_LABELS[info.field_name]} has non-alphanumeric characters.")
        return v

    @classmethod
    def values_from(cls, author: Author) -> dict[str, Any]:
        return {
            "first_name": author.first_name,
            "family_name": author.family_name,
            "date_of_birth": author.date_of_birth_iso,
            "date_of_death": author.date_of_death_iso,
        }

"""
Genre Form

Schema for the genre create/update form.
"""

from typing import Any, ClassVar

from pydantic import Field

from catalog.models import Genre
from catalog.schemas.forms import FormModel, Rule


class GenreForm(FormModel):
    """Genre name, 3 to 100 characters after trimming."""

    form_rules: ClassVar[dict[str, Rule]] = {
        "name": Rule("Genre name must be between 3 and 100 characters."),
    }

    name: str = Field(min_length=3, max_length=100)

    @classmethod
    def values_from(cls, genre: Genre) -> dict[str, Any]:
        return {"name": genre.name}

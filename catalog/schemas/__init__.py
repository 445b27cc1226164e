"""
Form Schemas Package

Pydantic models that validate and sanitize submitted HTML forms.

WHY Separate Forms from SQLAlchemy Models?
==========================================
1. Validation rules (lengths, required fields) live with the form, not the
   table definition
2. A rejected form is shown again with its cleaned values, which are not a
   model instance
3. Forms speak in ids ("author", "genre"); models speak in relationships

Naming Convention:
- XxxForm: The create/update form for resource Xxx
"""

from catalog.schemas.forms import (
    ABSENT,
    Absent,
    FieldError,
    FormModel,
    FormResult,
    MAX_RECORD_ID,
    Many,
    RecordRef,
    RawValue,
    Rule,
    Scalar,
    as_sequence,
    as_text,
    read_form,
)
from catalog.schemas.author import AuthorForm
from catalog.schemas.book import BookForm
from catalog.schemas.bookinstance import BookInstanceForm
from catalog.schemas.genre import GenreForm

__all__ = [
    # Raw input
    "ABSENT",
    "Absent",
    "Scalar",
    "Many",
    "RawValue",
    "read_form",
    "as_sequence",
    "as_text",
    # Validation
    "Rule",
    "FieldError",
    "FormModel",
    "FormResult",
    "MAX_RECORD_ID",
    "RecordRef",
    # Forms
    "AuthorForm",
    "BookForm",
    "BookInstanceForm",
    "GenreForm",
]

"""
Form Validation and Sanitization

HTML forms arrive as untyped strings: a field may be missing, sent once, or
sent several times (checkbox groups). This module turns that input into

1. a sanitized candidate: every declared field, trimmed and HTML-escaped,
   built whether or not the input is valid, so a rejected form can be shown
   again with the cleaned values; and
2. an ordered list of field errors, collected from every field (validation
   never stops at the first failure); and
3. when there are no errors, a typed record (the Pydantic form model itself)
   ready to be persisted.

Sanitizing is declared per field with a Rule; constraints (required, length,
dates, integer references) are ordinary Pydantic field constraints on the
form model:

    class GenreForm(FormModel):
        form_rules: ClassVar[dict[str, Rule]] = {
            "name": Rule("Genre name must be between 3 and 100 characters."),
        }

        name: str = Field(min_length=3, max_length=100)

    result = GenreForm.check(read_form(await request.form()))
    if result.is_valid:
        ...  # result.record.name
    else:
        ...  # result.values["name"], result.errors
"""

import html
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError


# =============================================================================
# Raw Input
# =============================================================================
@dataclass(frozen=True)
class Absent:
    """The field was not submitted at all."""


@dataclass(frozen=True)
class Scalar:
    """The field was submitted once."""

    value: str


@dataclass(frozen=True)
class Many:
    """The field was submitted several times (e.g. a checkbox group)."""

    values: tuple[str, ...]


RawValue = Absent | Scalar | Many

ABSENT = Absent()


def to_raw_value(value: Any) -> RawValue:
    """Classify one submitted value."""
    if value is None:
        return ABSENT
    if isinstance(value, (list, tuple)):
        return Many(tuple(str(item) for item in value))
    return Scalar(str(value))


def read_form(form: Any) -> dict[str, RawValue]:
    """
    Read submitted form data into tagged raw values.

    Accepts Starlette's FormData (a multi-dict with getlist()) or a plain
    mapping of field name to a string or list of strings.
    """
    if hasattr(form, "getlist"):
        raw: dict[str, RawValue] = {}
        for key in form.keys():
            values = [str(item) for item in form.getlist(key)]
            raw[key] = Scalar(values[0]) if len(values) == 1 else Many(tuple(values))
        return raw
    return {key: to_raw_value(value) for key, value in form.items()}


def as_sequence(raw: RawValue) -> list[str]:
    """
    Normalize a raw value to a list.

    Absent -> [], Scalar -> [value], Many -> values in submitted order.
    """
    if isinstance(raw, Many):
        return list(raw.values)
    if isinstance(raw, Scalar):
        return [raw.value]
    return []


def as_text(raw: RawValue) -> str:
    """Normalize a raw value to a single string ("" when absent)."""
    if isinstance(raw, Many):
        return raw.values[0] if raw.values else ""
    if isinstance(raw, Scalar):
        return raw.value
    return ""


# =============================================================================
# Rules
# =============================================================================
@dataclass(frozen=True)
class Rule:
    """
    How one form field is cleaned and reported.

    Attributes:
        message: Reported for any failure on this field. When None, the
            Pydantic message is used.
        trim: Strip surrounding whitespace.
        escape: Replace HTML-sensitive characters with entities.
        many: The field is a list; cleaning applies to each item.
    """

    message: str | None = None
    trim: bool = True
    escape: bool = True
    many: bool = False

    def clean(self, value: str) -> str:
        if self.trim:
            value = value.strip()
        if self.escape:
            value = html.escape(value, quote=True)
        return value


DEFAULT_RULE = Rule()


def blank_to_none(value: Any) -> Any:
    """Treat an empty optional field as not given."""
    if isinstance(value, str) and not value:
        return None
    return value


@dataclass(frozen=True)
class FieldError:
    """A failed rule, shown next to the form."""

    field: str
    message: str


@dataclass
class FormResult:
    """
    Outcome of checking a submitted form.

    values always holds the sanitized candidate; record is only set when
    errors is empty.
    """

    values: dict[str, Any]
    errors: list[FieldError] = field(default_factory=list)
    record: "FormModel | None" = None

    @property
    def is_valid(self) -> bool:
        return not self.errors


# =============================================================================
# Form Base Class
# =============================================================================
class FormModel(BaseModel):
    """
    Base class for catalog forms.

    Subclasses declare their fields as Pydantic fields and may override the
    default Rule for any of them in form_rules.
    """

    form_rules: ClassVar[dict[str, Rule]] = {}

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def rule_for(cls, name: str) -> Rule:
        return cls.form_rules.get(name, DEFAULT_RULE)

    @classmethod
    def sanitize(cls, raw: Mapping[str, RawValue]) -> dict[str, Any]:
        """Build the cleaned candidate: one entry per declared field."""
        cleaned: dict[str, Any] = {}
        for name in cls.model_fields:
            rule = cls.rule_for(name)
            value = raw.get(name, ABSENT)
            if rule.many:
                cleaned[name] = [rule.clean(item) for item in as_sequence(value)]
            else:
                cleaned[name] = rule.clean(as_text(value))
        return cleaned

    @classmethod
    def check(cls, raw: Mapping[str, RawValue]) -> FormResult:
        """Sanitize, then validate every field and collect all failures."""
        cleaned = cls.sanitize(raw)
        try:
            record = cls.model_validate(cleaned)
        except ValidationError as exc:
            return FormResult(values=cleaned, errors=cls.field_errors(exc))
        return FormResult(values=cleaned, record=record)

    @classmethod
    def field_errors(cls, exc: ValidationError) -> list[FieldError]:
        """One error per field, in field declaration order."""
        errors: dict[str, FieldError] = {}
        for error in exc.errors():
            name = str(error["loc"][0]) if error["loc"] else "__root__"
            if name in errors:
                continue
            errors[name] = FieldError(name, cls.error_message(name, error))

        order = list(cls.model_fields)
        return sorted(
            errors.values(),
            key=lambda e: order.index(e.field) if e.field in order else len(order),
        )

    @classmethod
    def error_message(cls, name: str, error: Mapping[str, Any]) -> str:
        # A ValueError raised by a field validator carries its own message
        if error["type"] == "value_error" and "error" in error.get("ctx", {}):
            return str(error["ctx"]["error"])
        return cls.rule_for(name).message or error["msg"]

    def to_values(self) -> dict[str, Any]:
        """Column values for the persistence gateway."""
        return self.model_dump()


# Largest id a signed 64-bit primary key column can hold
MAX_RECORD_ID = 2**63 - 1

# A reference to another record, submitted as its id
RecordRef = Annotated[int, Field(ge=1, le=MAX_RECORD_ID)]


def iso_date_or_none(value: Any) -> Any:
    """
    Read an optional date field.

    Only ISO 8601 text is a date here; numbers such as "0" or a Unix
    timestamp are rejected rather than read as seconds since 1970.
    """
    value = blank_to_none(value)
    if not isinstance(value, str):
        return value
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise PydanticCustomError("date_parsing", "Input should be an ISO 8601 date") from None


# An optional ISO-8601 date: an empty input means "no date"
OptionalDate = Annotated[date | None, BeforeValidator(iso_date_or_none)]

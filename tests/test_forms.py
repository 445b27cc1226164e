"""
Tests for Form Validation

Covers raw input normalization, sanitizing and the error lists produced
by each catalog form. No database or HTTP involved.
"""

from datetime import date

import pytest

from catalog.models import BookInstanceStatus
from catalog.schemas import (
    ABSENT,
    AuthorForm,
    BookForm,
    BookInstanceForm,
    GenreForm,
    MAX_RECORD_ID,
    Many,
    Scalar,
    as_sequence,
    as_text,
    read_form,
)


def raw(**fields):
    """Build raw form input the way read_form() does for a plain mapping."""
    return read_form(fields)


class TestRawValues:
    """Tests for the Absent / Scalar / Many input variants."""

    def test_as_sequence(self):
        assert as_sequence(ABSENT) == []
        assert as_sequence(Scalar("3")) == ["3"]
        assert as_sequence(Many(("1", "2"))) == ["1", "2"]

    def test_as_text(self):
        assert as_text(ABSENT) == ""
        assert as_text(Scalar("x")) == "x"
        assert as_text(Many(("a", "b"))) == "a"

    def test_read_form_plain_mapping(self):
        """Lists become Many, everything else Scalar, None Absent."""
        result = read_form({"genre": ["1", "2"], "title": "Dune", "isbn": None})

        assert result["genre"] == Many(("1", "2"))
        assert result["title"] == Scalar("Dune")
        assert result["isbn"] == ABSENT

    def test_read_form_multidict(self):
        """A multi-dict field sent once is Scalar; sent twice it is Many."""

        class FakeFormData:
            def __init__(self, items):
                self._items = items

            def keys(self):
                return list(dict.fromkeys(key for key, _ in self._items))

            def getlist(self, key):
                return [value for k, value in self._items if k == key]

        form = FakeFormData([("genre", "1"), ("genre", "2"), ("title", "Dune")])
        result = read_form(form)

        assert result["genre"] == Many(("1", "2"))
        assert result["title"] == Scalar("Dune")


class TestGenreForm:
    """Tests for the genre form."""

    def test_valid_name_is_trimmed(self):
        result = GenreForm.check(raw(name="  Fantasy  "))

        assert result.is_valid
        assert result.record.name == "Fantasy"
        assert result.values == {"name": "Fantasy"}

    @pytest.mark.parametrize("name", ["", "ab", "   ", "x" * 101])
    def test_name_length(self, name):
        result = GenreForm.check(raw(name=name))

        assert not result.is_valid
        assert result.record is None
        assert [e.message for e in result.errors] == [
            "Genre name must be between 3 and 100 characters."
        ]

    def test_name_is_escaped(self):
        result = GenreForm.check(raw(name="<b>Horror</b>"))

        assert result.is_valid
        assert result.record.name == "&lt;b&gt;Horror&lt;/b&gt;"

    def test_missing_name(self):
        result = GenreForm.check({})

        assert not result.is_valid
        assert result.errors[0].field == "name"


class TestAuthorForm:
    """Tests for the author form."""

    def test_valid_author(self):
        result = AuthorForm.check(raw(
            first_name="Patrick",
            family_name="Rothfuss",
            date_of_birth="1973-06-06",
            date_of_death="",
        ))

        assert result.is_valid
        assert result.record.date_of_birth == date(1973, 6, 6)
        assert result.record.date_of_death is None

    def test_all_failures_are_reported_in_field_order(self):
        """Validation never stops at the first error."""
        result = AuthorForm.check(raw(
            first_name="",
            family_name="",
            date_of_birth="not-a-date",
            date_of_death="1950-13-45",
        ))

        assert [e.field for e in result.errors] == [
            "first_name", "family_name", "date_of_birth", "date_of_death",
        ]
        assert [e.message for e in result.errors] == [
            "First name must be specified.",
            "Family name must be specified.",
            "Invalid date of birth",
            "Invalid date of death",
        ]

    def test_non_alphanumeric_name(self):
        result = AuthorForm.check(raw(first_name="Jean Luc", family_name="Picard"))

        assert not result.is_valid
        assert [e.message for e in result.errors] == [
            "First name has non-alphanumeric characters."
        ]

    def test_escaped_name_is_rejected(self):
        """Escaping runs before the alphanumeric check."""
        result = AuthorForm.check(raw(first_name="O'Brien", family_name="Flann"))

        assert not result.is_valid
        assert result.values["first_name"] == "O&#x27;Brien"

    def test_name_too_long(self):
        result = AuthorForm.check(raw(first_name="a" * 101, family_name="Smith"))

        assert [e.message for e in result.errors] == ["First name must be specified."]

    @pytest.mark.parametrize("value", ["0", "1700000000"])
    def test_numeric_dates_rejected(self, value):
        result = AuthorForm.check(raw(
            first_name="Patrick",
            family_name="Rothfuss",
            date_of_birth=value,
            date_of_death=value,
        ))

        assert [e.message for e in result.errors] == [
            "Invalid date of birth",
            "Invalid date of death",
        ]


class TestBookForm:
    """Tests for the book form and its genre checkbox group."""

    def valid(self, **overrides):
        fields = {
            "title": "Dune",
            "author": "1",
            "summary": "Desert planet.",
            "isbn": "9780441013593",
        }
        fields.update(overrides)
        return raw(**fields)

    def test_genre_absent(self):
        """No ticked checkbox means no genres."""
        result = BookForm.check(self.valid())

        assert result.is_valid
        assert result.record.genre == []
        assert result.values["genre"] == []

    def test_genre_single_value(self):
        result = BookForm.check(self.valid(genre="2"))

        assert result.record.genre == [2]
        assert result.values["genre"] == ["2"]

    def test_genre_many_values_keep_order(self):
        result = BookForm.check(self.valid(genre=["3", "1"]))

        assert result.record.genre == [3, 1]

    def test_invalid_genre_id(self):
        result = BookForm.check(self.valid(genre=["1", "abc"]))

        assert [e.message for e in result.errors] == ["Invalid genre selection."]

    @pytest.mark.parametrize("genre", ["0", "-1", "9223372036854775808"])
    def test_genre_id_out_of_range(self, genre):
        result = BookForm.check(self.valid(genre=["1", genre]))

        assert [e.message for e in result.errors] == ["Invalid genre selection."]

    def test_largest_author_id_accepted(self):
        result = BookForm.check(self.valid(author=str(MAX_RECORD_ID)))

        assert result.is_valid
        assert result.record.author == MAX_RECORD_ID

    def test_author_id_too_large(self):
        result = BookForm.check(self.valid(author=str(MAX_RECORD_ID + 1)))

        assert [e.message for e in result.errors] == ["Author must not be empty."]

    def test_all_fields_required(self):
        result = BookForm.check({})

        assert [e.message for e in result.errors] == [
            "Title must not be empty.",
            "Author must not be empty.",
            "Summary must not be empty.",
            "ISBN must not be empty.",
        ]

    def test_values_are_sanitized_even_when_invalid(self):
        result = BookForm.check(self.valid(title="  Tom & Jerry  ", isbn=""))

        assert not result.is_valid
        assert result.values["title"] == "Tom &amp; Jerry"

    def test_to_values_maps_onto_columns(self):
        result = BookForm.check(self.valid(genre=["2"]))

        assert result.record.to_values() == {
            "title": "Dune",
            "author_id": 1,
            "summary": "Desert planet.",
            "isbn": "9780441013593",
            "genres": [2],
        }


class TestBookInstanceForm:
    """Tests for the book copy form."""

    def test_status_defaults_to_maintenance(self):
        result = BookInstanceForm.check(raw(book="1", imprint="Gollancz, 2011."))

        assert result.is_valid
        assert result.record.status is BookInstanceStatus.MAINTENANCE
        assert result.record.due_back is None

    def test_valid_copy(self):
        result = BookInstanceForm.check(raw(
            book="1", imprint="Gollancz", status="Loaned", due_back="2024-05-01",
        ))

        assert result.record.to_values() == {
            "book_id": 1,
            "imprint": "Gollancz",
            "status": "Loaned",
            "due_back": date(2024, 5, 1),
        }

    def test_invalid_fields(self):
        result = BookInstanceForm.check(raw(book="", imprint="", status="Lost", due_back="soon"))

        assert [e.field for e in result.errors] == ["book", "imprint", "status", "due_back"]
        assert result.errors[0].message == "Book must be specified."
        assert result.errors[1].message == "Imprint must be specified."
        assert result.errors[3].message == "Invalid date"

    def test_book_id_too_large(self):
        result = BookInstanceForm.check(raw(book="99999999999999999999", imprint="Gollancz"))

        assert [e.message for e in result.errors] == ["Book must be specified."]

    @pytest.mark.parametrize("due_back", ["0", "1700000000", "1700000000.5"])
    def test_numeric_due_date_rejected(self, due_back):
        """Numbers are not read as Unix timestamps."""
        result = BookInstanceForm.check(raw(book="1", imprint="Gollancz", due_back=due_back))

        assert [e.field for e in result.errors] == ["due_back"]
        assert result.errors[0].message == "Invalid date"

    def test_due_date_is_trimmed(self):
        result = BookInstanceForm.check(raw(book="1", imprint="Gollancz", due_back=" 2024-05-01 "))

        assert result.record.due_back == date(2024, 5, 1)

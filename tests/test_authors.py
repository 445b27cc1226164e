"""
Tests for Author Pages

Tests for /catalog/authors and /catalog/author/... pages.
"""

from datetime import date

import pytest
from fastapi import status

from catalog.models import Author


class TestListAuthors:
    """Tests for GET /catalog/authors."""

    def test_list_authors_empty(self, client):
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert "There are no authors." in response.text

    def test_list_authors_sorted_by_family_name(self, client, repo, sample_author):
        repo.insert(Author, {"first_name": "Isaac", "family_name": "Asimov"})

        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert response.text.index("Asimov, Isaac") < response.text.index("Rothfuss, Patrick")
        assert "Jun 6, 1973 - present/unknown" in response.text


class TestAuthorDetail:
    """Tests for GET /catalog/author/{id}."""

    def test_author_detail_with_books(self, client, sample_author, sample_book):
        response = client.get(f"/catalog/author/{sample_author.id}")

        assert response.status_code == status.HTTP_200_OK
        assert "Rothfuss, Patrick" in response.text
        assert "The Name of the Wind" in response.text

    def test_author_detail_not_found(self, client):
        response = client.get("/catalog/author/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Author not found" in response.text

    def test_author_detail_id_too_large(self, client):
        response = client.get("/catalog/author/99999999999999999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCreateAuthor:
    """Tests for GET and POST /catalog/author/create."""

    def test_create_form(self, client):
        response = client.get("/catalog/author/create")

        assert response.status_code == status.HTTP_200_OK
        assert "Create Author" in response.text

    def test_create_author_success(self, client, repo):
        response = client.post(
            "/catalog/author/create",
            data={
                "first_name": "Jane",
                "family_name": "Austen",
                "date_of_birth": "1775-12-16",
                "date_of_death": "1817-07-18",
            },
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        author = repo.find(Author)[0]
        assert response.headers["location"] == f"/catalog/author/{author.id}"
        assert author.date_of_birth == date(1775, 12, 16)
        assert author.lifespan == "42"

    def test_create_author_invalid(self, client, repo):
        response = client.post(
            "/catalog/author/create",
            data={"first_name": "Mary Ann", "family_name": "", "date_of_birth": "someday"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "First name has non-alphanumeric characters." in response.text
        assert "Family name must be specified." in response.text
        assert "Invalid date of birth" in response.text
        assert 'value="Mary Ann"' in response.text
        assert repo.count(Author) == 0

    @pytest.mark.parametrize("date_of_birth", ["0", "1700000000"])
    def test_create_author_numeric_date_rejected(self, client, repo, date_of_birth):
        response = client.post(
            "/catalog/author/create",
            data={"first_name": "Ursula", "family_name": "LeGuin", "date_of_birth": date_of_birth},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "Invalid date of birth" in response.text
        assert repo.count(Author) == 0


class TestUpdateAuthor:
    """Tests for GET and POST /catalog/author/{id}/update."""

    def test_update_form_prefilled(self, client, sample_author):
        response = client.get(f"/catalog/author/{sample_author.id}/update")

        assert response.status_code == status.HTTP_200_OK
        assert 'value="Rothfuss"' in response.text
        assert 'value="1973-06-06"' in response.text

    def test_update_author_success(self, client, repo, sample_author):
        response = client.post(
            f"/catalog/author/{sample_author.id}/update",
            data={"first_name": "Pat", "family_name": "Rothfuss", "date_of_birth": ""},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == f"/catalog/author/{sample_author.id}"
        author = repo.get(Author, sample_author.id)
        assert author.first_name == "Pat"
        assert author.date_of_birth is None

    def test_update_author_not_found(self, client):
        response = client.post(
            "/catalog/author/99999/update",
            data={"first_name": "A", "family_name": "B"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteAuthor:
    """Tests for GET and POST /catalog/author/{id}/delete."""

    def test_delete_author_success(self, client, repo, sample_author):
        response = client.post(
            f"/catalog/author/{sample_author.id}/delete",
            data={"authorid": str(sample_author.id)},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"
        assert repo.get(Author, sample_author.id) is None

    def test_delete_author_blocked_by_books(self, client, repo, sample_author, sample_book):
        response = client.post(
            f"/catalog/author/{sample_author.id}/delete",
            data={"authorid": str(sample_author.id)},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_200_OK
        assert "Delete the following books" in response.text
        assert repo.get(Author, sample_author.id) is not None

    def test_delete_form_missing_redirects(self, client):
        response = client.get("/catalog/author/99999/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"

    def test_delete_author_id_too_large_redirects(self, client, repo, sample_author):
        response = client.post(
            f"/catalog/author/{sample_author.id}/delete",
            data={"authorid": "99999999999999999999"},
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"
        assert repo.get(Author, sample_author.id) is not None

"""
Test Suite for the Local Library Catalog

Test Organization:
- conftest.py: Shared fixtures (test database, repository, client, sample data)
- test_forms.py: Form sanitizing and validation
- test_aggregate.py: Concurrent query aggregation
- test_models.py, test_repository.py: Derived values and persistence
- test_books.py, test_bookinstances.py, test_authors.py, test_genres.py:
  Pages for each resource
- test_catalog.py: Home page, error pages, health check

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""

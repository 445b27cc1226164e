"""
Routers Package

FastAPI routers for the catalog's HTML pages, all mounted under /catalog.

Router Structure:
- catalog.py: /catalog (home page with counts)
- books.py: /catalog/books, /catalog/book/*
- bookinstances.py: /catalog/bookinstances, /catalog/bookinstance/*
- authors.py: /catalog/authors, /catalog/author/*
- genres.py: /catalog/genres, /catalog/genre/*

Each router is imported and registered in main.py.
"""

from catalog.routers.authors import router as authors_router
from catalog.routers.bookinstances import router as bookinstances_router
from catalog.routers.books import router as books_router
from catalog.routers.catalog import router as catalog_router
from catalog.routers.genres import router as genres_router

__all__ = [
    "catalog_router",
    "books_router",
    "bookinstances_router",
    "authors_router",
    "genres_router",
]

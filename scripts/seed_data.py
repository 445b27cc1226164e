#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample authors, genres, books and copies for
development.

USAGE:
    # From the project root with the package installed
    python scripts/seed_data.py

    # Keep whatever is already in the database
    python scripts/seed_data.py --keep

This script:
1. Connects to the database using the catalog settings
2. Clears existing data (unless --keep is given)
3. Creates sample authors, genres, books and book copies
"""

import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog.database import SessionLocal, create_tables
from catalog.models import Author, Book, BookInstance, BookInstanceStatus, Genre, book_genres


def clear_data(db: Session) -> None:
    """Clear all existing data from the database, dependents first."""
    print("Clearing existing data...")
    db.execute(delete(BookInstance))
    db.execute(delete(book_genres))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(Genre))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors, keyed by family name."""
    print("Creating authors...")
    authors_data = [
        {"first_name": "Patrick", "family_name": "Rothfuss", "date_of_birth": date(1973, 6, 6)},
        {"first_name": "Ben", "family_name": "Bova", "date_of_birth": date(1932, 11, 8)},
        {
            "first_name": "Isaac",
            "family_name": "Asimov",
            "date_of_birth": date(1920, 1, 2),
            "date_of_death": date(1992, 4, 6),
        },
        {"first_name": "Bob", "family_name": "Billings"},
        {"first_name": "Jim", "family_name": "Jones", "date_of_birth": date(1971, 12, 16)},
    ]

    authors = {}
    for data in authors_data:
        author = Author(**data)
        db.add(author)
        authors[data["family_name"]] = author

    db.commit()
    print(f"Created {len(authors)} authors.")
    return authors


def create_genres(db: Session) -> dict[str, Genre]:
    """Create sample genres."""
    print("Creating genres...")
    genres = {name: Genre(name=name) for name in ["Fantasy", "Science Fiction", "French Poetry"]}
    db.add_all(genres.values())
    db.commit()

    print(f"Created {len(genres)} genres.")
    return genres


def create_books(
    db: Session,
    authors: dict[str, Author],
    genres: dict[str, Genre],
) -> dict[str, Book]:
    """Create sample books with author and genre relationships."""
    print("Creating books...")

    books_data = [
        {
            "title": "The Name of the Wind (The Kingkiller Chronicle, #1)",
            "summary": "I have stolen princesses back from sleeping barrow kings. "
                       "I burned down the town of Trebon.",
            "isbn": "9781473211896",
            "author": "Rothfuss",
            "genres": ["Fantasy"],
        },
        {
            "title": "The Wise Man's Fear (The Kingkiller Chronicle, #2)",
            "summary": "Picking up the tale of Kvothe Kingkiller once again.",
            "isbn": "9788401352836",
            "author": "Rothfuss",
            "genres": ["Fantasy"],
        },
        {
            "title": "The Slow Regard of Silent Things (Kingkiller Chronicle)",
            "summary": "Deep below the University, there is a dark place.",
            "isbn": "9780756411336",
            "author": "Rothfuss",
            "genres": ["Fantasy"],
        },
        {
            "title": "Apes and Angels",
            "summary": "Humankind headed out to the stars not for conquest, "
                       "nor exploration, nor even for curiosity.",
            "isbn": "9780765379528",
            "author": "Bova",
            "genres": ["Science Fiction"],
        },
        {
            "title": "Death Wave",
            "summary": "In Ben Bova's previous novel New Earth, Jordan Kell "
                       "led the first human mission beyond the solar system.",
            "isbn": "9780765379504",
            "author": "Bova",
            "genres": ["Science Fiction"],
        },
        {
            "title": "Test Book 1",
            "summary": "Summary of test book 1",
            "isbn": "ISBN111111",
            "author": "Billings",
            "genres": ["Fantasy", "Science Fiction"],
        },
        {
            "title": "Test Book 2",
            "summary": "Summary of test book 2",
            "isbn": "ISBN222222",
            "author": "Billings",
            "genres": [],
        },
    ]

    books = {}
    for data in books_data:
        book = Book(
            title=data["title"],
            summary=data["summary"],
            isbn=data["isbn"],
            author=authors[data["author"]],
            genres=[genres[name] for name in data["genres"]],
        )
        db.add(book)
        books[data["title"]] = book

    db.commit()
    print(f"Created {len(books)} books.")
    return books


def create_bookinstances(db: Session, books: dict[str, Book]) -> list[BookInstance]:
    """Create copies of the sample books in every status."""
    print("Creating book copies...")
    titles = list(books)
    copies_data = [
        (titles[0], "London Gollancz, 2014.", BookInstanceStatus.AVAILABLE, None),
        (titles[1], " Gollancz, 2011.", BookInstanceStatus.LOANED, date(2020, 6, 1)),
        (titles[2], " Gollancz, 2015.", BookInstanceStatus.AVAILABLE, None),
        (titles[3], "New York Tom Doherty Associates, 2016.", BookInstanceStatus.AVAILABLE, None),
        (titles[3], "New York Tom Doherty Associates, 2016.", BookInstanceStatus.AVAILABLE, None),
        (titles[3], "New York Tom Doherty Associates, 2016.", BookInstanceStatus.AVAILABLE, None),
        (titles[4], "New York, NY Tom Doherty Associates, LLC, 2015.", BookInstanceStatus.AVAILABLE, None),
        (titles[4], "New York, NY Tom Doherty Associates, LLC, 2015.", BookInstanceStatus.MAINTENANCE, None),
        (titles[4], "New York, NY Tom Doherty Associates, LLC, 2015.", BookInstanceStatus.LOANED, None),
        (titles[0], "Imprint XXX2", BookInstanceStatus.MAINTENANCE, None),
        (titles[1], "Imprint XXX3", BookInstanceStatus.MAINTENANCE, None),
    ]

    copies = []
    for title, imprint, status, due_back in copies_data:
        copy = BookInstance(
            book=books[title],
            imprint=imprint.strip(),
            status=status.value,
            due_back=due_back,
        )
        db.add(copy)
        copies.append(copy)

    db.commit()
    print(f"Created {len(copies)} book copies.")
    return copies


def seed_database(clear_existing: bool = True) -> None:
    """
    Fill the catalog with the sample records.

    Args:
        clear_existing: Remove every catalog record first.
    """
    print("Seeding the catalog...")
    create_tables()

    with SessionLocal() as db:
        try:
            if clear_existing:
                clear_data(db)

            authors = create_authors(db)
            genres = create_genres(db)
            books = create_books(db, authors, genres)
            copies = create_bookinstances(db, books)
        except Exception as e:
            print(f"Seeding failed, rolling back: {e}")
            db.rollback()
            raise

    counts = {
        "Authors": len(authors),
        "Genres": len(genres),
        "Books": len(books),
        "Copies": len(copies),
    }
    print("-" * 40)
    for label, count in counts.items():
        print(f"{label:<8} {count}")
    print("-" * 40)
    print("Browse the catalog at http://localhost:3000/catalog")


if __name__ == "__main__":
    seed_database(clear_existing="--keep" not in sys.argv[1:])

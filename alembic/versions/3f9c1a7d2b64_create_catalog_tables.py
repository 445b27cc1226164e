"""Create catalog tables

Revision ID: 3f9c1a7d2b64
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1a7d2b64'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False, comment="Author's first name"),
        sa.Column('family_name', sa.String(length=100), nullable=False, comment="Author's family name"),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('date_of_death', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_authors_family_name'), 'authors', ['family_name'], unique=False)

    op.create_table('genres',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, comment="Genre name (e.g., 'Fantasy', 'Poetry')"),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_genres_name'), 'genres', ['name'], unique=False)

    op.create_table('books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('summary', sa.Text(), nullable=False, comment='Book summary'),
        sa.Column('isbn', sa.String(length=40), nullable=False, comment='International Standard Book Number'),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_author_id'), 'books', ['author_id'], unique=False)

    op.create_table('book_genres',
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['genre_id'], ['genres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('book_id', 'genre_id'),
        comment='Association table linking books to their genres'
    )

    op.create_table('book_instances',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('imprint', sa.String(length=500), nullable=False, comment='Publisher, edition and year'),
        sa.Column('status', sa.String(length=20), nullable=False, comment='Maintenance, Available, Loaned or Reserved'),
        sa.Column('due_back', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_book_instances_book_id'), 'book_instances', ['book_id'], unique=False)
    op.create_index(op.f('ix_book_instances_status'), 'book_instances', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_book_instances_status'), table_name='book_instances')
    op.drop_index(op.f('ix_book_instances_book_id'), table_name='book_instances')
    op.drop_table('book_instances')
    op.drop_table('book_genres')
    op.drop_index(op.f('ix_books_author_id'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_genres_name'), table_name='genres')
    op.drop_table('genres')
    op.drop_index(op.f('ix_authors_family_name'), table_name='authors')
    op.drop_table('authors')

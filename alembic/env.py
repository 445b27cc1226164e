"""
Alembic Environment for the Catalog Schema

The database URL comes from the catalog settings (DATABASE_URL), never from
alembic.ini, so migrations run against the same database as the app.

COMMANDS:
- alembic upgrade head                           # Create / update the catalog tables
- alembic revision --autogenerate -m "message"  # After changing catalog/models
- alembic downgrade -1                           # Roll back one revision
- alembic upgrade head --sql                     # Print SQL without connecting
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from catalog.config import get_settings
from catalog.database import Base

# Registers every catalog table on Base.metadata for autogenerate
from catalog.models import Author, Book, BookInstance, Genre  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", get_settings().database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect to the catalog database and apply the migrations."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite cannot ALTER most columns; batch mode recreates the table
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

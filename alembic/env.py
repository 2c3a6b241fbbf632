"""Alembic environment for the SMS Expense Tracker schema.

The schema is written as hand-made migrations (no SQLAlchemy models), so
there is no target metadata for autogenerate. The database URL comes from
DATABASE_URL, the same variable the asyncpg pool reads.
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def database_url() -> str:
    """DATABASE_URL as a synchronous SQLAlchemy URL"""
    url = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    # The app may be configured with an asyncpg-flavoured URL
    return url.replace("postgresql+asyncpg://", "postgresql://").replace("asyncpg://", "postgresql://")


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    context.configure(
        url=database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a short-lived synchronous engine."""
    engine = create_engine(database_url(), poolclass=pool.NullPool)

    try:
        with engine.connect() as connection:
            context.configure(connection=connection, target_metadata=None)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

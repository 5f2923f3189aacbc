"""Alembic migration environment: supports both SQLite (dev) and PostgreSQL (prod).

Run migrations:
    # From the backend/ directory:
    alembic upgrade head          # apply all pending migrations
    alembic revision --autogenerate -m "describe change"   # generate new migration
    alembic downgrade -1          # roll back one revision

Environment variables (same as the app):
    BLOG_DB_URL      Override the target database URL
    BLOG_DB_DIALECT  auto-detected from URL; set explicitly only if needed

Alembic's context.run_migrations() is synchronous, so this module uses the
synchronous URL from settings.sync_db_url() rather than the app's async engine.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from blogapi.config import settings
from blogapi.db.models import Base

# ── Alembic Config ──────────────────────────────────────────────────────────
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Override the URL from app settings (supports .env files automatically)
config.set_main_option("sqlalchemy.url", settings.sync_db_url())


def run_migrations_offline() -> None:
    """Generate SQL script without connecting to the DB.

    Usage:  alembic upgrade head --sql
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=True,  # needed for SQLite ALTER TABLE support
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live DB connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,  # do not pool connections during migration
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=settings.is_sqlite,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

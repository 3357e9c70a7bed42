"""Alembic migration environment for the blog schema.

Offline mode renders SQL for review; online mode borrows the engine of a
``blog_api.database.Database`` so migrations connect exactly like the app.
"""

import asyncio
import logging
from logging.config import fileConfig

from alembic import context

from blog_api.config import settings
from blog_api.database import Base, Database

# Registers users, tags, articles, article_tags and comments on Base.metadata.
import blog_api.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

logger = logging.getLogger("alembic.env")

# Connection settings live in Settings (.env / environment), not alembic.ini.
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite needs batch mode to alter tables
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run the migration scripts over an async connection via ``run_sync``."""
    database = Database(settings.DATABASE_URL)
    try:
        async with database.engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await database.dispose()


def run_migrations_online() -> None:
    logger.info("Running migrations against %s", database_host())
    asyncio.run(run_async_migrations())


def database_host() -> str:
    return settings.DATABASE_URL.rsplit("@", 1)[-1]


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

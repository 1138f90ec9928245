import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, create_engine
from dotenv import load_dotenv

from app.database import Base, SQLALCHEMY_DATABASE_URL

# Import all models so Alembic sees them in metadata
from app.models.user import User  # noqa: F401
from app.models.item import Item  # noqa: F401
from app.models.booking import Booking, BookingMessage  # noqa: F401

load_dotenv()

# Alembic Config object
config = context.config

# Force sqlalchemy.url from the runtime DATABASE_URL
config.set_main_option(
    "sqlalchemy.url", os.getenv("DATABASE_URL", SQLALCHEMY_DATABASE_URL)
)

# Logging config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata for autogenerate
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = create_engine(
        config.get_main_option("sqlalchemy.url"), poolclass=pool.NullPool
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

"""Alembic environment for the juror registry schema.

The connection URL comes from ``DATABASE_URL`` when set, otherwise from the
application settings, so migrations and the API always target the same
database. ``alembic.ini`` puts ``src`` on the import path.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import MetaData, engine_from_config, pool

from controle_jurados.core.settings import get_settings
from controle_jurados.db.base import Base, import_orm_models

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _target_metadata() -> MetaData:
    import_orm_models()
    return Base.metadata


def _database_url() -> str:
    return os.getenv("DATABASE_URL") or get_settings().database_url


target_metadata = _target_metadata()
config.set_main_option("sqlalchemy.url", _database_url())


def _configure_options() -> dict[str, object]:
    # Autogenerate also diffs enum labels and the judge division defaults.
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
    }


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_options())

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

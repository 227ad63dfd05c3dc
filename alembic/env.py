"""
============================================================
TARJETA CRC: alembic/env.py (Alembic Environment Configuration)
============================================================
Responsibilities:
  - Correr las migraciones del catálogo (online/offline).
  - Tomar la URL de la misma fuente que la app: DATABASE_URL o
    database.url del YAML (catalog_api Settings); alembic.ini como último recurso.

Collaborators:
  - Alembic (context, config)
  - SQLAlchemy Engine, solo para DDL
  - catalog_api.crosscutting.config.get_settings

Policy:
  - Sin ORM: target_metadata = None, migraciones escritas a mano.
============================================================
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from catalog_api.crosscutting.config import get_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = None

_PSYCOPG_SCHEMES = ("postgresql://", "postgres://")


def resolve_url() -> str:
    url = get_settings().database_url or config.get_main_option("sqlalchemy.url") or ""
    for scheme in _PSYCOPG_SCHEMES:
        if url.startswith(scheme):
            # R: SQLAlchemy necesita el dialecto explícito para psycopg 3.
            return "postgresql+psycopg://" + url[len(scheme):]
    return url


def run_migrations_offline() -> None:
    context.configure(
        url=resolve_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = dict(config.get_section(config.config_ini_section) or {})
    section["sqlalchemy.url"] = resolve_url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

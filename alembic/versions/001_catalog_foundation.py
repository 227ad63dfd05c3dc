"""
============================================================
TARJETA CRC: 001_catalog_foundation (Alembic Migration)
============================================================
Responsibilities:
  - Crear el esquema del catálogo desde cero.
  - Declarar las constraints que son la autoridad final de consistencia:
      uq_users_email, uq_movies_title, uq_categories_name,
      FKs de movie_categories / user_favorites.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>,
      fk_<tabla>_<col>__<ref_tabla>
  - Las FKs NO declaran ON DELETE CASCADE: el borrado de una película
    elimina sus dependencias explícitamente dentro de una transacción, y una
    categoría referenciada no se puede borrar.
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_catalog_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) USERS (Credential Store)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "is_admin", sa.Boolean, server_default=sa.text("false"), nullable=False
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_created_at", "users", ["created_at"])

    # =========================================================
    # 2) CATEGORIES
    # =========================================================
    op.create_table(
        "categories",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    # =========================================================
    # 3) MOVIES
    # =========================================================
    op.create_table(
        "movies",
        sa.Column("id", sa.BigInteger, sa.Identity(always=False), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, server_default=sa.text("''"), nullable=False),
        sa.Column("release_year", sa.Integer, nullable=True),
        sa.Column("duration", sa.Integer, nullable=True),
        sa.Column("poster_url", sa.Text, server_default=sa.text("''"), nullable=False),
        sa.Column("video_url", sa.Text, server_default=sa.text("''"), nullable=False),
        # Tags por nombre; movie_categories se sincroniza al escribir.
        sa.Column(
            "categories",
            postgresql.ARRAY(sa.Text),
            server_default=sa.text("'{}'::text[]"),
            nullable=False,
        ),
        sa.Column(
            "rating",
            sa.Numeric(3, 1),
            server_default=sa.text("0"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_movies"),
        sa.UniqueConstraint("title", name="uq_movies_title"),
        sa.CheckConstraint(
            "rating >= 0 AND rating <= 10", name="ck_movies_rating_range"
        ),
    )
    op.create_index("ix_movies_created_at", "movies", ["created_at"])
    op.create_index("ix_movies_release_year", "movies", ["release_year"])
    op.create_index("ix_movies_rating", "movies", ["rating"])
    # Operador && (intersección de tags)
    op.execute("CREATE INDEX ix_movies_categories ON movies USING gin (categories)")

    # =========================================================
    # 4) MOVIE <-> CATEGORY (join table)
    # =========================================================
    op.create_table(
        "movie_categories",
        sa.Column("movie_id", sa.BigInteger, nullable=False),
        sa.Column("category_id", sa.BigInteger, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("movie_id", "category_id", name="pk_movie_categories"),
        sa.ForeignKeyConstraint(
            ["movie_id"], ["movies.id"], name="fk_movie_categories_movie_id__movies"
        ),
        sa.ForeignKeyConstraint(
            ["category_id"],
            ["categories.id"],
            name="fk_movie_categories_category_id__categories",
        ),
    )
    op.create_index(
        "ix_movie_categories_category_id", "movie_categories", ["category_id"]
    )

    # =========================================================
    # 5) USER FAVORITES
    # =========================================================
    op.create_table(
        "user_favorites",
        sa.Column("user_id", sa.BigInteger, nullable=False),
        sa.Column("movie_id", sa.BigInteger, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id", "movie_id", name="pk_user_favorites"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_user_favorites_user_id__users"
        ),
        sa.ForeignKeyConstraint(
            ["movie_id"], ["movies.id"], name="fk_user_favorites_movie_id__movies"
        ),
    )
    op.create_index("ix_user_favorites_movie_id", "user_favorites", ["movie_id"])


def downgrade() -> None:
    op.drop_table("user_favorites")
    op.drop_table("movie_categories")
    op.drop_table("movies")
    op.drop_table("categories")
    op.drop_table("users")

"""Create recipe schema

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates every RecipeShare table, the recipe/user ID sequences and the
       default rank tiers in users1.
How:   Plain ANSI column types so the same revision runs on Oracle and on the
       SQLite files used in development. Sequences are skipped by dialects
       without them.

Rollback: downgrade() drops everything in reverse dependency order.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Threshold → level. A user's level is the highest threshold not above their points.
DEFAULT_TIERS = [
    {"points": 0, "userlevel": "Novice"},
    {"points": 100, "userlevel": "Home Cook"},
    {"points": 500, "userlevel": "Chef"},
    {"points": 1000, "userlevel": "Master Chef"},
]


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.supports_sequences:
        op.execute(sa.schema.CreateSequence(sa.Sequence("recipe_seq")))
        op.execute(sa.schema.CreateSequence(sa.Sequence("user_seq")))

    tiers = op.create_table(
        "users1",
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("userlevel", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("points"),
    )

    op.create_table(
        "users2",
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.PrimaryKeyConstraint("userid"),
    )

    op.create_table(
        "recipecreated1",
        sa.Column("cuisine", sa.String(50), nullable=False),
        sa.Column("recipelevel", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("cuisine"),
    )

    op.create_table(
        "recipecreated2",
        sa.Column("recipeid", sa.Integer(), nullable=False),
        sa.Column("recipename", sa.String(100), nullable=False),
        sa.Column("cuisine", sa.String(50), nullable=True),
        # INTERVAL DAY TO SECOND on Oracle
        sa.Column("cookingtime", sa.Interval(), nullable=True),
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["cuisine"], ["recipecreated1.cuisine"]),
        sa.ForeignKeyConstraint(["userid"], ["users2.userid"]),
        sa.PrimaryKeyConstraint("recipeid"),
    )

    op.create_table(
        "recipesteps",
        sa.Column("recipeid", sa.Integer(), nullable=False),
        sa.Column("stepnumber", sa.Integer(), nullable=False),
        sa.Column("instruction", sa.String(1000), nullable=False),
        sa.ForeignKeyConstraint(["recipeid"], ["recipecreated2.recipeid"]),
        sa.PrimaryKeyConstraint("recipeid", "stepnumber"),
    )

    op.create_table(
        "recipeimages",
        sa.Column("recipeid", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("caption", sa.String(500), nullable=True),
        sa.ForeignKeyConstraint(["recipeid"], ["recipecreated2.recipeid"]),
        sa.PrimaryKeyConstraint("recipeid", "url"),
    )

    op.create_table(
        "recipesliked",
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.Column("recipeid", sa.Integer(), nullable=False),
        sa.Column(
            "liked",
            sa.Boolean(create_constraint=True, name="ck_recipesliked_liked"),
            nullable=False,
            server_default=sa.text("1"),
        ),
        sa.ForeignKeyConstraint(["userid"], ["users2.userid"]),
        sa.ForeignKeyConstraint(["recipeid"], ["recipecreated2.recipeid"]),
        sa.PrimaryKeyConstraint("userid", "recipeid"),
    )

    op.create_table(
        "savedpantry",
        sa.Column("pantryid", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint("pantryid"),
    )

    op.create_table(
        "userpantries",
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.Column("pantryid", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["userid"], ["users2.userid"]),
        sa.ForeignKeyConstraint(["pantryid"], ["savedpantry.pantryid"]),
        sa.PrimaryKeyConstraint("userid", "pantryid"),
    )

    op.create_table(
        "locations",
        sa.Column("street", sa.String(200), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("province", sa.String(50), nullable=True),
        sa.Column("locationtype", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("street", "city"),
    )

    # Liked-recipe listings filter and join on recipeid
    op.create_index("idx_recipesliked_recipeid", "recipesliked", ["recipeid"])

    op.bulk_insert(tiers, DEFAULT_TIERS)


def downgrade() -> None:
    """
    Drop the whole schema.

    WARNING: destructive, every recipe, user and like is lost.
    """
    op.drop_index("idx_recipesliked_recipeid", table_name="recipesliked")
    op.drop_table("locations")
    op.drop_table("userpantries")
    op.drop_table("savedpantry")
    op.drop_table("recipesliked")
    op.drop_table("recipeimages")
    op.drop_table("recipesteps")
    op.drop_table("recipecreated2")
    op.drop_table("recipecreated1")
    op.drop_table("users2")
    op.drop_table("users1")

    bind = op.get_bind()
    if bind.dialect.supports_sequences:
        op.execute(sa.schema.DropSequence(sa.Sequence("user_seq")))
        op.execute(sa.schema.DropSequence(sa.Sequence("recipe_seq")))

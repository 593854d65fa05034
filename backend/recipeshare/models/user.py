"""
RecipeShare Backend - User SQLAlchemy Models
============================================

What:  Users, the points-tier lookup and saved pantries.

Rank Model:
    users1 holds one row per tier: a distinct points threshold and its level
    name. A user's level is the row with the greatest threshold that does not
    exceed the user's points, so a user sitting exactly on a threshold gets
    that tier.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, Sequence, String, text
from sqlalchemy.orm import Mapped, mapped_column

from recipeshare.database import Base


class User(Base):
    __tablename__ = "users2"

    user_id: Mapped[int] = mapped_column(
        "userid",
        Integer,
        Sequence("user_seq"),
        primary_key=True,
    )
    user_name: Mapped[str] = mapped_column("username", String(100), nullable=False)
    points: Mapped[int] = mapped_column(
        "points", Integer, nullable=False, default=0, server_default=text("0")
    )

    def __repr__(self) -> str:
        return f"<User(id={self.user_id}, name='{self.user_name}', points={self.points})>"


class UserTier(Base):
    """Rank thresholds; `points` values are distinct (primary key)."""

    __tablename__ = "users1"

    points: Mapped[int] = mapped_column("points", Integer, primary_key=True)
    user_level: Mapped[str] = mapped_column("userlevel", String(50), nullable=False)


class Pantry(Base):
    __tablename__ = "savedpantry"

    pantry_id: Mapped[int] = mapped_column("pantryid", Integer, primary_key=True)
    category: Mapped[Optional[str]] = mapped_column("category", String(100))


class UserPantry(Base):
    __tablename__ = "userpantries"

    user_id: Mapped[int] = mapped_column(
        "userid", Integer, ForeignKey("users2.userid"), primary_key=True
    )
    pantry_id: Mapped[int] = mapped_column(
        "pantryid", Integer, ForeignKey("savedpantry.pantryid"), primary_key=True
    )

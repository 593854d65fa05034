"""
RecipeShare Backend - Recipe SQLAlchemy Models
==============================================

What:  ORM models for recipes and everything hanging off a recipe: the
       cuisine-level lookup, ordered steps, images and per-user likes.
How:   Table and column names are lower-case so SQLAlchemy emits them
       unquoted; Oracle then resolves them case-insensitively against the
       existing RECIPECREATED2 / RECIPECREATED1 / ... tables.
Who:   Queried by RecipeService, StepService, ImageService and LikeService.

Table Map:
    recipecreated2   Recipe        (RecipeID from recipe_seq)
    recipecreated1   CuisineLevel  (Cuisine → RecipeLevel lookup)
    recipesteps      RecipeStep    (RecipeID, StepNumber) composite key
    recipeimages     RecipeImage   (RecipeID, URL) composite key
    recipesliked     RecipeLike    (UserID, RecipeID) composite key
"""

from datetime import timedelta
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Interval, Sequence, String, text
from sqlalchemy.orm import Mapped, mapped_column

from recipeshare.database import Base


class CuisineLevel(Base):
    """Difficulty level attached to each cuisine."""

    __tablename__ = "recipecreated1"

    cuisine: Mapped[str] = mapped_column("cuisine", String(50), primary_key=True)
    recipe_level: Mapped[Optional[str]] = mapped_column("recipelevel", String(50))


class Recipe(Base):
    """
    A recipe created by a user.

    Lifecycle:
        1. Inserted by RecipeService.create_recipe (ID drawn from recipe_seq)
        2. Mutated by RecipeService.update_recipe
        3. Removed by RecipeService.delete_recipe together with its steps,
           images and likes, in one transaction
    """

    __tablename__ = "recipecreated2"

    recipe_id: Mapped[int] = mapped_column(
        "recipeid",
        Integer,
        Sequence("recipe_seq"),
        primary_key=True,
    )
    recipe_name: Mapped[str] = mapped_column("recipename", String(100), nullable=False)
    cuisine: Mapped[Optional[str]] = mapped_column(
        "cuisine", String(50), ForeignKey("recipecreated1.cuisine")
    )
    # INTERVAL DAY TO SECOND on Oracle
    cooking_time: Mapped[Optional[timedelta]] = mapped_column("cookingtime", Interval())
    user_id: Mapped[int] = mapped_column(
        "userid", Integer, ForeignKey("users2.userid"), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.recipe_id}, name='{self.recipe_name}')>"


class RecipeStep(Base):
    """One numbered instruction; StepNumbers run 1..n within a recipe."""

    __tablename__ = "recipesteps"

    recipe_id: Mapped[int] = mapped_column(
        "recipeid", Integer, ForeignKey("recipecreated2.recipeid"), primary_key=True
    )
    step_number: Mapped[int] = mapped_column("stepnumber", Integer, primary_key=True)
    instruction: Mapped[str] = mapped_column("instruction", String(1000), nullable=False)


class RecipeImage(Base):
    __tablename__ = "recipeimages"

    recipe_id: Mapped[int] = mapped_column(
        "recipeid", Integer, ForeignKey("recipecreated2.recipeid"), primary_key=True
    )
    url: Mapped[str] = mapped_column("url", String(500), primary_key=True)
    caption: Mapped[Optional[str]] = mapped_column("caption", String(500))


class RecipeLike(Base):
    """Association between a user and a recipe; `liked` toggles on unlike."""

    __tablename__ = "recipesliked"

    user_id: Mapped[int] = mapped_column(
        "userid", Integer, ForeignKey("users2.userid"), primary_key=True
    )
    recipe_id: Mapped[int] = mapped_column(
        "recipeid", Integer, ForeignKey("recipecreated2.recipeid"), primary_key=True
    )
    liked: Mapped[bool] = mapped_column(
        "liked",
        Boolean(create_constraint=True, name="ck_recipesliked_liked"),
        nullable=False,
        default=True,
        server_default=text("1"),
    )

"""
RecipeShare Backend - Recipe Service (Query Executors)
======================================================

What:  Read and write executors for recipes and the cuisine lookup.
How:   Each method builds one parameterized SQLAlchemy statement (or one
       transaction of statements), runs it on a session borrowed from the
       Database handle, and returns records, an ID or a row count.
Who:   Called by routes/recipes.py.

Statement shapes:
    fetch_recipes       SELECT <allow-listed columns>
                        FROM recipecreated2 r
                        LEFT JOIN recipecreated1 rc ON rc.cuisine = r.cuisine
                        JOIN users2 u ON u.userid = r.userid
                        [LEFT JOIN recipeimages i ON i.recipeid = r.recipeid]
                        [WHERE ...] ORDER BY r.recipeid [, i.url]
    create_recipe       INSERT ... VALUES (recipe_seq.NEXTVAL, ...) RETURNING recipeid
    delete_recipe       DELETE steps, images, likes, then the recipe; one commit

Failure contract:
    Empty lists mean "no rows matched". Store failures surface as typed
    exceptions from Database.session(), never as empty results.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, select, update

from recipeshare.database import Database
from recipeshare.models import CuisineLevel, Recipe, RecipeImage, RecipeLike, RecipeStep, User
from recipeshare.schemas.recipe import RecipeCreate, RecipeUpdate
from recipeshare.services.query import Record, fetch_records, resolve_columns

logger = logging.getLogger(__name__)

RECIPE_COLUMNS = {
    "RecipeID": Recipe.recipe_id,
    "RecipeName": Recipe.recipe_name,
    "Cuisine": Recipe.cuisine,
    "RecipeLevel": CuisineLevel.recipe_level,
    "CookingTime": Recipe.cooking_time,
    "CreatedBy": User.user_name,
    "UserID": Recipe.user_id,
}

DEFAULT_RECIPE_COLUMNS = (
    "RecipeID",
    "RecipeName",
    "Cuisine",
    "RecipeLevel",
    "CookingTime",
    "CreatedBy",
)

IMAGE_COLUMNS = {
    "URL": RecipeImage.url,
    "Caption": RecipeImage.caption,
}


class RecipeService:
    """
    Executors for the recipecreated2 / recipecreated1 tables.

    Responsibilities:
        - fetch_recipes():       filtered, column-narrowed listing (optionally with images)
        - fetch_recipe_by_id():  one recipe summary
        - fetch_cuisines():      cuisine → level lookup
        - create_recipe():       insert, returns generated RecipeID
        - update_recipe():       replace editable fields, returns rows affected
        - delete_recipe():       cascading delete, returns rows affected
    """

    async def fetch_recipes(
        self,
        db: Database,
        columns: Optional[Sequence[str]] = None,
        cuisine: Optional[str] = None,
        recipe_id: Optional[int] = None,
        include_images: bool = False,
        captionless: bool = False,
    ) -> List[Record]:
        """
        List recipes, optionally narrowed, filtered and joined with images.

        Args:
            db: Pool handle
            columns: Public column names to return (default: recipe summary)
            cuisine: Exact cuisine filter
            recipe_id: Restrict to one recipe
            include_images: Left-join images and append URL, Caption
            captionless: With images, keep only images without a caption

        Returns:
            Records ordered by RecipeID (then image URL); [] when nothing matches.

        Raises:
            ValidationError: unknown column name requested
        """
        allowed = dict(RECIPE_COLUMNS)
        if include_images:
            allowed.update(IMAGE_COLUMNS)
        selected = resolve_columns(columns, allowed, DEFAULT_RECIPE_COLUMNS)

        if include_images:
            chosen = {col.name for col in selected}
            selected += [
                expr.label(name) for name, expr in IMAGE_COLUMNS.items() if name not in chosen
            ]

        stmt = (
            select(*selected)
            .select_from(Recipe)
            .outerjoin(CuisineLevel, CuisineLevel.cuisine == Recipe.cuisine)
            .join(User, User.user_id == Recipe.user_id)
        )
        order_by = [Recipe.recipe_id]

        if include_images:
            stmt = stmt.outerjoin(RecipeImage, RecipeImage.recipe_id == Recipe.recipe_id)
            order_by.append(RecipeImage.url)
            if captionless:
                stmt = stmt.where(RecipeImage.url.is_not(None), RecipeImage.caption.is_(None))

        if recipe_id is not None:
            stmt = stmt.where(Recipe.recipe_id == recipe_id)
        if cuisine:
            stmt = stmt.where(Recipe.cuisine == cuisine)

        return await fetch_records(db, stmt.order_by(*order_by))

    async def fetch_recipe_by_id(self, db: Database, recipe_id: int) -> List[Record]:
        """One-row summary (RecipeID, RecipeName, Cuisine, CookingTime, CreatedBy)."""
        stmt = (
            select(
                Recipe.recipe_id.label("RecipeID"),
                Recipe.recipe_name.label("RecipeName"),
                Recipe.cuisine.label("Cuisine"),
                Recipe.cooking_time.label("CookingTime"),
                User.user_name.label("CreatedBy"),
            )
            .select_from(Recipe)
            .join(User, User.user_id == Recipe.user_id)
            .where(Recipe.recipe_id == recipe_id)
        )
        return await fetch_records(db, stmt)

    async def fetch_cuisines(self, db: Database) -> List[Record]:
        stmt = select(
            CuisineLevel.cuisine.label("Cuisine"),
            CuisineLevel.recipe_level.label("RecipeLevel"),
        ).order_by(CuisineLevel.cuisine)
        return await fetch_records(db, stmt)

    async def create_recipe(self, db: Database, recipe: RecipeCreate) -> int:
        """
        Insert a recipe and return its sequence-generated RecipeID.

        Raises:
            ConstraintViolationError: unknown UserID/Cuisine (foreign keys)
        """
        async with db.session() as session:
            row = Recipe(
                recipe_name=recipe.recipe_name,
                cuisine=recipe.cuisine,
                cooking_time=recipe.cooking_time,
                user_id=recipe.user_id,
            )
            session.add(row)
            await session.commit()
            logger.info("Recipe created: id=%s name=%r", row.recipe_id, row.recipe_name)
            return row.recipe_id

    async def update_recipe(self, db: Database, recipe_id: int, recipe: RecipeUpdate) -> int:
        """Replace name, cuisine, cooking time and creator. Returns rows affected (0 or 1)."""
        stmt = (
            update(Recipe)
            .where(Recipe.recipe_id == recipe_id)
            .values(
                recipe_name=recipe.recipe_name,
                cuisine=recipe.cuisine,
                cooking_time=recipe.cooking_time,
                user_id=recipe.user_id,
            )
            .execution_options(synchronize_session=False)
        )
        async with db.session() as session:
            result = await session.execute(stmt)
            await session.commit()
            logger.info("Recipe %s updated (%d row)", recipe_id, result.rowcount)
            return result.rowcount

    async def delete_recipe(self, db: Database, recipe_id: int) -> int:
        """
        Delete a recipe and its steps, images and likes in one transaction.

        Returns:
            Recipe rows affected: 1 on delete, 0 if the recipe did not exist
            (so repeating the call is harmless).
        """
        async with db.session() as session:
            for dependent in (RecipeStep, RecipeImage, RecipeLike):
                await session.execute(
                    delete(dependent)
                    .where(dependent.recipe_id == recipe_id)
                    .execution_options(synchronize_session=False)
                )
            result = await session.execute(
                delete(Recipe)
                .where(Recipe.recipe_id == recipe_id)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
            if result.rowcount:
                logger.info("Recipe %s deleted with its steps, images and likes", recipe_id)
            return result.rowcount


recipe_service = RecipeService()

"""
RecipeShare Backend - Like Service
==================================

What:  Executors over the recipesliked association (UserID, RecipeID, Liked).
Who:   Called by routes/likes.py.

Only rows with Liked = true count as likes; unliking clears the flag and
keeps the row, so a user/recipe pair is never stored twice.

Liked-by-all is relational division, written as a double NOT EXISTS:
    SELECT r.* FROM recipes r
    WHERE NOT EXISTS (SELECT u FROM users u
                      WHERE NOT EXISTS (SELECT 1 FROM recipesliked l
                                        WHERE l.recipeid = r.recipeid
                                          AND l.userid = u.userid
                                          AND l.liked = 1))
"""

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import aliased

from recipeshare.database import Database
from recipeshare.models import Recipe, RecipeLike, User
from recipeshare.services.query import Record, fetch_records

logger = logging.getLogger(__name__)


def _summary_columns():
    return (
        Recipe.recipe_id.label("RecipeID"),
        Recipe.recipe_name.label("RecipeName"),
        Recipe.cuisine.label("Cuisine"),
        Recipe.cooking_time.label("CookingTime"),
        User.user_name.label("CreatedBy"),
    )


class LikeService:
    """
    Responsibilities:
        - fetch_liked_recipes():         recipes liked by anyone
        - fetch_user_liked_recipes():    recipes liked by one user
        - fetch_recipes_liked_by_all():  recipes liked by every user
        - like_recipe() / unlike_recipe()
    """

    def _liked_query(self):
        return (
            select(*_summary_columns())
            .select_from(RecipeLike)
            .join(Recipe, Recipe.recipe_id == RecipeLike.recipe_id)
            .join(User, User.user_id == Recipe.user_id)
            .where(RecipeLike.liked == True)  # noqa: E712
            .distinct()
            .order_by(Recipe.recipe_id)
        )

    async def fetch_liked_recipes(self, db: Database) -> List[Record]:
        return await fetch_records(db, self._liked_query())

    async def fetch_user_liked_recipes(self, db: Database, user_id: int) -> List[Record]:
        stmt = self._liked_query().where(RecipeLike.user_id == user_id)
        return await fetch_records(db, stmt)

    async def fetch_recipes_liked_by_all(self, db: Database) -> List[Record]:
        voter = aliased(User)
        vote = aliased(RecipeLike)

        liked_by_voter = (
            select(vote.user_id)
            .where(
                vote.recipe_id == Recipe.recipe_id,
                vote.user_id == voter.user_id,
                vote.liked == True,  # noqa: E712
            )
            .correlate(Recipe, voter)
        )
        missing_voter = select(voter.user_id).where(~liked_by_voter.exists()).correlate(Recipe)

        stmt = (
            select(*_summary_columns())
            .select_from(Recipe)
            .join(User, User.user_id == Recipe.user_id)
            .where(~missing_voter.exists())
            .order_by(Recipe.recipe_id)
        )
        return await fetch_records(db, stmt)

    async def like_recipe(self, db: Database, user_id: int, recipe_id: int) -> int:
        """
        Mark a recipe as liked by a user, inserting the pair on first like.

        Returns:
            Rows written (1).

        Raises:
            ConstraintViolationError: unknown user or recipe
        """
        async with db.session() as session:
            like = await session.get(RecipeLike, {"user_id": user_id, "recipe_id": recipe_id})
            if like is None:
                session.add(RecipeLike(user_id=user_id, recipe_id=recipe_id, liked=True))
            else:
                like.liked = True
            await session.commit()
        logger.info("User %s liked recipe %s", user_id, recipe_id)
        return 1

    async def unlike_recipe(self, db: Database, user_id: int, recipe_id: int) -> int:
        """Clear the Liked flag. Returns rows affected; 0 if the pair was not liked."""
        stmt = (
            update(RecipeLike)
            .where(
                RecipeLike.user_id == user_id,
                RecipeLike.recipe_id == recipe_id,
                RecipeLike.liked == True,  # noqa: E712
            )
            .values(liked=False)
            .execution_options(synchronize_session=False)
        )
        async with db.session() as session:
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount


like_service = LikeService()

"""
RecipeShare Backend - Step Service
==================================

What:  Executors for recipe steps (numbered instructions).
Who:   Called by routes/steps.py.

Step numbering:
    Steps of a recipe are numbered 1..n with no gaps. insert_steps() appends
    a whole batch inside one transaction, numbering it after the recipe's
    current last step, and commits once; if any insert fails nothing from the
    batch is kept.
"""

import logging
from typing import List, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipeshare.database import Database
from recipeshare.exceptions import NotFoundError
from recipeshare.models import Recipe, RecipeStep
from recipeshare.services.query import Record, fetch_records

logger = logging.getLogger(__name__)


class StepService:

    async def fetch_recipe_steps(self, db: Database, recipe_id: int) -> List[Record]:
        """RecipeID, StepNumber, Instruction for one recipe, in step order."""
        stmt = (
            select(
                RecipeStep.recipe_id.label("RecipeID"),
                RecipeStep.step_number.label("StepNumber"),
                RecipeStep.instruction.label("Instruction"),
            )
            .where(RecipeStep.recipe_id == recipe_id)
            .order_by(RecipeStep.step_number)
        )
        return await fetch_records(db, stmt)

    async def insert_step(
        self, db: Database, step_number: int, instruction: str, recipe_id: int
    ) -> int:
        """
        Insert and commit a single step.

        Returns:
            Rows inserted (1).

        Raises:
            ConstraintViolationError: the (RecipeID, StepNumber) pair exists
                                      or the recipe does not
        """
        async with db.session() as session:
            self._add_step(session, step_number, instruction, recipe_id)
            await session.commit()
        return 1

    async def insert_steps(
        self, db: Database, recipe_id: int, instructions: Sequence[str]
    ) -> List[int]:
        """
        Append an ordered batch of instructions to a recipe atomically.

        Args:
            db: Pool handle
            recipe_id: Target recipe
            instructions: Instruction texts in step order

        Returns:
            The step numbers assigned, e.g. [1, 2, 3] for a fresh recipe.

        Raises:
            NotFoundError: the recipe does not exist
            ConstraintViolationError / DatabaseError: an insert failed; the
                whole batch was rolled back
        """
        async with db.session() as session:
            exists = await session.scalar(
                select(Recipe.recipe_id).where(Recipe.recipe_id == recipe_id)
            )
            if exists is None:
                raise NotFoundError(
                    message="Recipe not found",
                    context={"recipe_id": recipe_id},
                )

            last = await session.scalar(
                select(func.max(RecipeStep.step_number)).where(
                    RecipeStep.recipe_id == recipe_id
                )
            )
            start = (last or 0) + 1
            numbers = list(range(start, start + len(instructions)))
            for number, instruction in zip(numbers, instructions):
                self._add_step(session, number, instruction, recipe_id)

            await session.commit()

        logger.info("Inserted %d step(s) for recipe %s", len(numbers), recipe_id)
        return numbers

    @staticmethod
    def _add_step(
        session: AsyncSession, step_number: int, instruction: str, recipe_id: int
    ) -> None:
        session.add(
            RecipeStep(recipe_id=recipe_id, step_number=step_number, instruction=instruction)
        )


step_service = StepService()

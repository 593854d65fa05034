"""
RecipeShare Backend - Recipe, Step and Image Executor Tests
===========================================================

What we test:
    ✅ Recipe listing: default columns, narrowing, filters, image joins
    ✅ Unknown column names are rejected before any SQL runs
    ✅ Create / update / delete round trips, including the delete cascade
    ✅ Step batches are numbered in order and inserted all-or-nothing
    ✅ Image lookups with and without the captionless filter
"""

from datetime import timedelta

import pytest

from recipeshare.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from recipeshare.schemas.recipe import RecipeCreate, RecipeUpdate
from recipeshare.services.image_service import image_service
from recipeshare.services.like_service import like_service
from recipeshare.services.recipe_service import RecipeService
from recipeshare.services.step_service import StepService


class TestFetchRecipes:

    def setup_method(self):
        self.service = RecipeService()

    @pytest.mark.asyncio
    async def test_default_columns_ordered_by_id(self, seeded):
        recipes = await self.service.fetch_recipes(seeded)

        assert [r["RecipeID"] for r in recipes] == [1, 2, 3, 4]
        assert recipes[0] == {
            "RecipeID": 1,
            "RecipeName": "Margherita Pizza",
            "Cuisine": "Italian",
            "RecipeLevel": "Intermediate",
            "CookingTime": "00 01:15:00",
            "CreatedBy": "Arthur",
        }

    @pytest.mark.asyncio
    async def test_recipe_without_cuisine_is_still_listed(self, seeded):
        recipes = await self.service.fetch_recipes(seeded, recipe_id=4)

        assert len(recipes) == 1
        assert recipes[0]["Cuisine"] is None
        assert recipes[0]["RecipeLevel"] is None
        assert recipes[0]["CookingTime"] == "02 03:00:00"

    @pytest.mark.asyncio
    async def test_columns_are_narrowed_and_alias_prefixes_ignored(self, seeded):
        recipes = await self.service.fetch_recipes(seeded, columns=["r.RecipeName", "cuisine"])

        assert recipes[1] == {"RecipeName": "Greek Salad", "Cuisine": "Greek"}

    @pytest.mark.asyncio
    async def test_unknown_column_is_rejected(self, seeded):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.fetch_recipes(seeded, columns=["RecipeName", "1=1; DROP TABLE users2"])

        assert exc_info.value.field == "columns"
        assert exc_info.value.context["unknown"] == ["1=1; DROP TABLE users2"]

    @pytest.mark.asyncio
    async def test_image_columns_need_the_image_join(self, seeded):
        with pytest.raises(ValidationError):
            await self.service.fetch_recipes(seeded, columns=["URL"])

    @pytest.mark.asyncio
    async def test_cuisine_filter(self, seeded):
        recipes = await self.service.fetch_recipes(seeded, cuisine="Greek")
        assert [r["RecipeName"] for r in recipes] == ["Greek Salad"]

    @pytest.mark.asyncio
    async def test_no_match_is_an_empty_list(self, seeded):
        assert await self.service.fetch_recipes(seeded, recipe_id=999999) == []

    @pytest.mark.asyncio
    async def test_with_images(self, seeded):
        rows = await self.service.fetch_recipes(seeded, include_images=True)

        assert [(r["RecipeID"], r["URL"]) for r in rows] == [
            (1, "https://img.example/pizza-1.jpg"),
            (1, "https://img.example/pizza-2.jpg"),
            (2, "https://img.example/salad.jpg"),
            (3, None),
            (4, None),
        ]
        assert rows[0]["Caption"] == "Fresh from the oven"

    @pytest.mark.asyncio
    async def test_with_images_always_returns_url_and_caption(self, seeded):
        rows = await self.service.fetch_recipes(seeded, columns=["RecipeName"], include_images=True)
        assert set(rows[0]) == {"RecipeName", "URL", "Caption"}

    @pytest.mark.asyncio
    async def test_captionless_images_only(self, seeded):
        rows = await self.service.fetch_recipes(seeded, include_images=True, captionless=True)

        assert len(rows) == 1
        assert rows[0]["URL"] == "https://img.example/pizza-2.jpg"
        assert rows[0]["Caption"] is None

    @pytest.mark.asyncio
    async def test_fetch_recipe_by_id(self, seeded):
        rows = await self.service.fetch_recipe_by_id(seeded, 2)
        assert rows == [
            {
                "RecipeID": 2,
                "RecipeName": "Greek Salad",
                "Cuisine": "Greek",
                "CookingTime": "00 00:15:00",
                "CreatedBy": "Ford",
            }
        ]

    @pytest.mark.asyncio
    async def test_fetch_cuisines(self, seeded):
        cuisines = await self.service.fetch_cuisines(seeded)
        assert [c["Cuisine"] for c in cuisines] == ["Greek", "Italian", "Thai"]


class TestWriteRecipes:

    def setup_method(self):
        self.service = RecipeService()

    @pytest.mark.asyncio
    async def test_create_then_fetch(self, seeded):
        recipe = RecipeCreate(
            RecipeName="Pasta Verde", Cuisine="Italian", CookingTime="00:30:00", UserID=1
        )
        recipe_id = await self.service.create_recipe(seeded, recipe)

        assert recipe_id == 5
        rows = await self.service.fetch_recipe_by_id(seeded, recipe_id)
        assert rows[0]["RecipeName"] == "Pasta Verde"
        assert rows[0]["CookingTime"] == "00 00:30:00"
        assert rows[0]["CreatedBy"] == "Arthur"

    @pytest.mark.asyncio
    async def test_update(self, seeded):
        update = RecipeUpdate(
            RecipeName="Neapolitan Pizza",
            Cuisine="Italian",
            CookingTime=timedelta(minutes=90),
            UserID=2,
        )
        assert await self.service.update_recipe(seeded, 1, update) == 1

        rows = await self.service.fetch_recipe_by_id(seeded, 1)
        assert rows[0]["RecipeName"] == "Neapolitan Pizza"
        assert rows[0]["CookingTime"] == "00 01:30:00"
        assert rows[0]["CreatedBy"] == "Ford"

    @pytest.mark.asyncio
    async def test_update_missing_recipe_affects_nothing(self, seeded):
        update = RecipeUpdate(RecipeName="Ghost", UserID=1)
        assert await self.service.update_recipe(seeded, 999, update) == 0

    @pytest.mark.asyncio
    async def test_delete_cascades_and_is_idempotent(self, seeded):
        assert await self.service.delete_recipe(seeded, 1) == 1

        assert await self.service.fetch_recipe_by_id(seeded, 1) == []
        assert await StepService().fetch_recipe_steps(seeded, 1) == []
        assert await image_service.fetch_images_by_id(seeded, 1) == []
        liked_ids = {r["RecipeID"] for r in await like_service.fetch_liked_recipes(seeded)}
        assert 1 not in liked_ids

        assert await self.service.delete_recipe(seeded, 1) == 0


class TestSteps:

    def setup_method(self):
        self.service = StepService()

    @pytest.mark.asyncio
    async def test_fetch_in_step_order(self, seeded):
        steps = await self.service.fetch_recipe_steps(seeded, 1)
        assert [(s["StepNumber"], s["Instruction"]) for s in steps] == [
            (1, "Make the dough"),
            (2, "Add the toppings"),
            (3, "Bake for 12 minutes"),
        ]

    @pytest.mark.asyncio
    async def test_insert_steps_numbers_a_fresh_recipe_from_one(self, seeded):
        numbers = await self.service.insert_steps(seeded, 3, ["Soak the noodles", "Fry", "Serve"])

        assert numbers == [1, 2, 3]
        steps = await self.service.fetch_recipe_steps(seeded, 3)
        assert [s["Instruction"] for s in steps] == ["Soak the noodles", "Fry", "Serve"]

    @pytest.mark.asyncio
    async def test_insert_steps_appends_after_existing(self, seeded):
        numbers = await self.service.insert_steps(seeded, 2, ["Add feta", "Drizzle oil"])
        assert numbers == [2, 3]

    @pytest.mark.asyncio
    async def test_insert_steps_unknown_recipe(self, seeded):
        with pytest.raises(NotFoundError):
            await self.service.insert_steps(seeded, 999, ["Nothing to do"])

    @pytest.mark.asyncio
    async def test_failed_batch_leaves_no_steps(self, seeded):
        # The second instruction violates NOT NULL; the first must not survive
        with pytest.raises(ConstraintViolationError):
            await self.service.insert_steps(seeded, 3, ["Soak the noodles", None])

        assert await self.service.fetch_recipe_steps(seeded, 3) == []
        assert seeded.in_flight == 0

    @pytest.mark.asyncio
    async def test_insert_single_step(self, seeded):
        assert await self.service.insert_step(seeded, 1, "Slice the mushrooms", 4) == 1
        steps = await self.service.fetch_recipe_steps(seeded, 4)
        assert steps == [{"RecipeID": 4, "StepNumber": 1, "Instruction": "Slice the mushrooms"}]

    @pytest.mark.asyncio
    async def test_insert_duplicate_step_number(self, seeded):
        with pytest.raises(ConstraintViolationError):
            await self.service.insert_step(seeded, 1, "Make the dough again", 1)


class TestImages:

    @pytest.mark.asyncio
    async def test_all_images(self, seeded):
        images = await image_service.fetch_images_by_id(seeded, 1)
        assert [i["URL"] for i in images] == [
            "https://img.example/pizza-1.jpg",
            "https://img.example/pizza-2.jpg",
        ]

    @pytest.mark.asyncio
    async def test_captionless_only(self, seeded):
        images = await image_service.fetch_images_by_id(seeded, 1, captionless=True)
        assert images == [
            {"RecipeID": 1, "URL": "https://img.example/pizza-2.jpg", "Caption": None}
        ]

    @pytest.mark.asyncio
    async def test_recipe_without_images(self, seeded):
        assert await image_service.fetch_images_by_id(seeded, 3) == []

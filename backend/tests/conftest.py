"""
RecipeShare Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite file (via aiosqlite) with the schema
       built from Base.metadata, so executors run real SQL end to end.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at a scratch SQLite file
    ├── database:      Database handle over an empty schema
    ├── seeded:        `database` filled with the sample data below
    └── client:        HTTPX AsyncClient whose requests use `seeded`

Sample data:
    tiers       0 Novice · 100 Home Cook · 500 Chef
    users       1 Arthur (100) · 2 Ford (650) · 3 Zaphod (99) · 4 Marvin (-5)
    recipes     1 Margherita Pizza (Italian, Arthur)
                2 Greek Salad (Greek, Ford)
                3 Pad Thai (Thai, Zaphod)
                4 Mystery Stew (no cuisine, Arthur)
    steps       recipe 1: three steps · recipe 2: one step
    images      recipe 1: captioned + captionless · recipe 2: captioned
    likes       recipe 1 by everyone · recipe 2 by Arthur and Ford
                recipe 3 by Ford, then unliked
"""

import os
from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./recipeshare-test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from recipeshare.config import Settings  # noqa: E402
from recipeshare.database import Base, Database, get_database  # noqa: E402
from recipeshare.models import (  # noqa: E402
    CuisineLevel,
    Location,
    Pantry,
    Recipe,
    RecipeImage,
    RecipeLike,
    RecipeStep,
    User,
    UserPantry,
    UserTier,
)


def sample_rows():
    """Model instances for the sample data described in the module docstring."""
    return [
        UserTier(points=0, user_level="Novice"),
        UserTier(points=100, user_level="Home Cook"),
        UserTier(points=500, user_level="Chef"),
        User(user_id=1, user_name="Arthur", points=100),
        User(user_id=2, user_name="Ford", points=650),
        User(user_id=3, user_name="Zaphod", points=99),
        User(user_id=4, user_name="Marvin", points=-5),
        CuisineLevel(cuisine="Italian", recipe_level="Intermediate"),
        CuisineLevel(cuisine="Greek", recipe_level="Beginner"),
        CuisineLevel(cuisine="Thai", recipe_level="Advanced"),
        Recipe(
            recipe_id=1,
            recipe_name="Margherita Pizza",
            cuisine="Italian",
            cooking_time=timedelta(hours=1, minutes=15),
            user_id=1,
        ),
        Recipe(
            recipe_id=2,
            recipe_name="Greek Salad",
            cuisine="Greek",
            cooking_time=timedelta(minutes=15),
            user_id=2,
        ),
        Recipe(
            recipe_id=3,
            recipe_name="Pad Thai",
            cuisine="Thai",
            cooking_time=timedelta(minutes=40),
            user_id=3,
        ),
        Recipe(
            recipe_id=4,
            recipe_name="Mystery Stew",
            cuisine=None,
            cooking_time=timedelta(days=2, hours=3),
            user_id=1,
        ),
        RecipeStep(recipe_id=1, step_number=1, instruction="Make the dough"),
        RecipeStep(recipe_id=1, step_number=2, instruction="Add the toppings"),
        RecipeStep(recipe_id=1, step_number=3, instruction="Bake for 12 minutes"),
        RecipeStep(recipe_id=2, step_number=1, instruction="Chop the vegetables"),
        RecipeImage(recipe_id=1, url="https://img.example/pizza-1.jpg", caption="Fresh from the oven"),
        RecipeImage(recipe_id=1, url="https://img.example/pizza-2.jpg", caption=None),
        RecipeImage(recipe_id=2, url="https://img.example/salad.jpg", caption="Crisp"),
        RecipeLike(user_id=1, recipe_id=1, liked=True),
        RecipeLike(user_id=2, recipe_id=1, liked=True),
        RecipeLike(user_id=3, recipe_id=1, liked=True),
        RecipeLike(user_id=4, recipe_id=1, liked=True),
        RecipeLike(user_id=1, recipe_id=2, liked=True),
        RecipeLike(user_id=2, recipe_id=2, liked=True),
        RecipeLike(user_id=2, recipe_id=3, liked=False),
        Pantry(pantry_id=1, category="Spices"),
        Pantry(pantry_id=2, category="Baking"),
        UserPantry(user_id=1, pantry_id=1),
        UserPantry(user_id=1, pantry_id=2),
        UserPantry(user_id=2, pantry_id=2),
        Location(street="12 Main St", city="Vancouver", province="BC", location_type="Market"),
        Location(street="5 King St", city="Toronto", province="ON", location_type="Store"),
        Location(street="1 Bay St", city="Toronto", province="ON", location_type="Restaurant"),
    ]


@pytest.fixture
def test_settings(tmp_path):
    """Settings whose database is a fresh SQLite file under tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'recipeshare.db'}",
        shutdown_grace_period=1.0,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """
    Provides a Database handle over an empty schema.

    Usage:
        async def test_locations(database):
            assert await location_service.fetch_all_locations(database) == []
    """
    db = Database(test_settings)
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db
    await db.engine.dispose()


@pytest_asyncio.fixture
async def seeded(database):
    """The `database` fixture with the sample data committed."""
    async with database.session() as session:
        session.add_all(sample_rows())
        await session.commit()
    return database


@pytest_asyncio.fixture
async def client(seeded):
    """
    Provides an async HTTP client for a fresh app whose routes use `seeded`.

    ASGITransport does not run the lifespan, so the Database dependency is
    overridden instead.

    Usage:
        async def test_locations(client):
            response = await client.get("/api/locations")
            assert response.status_code == 200
    """
    from recipeshare.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: seeded
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

"""
RecipeShare Backend - ORM Models
================================

Importing this package registers every table on `Base.metadata`
(used by Alembic and by the test schema fixture).
"""

from recipeshare.models.location import Location
from recipeshare.models.recipe import CuisineLevel, Recipe, RecipeImage, RecipeLike, RecipeStep
from recipeshare.models.user import Pantry, User, UserPantry, UserTier

__all__ = [
    "CuisineLevel",
    "Location",
    "Pantry",
    "Recipe",
    "RecipeImage",
    "RecipeLike",
    "RecipeStep",
    "User",
    "UserPantry",
    "UserTier",
]

"""RecipeShare Backend - User Request Schemas"""

from pydantic import AliasChoices, BaseModel, Field


class UserCreate(BaseModel):
    """
    Body of POST /api/user.

    Example:
        {"UserName": "Ford Prefect"}
    """

    user_name: str = Field(
        validation_alias=AliasChoices("UserName", "Username", "user_name"),
        min_length=1,
        max_length=100,
    )

"""
RecipeShare Backend - Recipe Request Schemas
============================================

What:  Request bodies for recipe, step and like endpoints, plus the
       CookingTime codec shared with the executors.
How:   Field aliases keep the PascalCase JSON keys the frontend already sends
       (RecipeName, CookingTime, UserID ...) while Python code uses snake_case.

CookingTime:
    Stored as INTERVAL DAY TO SECOND. Accepted as "HH:MM:SS", "DD HH:MM:SS"
    (Oracle's interval literal), either with up to six fractional second
    digits, or anything pydantic reads as a timedelta (ISO 8601 "PT30M",
    seconds). Returned as "DD HH:MM:SS", plus ".ffffff" for sub-second parts.
"""

import re
from datetime import timedelta
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, Field, field_validator

_INTERVAL_RE = re.compile(
    r"^\s*(?:\+?(?P<days>\d+)\s+)?(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2})(?:\.(?P<fraction>\d+))?\s*$"
)


def parse_cooking_time(value: Any) -> Any:
    """Convert interval literals to timedelta; leave other values to pydantic."""
    if not isinstance(value, str):
        return value
    match = _INTERVAL_RE.match(value)
    if not match:
        return value
    hours, minutes, seconds = (int(match.group(k)) for k in ("hours", "minutes", "seconds"))
    fraction = match.group("fraction") or ""
    if hours > 23 or minutes > 59 or seconds > 59 or len(fraction) > 6:
        raise ValueError(f"Invalid cooking time '{value}'")
    return timedelta(
        days=int(match.group("days") or 0),
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=int(fraction.ljust(6, "0")),
    )


def format_cooking_time(value: timedelta) -> str:
    """Render a timedelta as "DD HH:MM:SS", with ".ffffff" only when non-zero."""
    total = value.days * 86_400 + value.seconds
    days, rest = divmod(total, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)
    text = f"{days:02d} {hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return text


class RecipeCreate(BaseModel):
    """
    Body of POST /api/recipe.

    Example:
        {"RecipeName": "Pasta Verde", "Cuisine": "Italian",
         "CookingTime": "00:30:00", "UserID": 3}
    """

    recipe_name: str = Field(alias="RecipeName", min_length=1, max_length=100)
    cuisine: Optional[str] = Field(default=None, alias="Cuisine", max_length=50)
    cooking_time: Optional[timedelta] = Field(default=None, alias="CookingTime")
    user_id: int = Field(alias="UserID", gt=0)

    model_config = {"populate_by_name": True}

    @field_validator("cooking_time", mode="before")
    @classmethod
    def parse_interval(cls, v: Any) -> Any:
        return parse_cooking_time(v)

    @field_validator("cooking_time")
    @classmethod
    def non_negative(cls, v: Optional[timedelta]) -> Optional[timedelta]:
        if v is not None and v < timedelta(0):
            raise ValueError("CookingTime cannot be negative")
        return v


class RecipeUpdate(RecipeCreate):
    """Body of PUT /api/recipe/{id}; replaces all editable fields."""


class StepsCreate(BaseModel):
    """
    Body of POST /api/steps/{id}: ordered instructions.

    Example:
        {"steps": ["Preheat the oven to 350F", "Boil the pasta"]}
    """

    steps: List[Annotated[str, Field(min_length=1, max_length=1000)]] = Field(min_length=1)


class LikeRequest(BaseModel):
    """Body of POST /api/likeRecipe and /api/unlikeRecipe."""

    user_id: int = Field(alias="UserID", gt=0)
    recipe_id: int = Field(alias="RecipeID", gt=0)

    model_config = {"populate_by_name": True}

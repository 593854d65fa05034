"""RecipeShare Backend - Image Service"""

from typing import List

from sqlalchemy import select

from recipeshare.database import Database
from recipeshare.models import RecipeImage
from recipeshare.services.query import Record, fetch_records


class ImageService:

    async def fetch_images_by_id(
        self, db: Database, recipe_id: int, captionless: bool = False
    ) -> List[Record]:
        """
        Images attached to a recipe, ordered by URL.

        Args:
            captionless: Only return images whose caption is NULL
        """
        stmt = (
            select(
                RecipeImage.recipe_id.label("RecipeID"),
                RecipeImage.url.label("URL"),
                RecipeImage.caption.label("Caption"),
            )
            .where(RecipeImage.recipe_id == recipe_id)
            .order_by(RecipeImage.url)
        )
        if captionless:
            stmt = stmt.where(RecipeImage.caption.is_(None))
        return await fetch_records(db, stmt)


image_service = ImageService()

"""RecipeShare Backend - Pantry and Location Services"""

from typing import List

from sqlalchemy import select

from recipeshare.database import Database
from recipeshare.models import Location, Pantry, UserPantry
from recipeshare.services.query import Record, fetch_records


class PantryService:

    async def fetch_pantries(self, db: Database, user_id: int) -> List[Record]:
        """Pantries saved by a user: UserID, PantryID, Category."""
        stmt = (
            select(
                UserPantry.user_id.label("UserID"),
                UserPantry.pantry_id.label("PantryID"),
                Pantry.category.label("Category"),
            )
            .select_from(UserPantry)
            .join(Pantry, Pantry.pantry_id == UserPantry.pantry_id)
            .where(UserPantry.user_id == user_id)
            .order_by(UserPantry.user_id, UserPantry.pantry_id)
        )
        return await fetch_records(db, stmt)


class LocationService:

    async def fetch_all_locations(self, db: Database) -> List[Record]:
        """Every location, ordered by City then Street."""
        stmt = select(
            Location.street.label("Street"),
            Location.city.label("City"),
            Location.province.label("Province"),
            Location.location_type.label("LocationType"),
        ).order_by(Location.city, Location.street)
        return await fetch_records(db, stmt)


pantry_service = PantryService()
location_service = LocationService()

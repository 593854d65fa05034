"""
RecipeShare Backend - User Service
==================================

What:  Executors for users and their rank.
Who:   Called by routes/users.py.

Rank query:
    SELECT u.userid, u.username, u.points, t.userlevel
    FROM users2 u
    JOIN users1 t ON u.points >= t.points
    WHERE t.points = (SELECT MAX(t2.points) FROM users1 t2
                      WHERE t2.points <= u.points)

    Tier thresholds are distinct, so every user matches at most one tier.
    A user whose points are below the lowest threshold matches none and is
    left out of the result.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import aliased

from recipeshare.database import Database
from recipeshare.models import User, UserTier
from recipeshare.services.query import Record, fetch_records, resolve_columns

logger = logging.getLogger(__name__)

USER_COLUMNS = {
    "UserID": User.user_id,
    "UserName": User.user_name,
    "Points": User.points,
    "UserLevel": UserTier.user_level,
}

DEFAULT_USER_COLUMNS = ("UserID", "UserName", "Points", "UserLevel")


class UserService:

    def _ranked_query(self, columns: Optional[Sequence[str]]):
        tier = aliased(UserTier)
        threshold = (
            select(func.max(tier.points))
            .where(tier.points <= User.points)
            .correlate(User)
            .scalar_subquery()
        )
        return (
            select(*resolve_columns(columns, USER_COLUMNS, DEFAULT_USER_COLUMNS))
            .select_from(User)
            .join(UserTier, User.points >= UserTier.points)
            .where(UserTier.points == threshold)
        )

    async def fetch_user(
        self, db: Database, user_id: int, columns: Optional[Sequence[str]] = None
    ) -> List[Record]:
        """
        One user with their rank.

        Raises:
            ValidationError: unknown column name requested
        """
        stmt = self._ranked_query(columns).where(User.user_id == user_id)
        return await fetch_records(db, stmt)

    async def fetch_all_users(
        self, db: Database, columns: Optional[Sequence[str]] = None
    ) -> List[Record]:
        stmt = self._ranked_query(columns).order_by(User.user_id)
        return await fetch_records(db, stmt)

    async def create_user(self, db: Database, user_name: str) -> int:
        """Insert a user with zero points; returns the sequence-generated UserID."""
        async with db.session() as session:
            user = User(user_name=user_name, points=0)
            session.add(user)
            await session.commit()
            logger.info("User created: id=%s", user.user_id)
            return user.user_id


user_service = UserService()

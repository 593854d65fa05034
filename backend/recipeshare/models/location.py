"""
RecipeShare Backend - Location SQLAlchemy Model
===============================================

Standalone lookup of addresses (markets, stores, restaurants).
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from recipeshare.database import Base


class Location(Base):
    __tablename__ = "locations"

    street: Mapped[str] = mapped_column("street", String(200), primary_key=True)
    city: Mapped[str] = mapped_column("city", String(100), primary_key=True)
    province: Mapped[Optional[str]] = mapped_column("province", String(50))
    location_type: Mapped[Optional[str]] = mapped_column("locationtype", String(50))

"""
CopyCart Backend — Product SQLAlchemy Model
=============================================

What:  ORM model representing the `products` table.
How:   Inherits from the shared DeclarativeBase; column defaults fill in the
       identifier, rating, and timestamp, and attribute validators enforce
       the required fields before anything reaches the database.
Who:   Used by ProductService for create and list operations.

Table Design:
    - UUID primary key generated in Python (works on PostgreSQL and SQLite)
    - image_url: optional, stored as given
    - rating: uniform in [3.5, 5.0], one decimal place, when not supplied
    - created_at: UTC with timezone; list queries sort on it descending
"""

import random
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from copycart.database import Base
from copycart.exceptions import ValidationError

RATING_MIN = 3.5
RATING_MAX = 5.0


def random_rating() -> float:
    """Draws a default rating uniformly from [3.5, 5.0], rounded to one decimal."""
    return round(random.uniform(RATING_MIN, RATING_MAX), 1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """
    A catalogue entry whose title and description may be AI-drafted.

    Lifecycle:
        Created through POST /products and never updated or deleted.
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    image_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=random_rating,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    @validates("name")
    def _validate_name(self, key: str, value: Optional[str]) -> str:
        trimmed = value.strip() if isinstance(value, str) else value
        if not trimmed:
            raise ValidationError(
                message="Error adding product",
                field=key,
                details=f"Path `{key}` is required.",
            )
        return trimmed

    @validates("title", "description")
    def _validate_required(self, key: str, value: Optional[str]) -> str:
        if not value:
            raise ValidationError(
                message="Error adding product",
                field=key,
                details=f"Path `{key}` is required.",
            )
        return value

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', created_at='{self.created_at}')>"

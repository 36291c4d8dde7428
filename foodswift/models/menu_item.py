from uuid import uuid4

import sqlalchemy as sa
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from foodswift.core.database import Base
from foodswift.models.base import utcnow


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    restaurant_id = Column(
        String(36),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(Text, nullable=False)  # Main Course / Appetizer / Dessert ...
    dietary_info = Column(JSONB().with_variant(sa.JSON(), "sqlite"), nullable=True)  # ["vegetarian", "gluten-free"]
    is_available = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    restaurant = relationship("Restaurant", back_populates="menu_items")

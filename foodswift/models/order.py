from uuid import uuid4

import sqlalchemy as sa
from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from foodswift.core.database import Base
from foodswift.models.base import utcnow


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(String(36), ForeignKey("restaurants.id"), nullable=False, index=True)
    address_id = Column(String(36), ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True)

    # pending / preparing / out_for_delivery / delivered / cancelled
    status = Column(String, default="pending", nullable=False)

    # snapshot do carrinho no checkout: [{menuItemId, name, price, quantity, customization}]
    items = Column(JSONB().with_variant(sa.JSON(), "sqlite"), nullable=False)

    subtotal = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    payment_intent_id = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)
    estimated_delivery_time = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    address = relationship("Address")

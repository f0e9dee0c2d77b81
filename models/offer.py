from datetime import datetime
from typing import Any

from pydantic import field_validator
from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from db.database import Base
from models.column import CamelModel, utcnow, new_id


class Offer(Base):
    __tablename__ = "offers"

    id = Column(String, primary_key=True, default=new_id)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    values = relationship(
        "OfferValue",
        back_populates="offer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class OfferValue(Base):
    __tablename__ = "offer_values"
    __table_args__ = (
        UniqueConstraint("offer_id", "field_id", name="offer_values_offer_id_field_id_key"),
    )

    id = Column(String, primary_key=True, default=new_id)
    offer_id = Column(
        String, ForeignKey("offers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Not a foreign key to columns.field_id; deleting a column removes these rows explicitly
    field_id = Column(String, nullable=False, index=True)
    value = Column(Text, nullable=False, default="")

    offer = relationship("Offer", back_populates="values")


class OfferValuesPayload(CamelModel):
    """Body of POST /offers and PUT /offers/{id}."""

    values: dict[str, Any]


class OfferResponse(CamelModel):
    id: str
    values: dict[str, str]
    created_at: datetime
    updated_at: datetime

    @field_validator("values", mode="before")
    @classmethod
    def flatten_values(cls, v):
        # ORM rows -> {field_id: value}
        if isinstance(v, dict):
            return v
        return {item.field_id: item.value for item in v}

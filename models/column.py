from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import Column, DateTime, Integer, String

from db.database import Base


def utcnow():
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid4().hex


class OfferColumn(Base):
    """A user-defined field shown for every offer."""

    __tablename__ = "columns"

    id = Column(String, primary_key=True, default=new_id)
    field_id = Column(String, unique=True, index=True, nullable=False)
    label = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ColumnCreate(CamelModel):
    field_id: str | None = None
    label: str = Field(min_length=1)
    icon: str | None = None

    @field_validator("label")
    @classmethod
    def strip_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("label must not be blank")
        return v

    @field_validator("field_id", "icon")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class ColumnResponse(CamelModel):
    id: str
    field_id: str
    label: str
    icon: str | None = None
    order: int
    created_at: datetime
    updated_at: datetime


class IconSuggestion(CamelModel):
    field_id: str
    label: str
    icon: str
    field_type: str

from pydantic import Field

from display.numbers import MAX_COUNT
from models.column import CamelModel


class CellParseRequest(CamelModel):
    field_id: str = ""
    label: str = ""
    value: str = ""
    person_count: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    duration_days: int | None = Field(default=None, ge=0, le=MAX_COUNT)

import re
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# DD/MM/YYYY or DD-MM-YYYY, optionally followed by HH:MM
_DAY_FIRST_RE = re.compile(
    r"^(\d{2})[/-](\d{2})[/-](\d{4})(?:\s+(\d{2}):(\d{2}))?$"
)

_camel_config = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, from_attributes=True
)


def parse_day_first(value: Any) -> Any:
    """Turn a day-first date string into a datetime; pass anything else through."""
    if not isinstance(value, str):
        return value
    raw = value.strip()
    match = _DAY_FIRST_RE.match(raw)
    if not match:
        return raw
    day, month, year, hour, minute = match.groups()
    try:
        return datetime(
            int(year), int(month), int(day), int(hour or 0), int(minute or 0)
        )
    except ValueError as exc:
        raise ValueError(f"Invalid date: {raw}") from exc


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are read as UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MealCreate(BaseModel):
    """Body for creating a meal or replacing all of its fields"""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime
    is_on_diet: bool

    model_config = _camel_config

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_day_first(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_utc(v)


class MealUpdate(BaseModel):
    """Body for a partial meal update; omitted fields are left untouched"""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    is_on_diet: Optional[bool] = None

    model_config = _camel_config

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_day_first(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)

    @field_validator("name", "description", "date", "is_on_diet")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v


class MealResponse(BaseModel):
    id: UUID
    name: str
    description: str
    date: datetime
    is_on_diet: bool
    user_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _camel_config


class MealStatisticsResponse(BaseModel):
    total_meals: int = Field(..., ge=0)
    total_on_diet: int = Field(..., ge=0)
    total_off_diet: int = Field(..., ge=0)
    best_on_diet_sequence: int = Field(..., ge=0)

    model_config = _camel_config

from datetime import date, datetime, time
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from eventora.service.booking.domain.entity.event_entity import LOCAL_SOURCE, Event
from eventora.service.booking.domain.value_object.amount import normalize_amount


def parse_backend_datetime(value: Any) -> datetime | None:
    """ISO strings ('2025-03-01', '2025-03-01T18:30:00.000Z') or datetimes, else None."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    return None


class EventResponse(BaseModel):
    """Backend event document (camelCase, Mongo-style `_id`)"""

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str = Field(validation_alias=AliasChoices('_id', 'id'))
    title: str = ''
    description: str = ''
    category: str = ''
    date: datetime | None = None
    time: str = ''
    location: str = ''
    venue: str = ''
    price: int | float = 0
    total_seats: int = Field(default=0, validation_alias=AliasChoices('totalSeats', 'total_seats'))
    available_seats: int | None = Field(
        default=None, validation_alias=AliasChoices('availableSeats', 'available_seats')
    )
    image_url: str | None = Field(
        default=None, validation_alias=AliasChoices('imageUrl', 'image', 'image_url')
    )
    source: str = LOCAL_SOURCE

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @field_validator('date', mode='before')
    @classmethod
    def coerce_date(cls, v: Any) -> datetime | None:
        return parse_backend_datetime(v)

    @field_validator('price', mode='before')
    @classmethod
    def coerce_price(cls, v: Any) -> int | float:
        return normalize_amount(v)

    @field_validator('title', 'description', 'category', 'time', 'location', 'venue', mode='before')
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return '' if v is None else v

    @field_validator('source', mode='before')
    @classmethod
    def default_source(cls, v: Any) -> str:
        return str(v) if v else LOCAL_SOURCE

    def to_entity(self) -> Event:
        return Event(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            date=self.date,
            time=self.time,
            location=self.location,
            venue=self.venue,
            price=self.price,
            total_seats=self.total_seats,
            available_seats=(
                self.available_seats if self.available_seats is not None else self.total_seats
            ),
            image_url=self.image_url,
            source=self.source,
        )

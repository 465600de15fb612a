from datetime import datetime

import attrs


LOCAL_SOURCE = 'local'


@attrs.define(frozen=True)
class Event:
    id: str
    title: str
    price: int | float = 0
    description: str = ''
    category: str = ''
    date: datetime | None = None
    time: str = ''
    location: str = ''
    venue: str = ''
    total_seats: int = 0
    available_seats: int = 0
    image_url: str | None = None
    source: str = LOCAL_SOURCE

    @property
    def is_external(self) -> bool:
        """Syndicated events (e.g. ticketmaster) are browse-only mirrors."""
        return self.source != LOCAL_SOURCE

    def price_for(self, ticket_count: int) -> int | float:
        return self.price * ticket_count

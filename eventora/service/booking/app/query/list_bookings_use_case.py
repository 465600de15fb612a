from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.dto import BookingListItem, DashboardSummary
from eventora.service.booking.app.interface.i_bookings_api import IBookingsApi
from eventora.service.booking.domain.booking_status_domain import (
    derive_booking_status,
    matches_filter,
)
from eventora.service.booking.domain.enum import BookingFilter
from eventora.service.booking.domain.value_object.amount import normalize_amount


class ListBookingsUseCase:
    def __init__(self, *, bookings_api: IBookingsApi) -> None:
        self.bookings_api = bookings_api

    @classmethod
    @inject
    def build(cls, bookings_api: IBookingsApi = Provide[Container.bookings_api]) -> Self:
        return cls(bookings_api=bookings_api)

    @Logger.io
    async def list_bookings(self, *, now: datetime | None = None) -> list[BookingListItem]:
        now = now or datetime.now(timezone.utc)
        bookings = await self.bookings_api.get_my_bookings()
        return [
            BookingListItem(booking=booking, status=derive_booking_status(booking, now))
            for booking in bookings
        ]

    @staticmethod
    def filter(
        items: list[BookingListItem], booking_filter: BookingFilter, now: datetime
    ) -> list[BookingListItem]:
        return [item for item in items if matches_filter(item.booking, booking_filter, now)]

    @staticmethod
    def summarize(items: list[BookingListItem]) -> DashboardSummary:
        return DashboardSummary(
            total_bookings=len(items),
            upcoming_bookings=sum(1 for item in items if item.is_upcoming),
            total_spent=normalize_amount(
                sum(item.booking.total_price or 0 for item in items if item.booking.is_paid)
            ),
        )

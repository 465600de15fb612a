"""
Dashboard view: the user's bookings, tabs, stats, cancellation and account actions.
"""

from datetime import datetime, timezone
from typing import Any, Self

from dependency_injector.wiring import Provide, inject

from eventora.platform.config.di import Container
from eventora.platform.exception.exception_handlers import ErrorNotice, resolve_error_notice
from eventora.platform.exception.exceptions import CustomBaseError, NotFoundError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.command.authenticate_use_case import AuthenticateUseCase
from eventora.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
    ConfirmCallback,
)
from eventora.service.booking.app.command.manage_account_use_case import ManageAccountUseCase
from eventora.service.booking.app.dto import BookingListItem, DashboardSummary
from eventora.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.domain.enum import BookingFilter
from eventora.service.booking.driving_adapter.view import booking_presenter


class DashboardController:
    def __init__(
        self,
        *,
        session_context: SessionContext,
        list_bookings_use_case: ListBookingsUseCase,
        cancel_booking_use_case: CancelBookingUseCase,
        manage_account_use_case: ManageAccountUseCase,
        authenticate_use_case: AuthenticateUseCase,
    ) -> None:
        self.session_context = session_context
        self.list_bookings_use_case = list_bookings_use_case
        self.cancel_booking_use_case = cancel_booking_use_case
        self.manage_account_use_case = manage_account_use_case
        self.authenticate_use_case = authenticate_use_case

        self.items: list[BookingListItem] = []
        self.active_filter = BookingFilter.ALL
        self.notice: ErrorNotice | None = None
        self.loading = False
        self._now: datetime | None = None

    @classmethod
    @inject
    def build(
        cls, session_context: SessionContext = Provide[Container.session_context]
    ) -> Self:
        return cls(
            session_context=session_context,
            list_bookings_use_case=ListBookingsUseCase.build(),
            cancel_booking_use_case=CancelBookingUseCase.build(),
            manage_account_use_case=ManageAccountUseCase.build(),
            authenticate_use_case=AuthenticateUseCase.build(),
        )

    @property
    def now(self) -> datetime:
        return self._now or datetime.now(timezone.utc)

    @property
    def visible_items(self) -> list[BookingListItem]:
        return self.list_bookings_use_case.filter(self.items, self.active_filter, self.now)

    @property
    def summary(self) -> DashboardSummary:
        return self.list_bookings_use_case.summarize(self.items)

    @Logger.io
    async def refresh(self, *, now: datetime | None = None) -> list[BookingListItem]:
        self._now = now
        self.notice = None
        self.loading = True
        try:
            self.items = await self.list_bookings_use_case.list_bookings(now=self.now)
        except CustomBaseError as e:
            self.notice = resolve_error_notice(e)
        finally:
            self.loading = False
        return self.items

    def set_filter(self, booking_filter: BookingFilter | str) -> list[BookingListItem]:
        self.active_filter = BookingFilter(booking_filter)
        return self.visible_items

    def _find(self, booking_id: str) -> BookingListItem:
        for item in self.items:
            if item.booking.id == booking_id:
                return item
        raise NotFoundError('Booking not found')

    @Logger.io
    async def cancel(self, *, booking_id: str, confirm: ConfirmCallback) -> bool:
        self.notice = None
        try:
            item = self._find(booking_id)
            cancelled = await self.cancel_booking_use_case.execute(
                booking=item.booking, confirm=confirm, now=self.now
            )
        except CustomBaseError as e:
            self.notice = resolve_error_notice(e)
            return False
        if cancelled:
            await self.refresh(now=self._now)
        return cancelled

    def render_ticket(self, booking_id: str) -> str:
        return booking_presenter.render_ticket(self._find(booking_id).booking)

    async def export_user_data(self) -> dict[str, Any]:
        return await self.manage_account_use_case.export_user_data()

    async def deactivate_account(self) -> bool:
        return await self._close_account(self.manage_account_use_case.deactivate_account)

    async def delete_account(self) -> bool:
        return await self._close_account(self.manage_account_use_case.delete_account)

    async def _close_account(self, action: Any) -> bool:
        try:
            await action()
        except CustomBaseError as e:
            self.notice = resolve_error_notice(e)
            return False
        self.items = []
        return True

    async def logout(self) -> None:
        await self.authenticate_use_case.logout()
        self.items = []

    def render(self) -> str:
        lines = [booking_presenter.render_stats(self.summary)]
        visible = self.visible_items
        if visible:
            lines.extend(booking_presenter.render_booking_row(item) for item in visible)
        else:
            lines.append(f'No {self.active_filter} bookings')
        if self.notice:
            lines.append(booking_presenter.render_notice(self.notice))
        return '\n'.join(lines)

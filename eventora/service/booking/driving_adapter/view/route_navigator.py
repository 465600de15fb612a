from typing import Mapping

import attrs

from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.interface.i_navigator import INavigator


@attrs.define(frozen=True)
class RouteEntry:
    route: ViewRoute
    params: Mapping[str, str] = attrs.field(factory=dict, converter=dict)


class RouteNavigator(INavigator):
    """In-process stand-in for hash routing: keeps the visited routes in order."""

    def __init__(self, initial: ViewRoute | None = None) -> None:
        self.history: list[RouteEntry] = [RouteEntry(route=initial)] if initial else []

    @property
    def current(self) -> RouteEntry | None:
        return self.history[-1] if self.history else None

    @property
    def current_route(self) -> ViewRoute | None:
        return self.current.route if self.current else None

    def navigate(self, route: ViewRoute, params: Mapping[str, str] | None = None) -> None:
        entry = RouteEntry(route=ViewRoute(route), params=params or {})
        Logger.base.debug(f'🧭 [NAVIGATE] {entry.route} {dict(entry.params)}')
        self.history.append(entry)

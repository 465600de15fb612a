from abc import ABC, abstractmethod
from typing import Mapping

from eventora.platform.constant.view_route import ViewRoute


class INavigator(ABC):
    @property
    @abstractmethod
    def current_route(self) -> ViewRoute | None:
        pass

    @abstractmethod
    def navigate(self, route: ViewRoute, params: Mapping[str, str] | None = None) -> None:
        pass

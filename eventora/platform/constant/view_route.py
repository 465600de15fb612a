from enum import StrEnum


class ViewRoute(StrEnum):
    LOGIN = 'login'
    DASHBOARD = 'dashboard'
    EVENTS = 'events'
    EVENT_DETAIL = 'event_detail'

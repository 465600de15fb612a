"""Booking Entities"""

from eventora.service.booking.domain.entity.booking_entity import Booking
from eventora.service.booking.domain.entity.event_entity import Event


__all__ = ['Booking', 'Event']

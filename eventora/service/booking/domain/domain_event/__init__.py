"""Booking Domain Events"""

from eventora.service.booking.domain.domain_event.payment_succeeded_event import PaymentSucceeded


__all__ = ['PaymentSucceeded']

from abc import ABC, abstractmethod

from eventora.service.booking.domain.value_object.pending_intent import PendingIntent


class IPendingIntentStore(ABC):
    @abstractmethod
    def save(self, *, intent: PendingIntent) -> None:
        pass

    @abstractmethod
    def pop(self) -> PendingIntent | None:
        """Return the stored intent and delete it. Malformed records are deleted and yield None."""
        pass

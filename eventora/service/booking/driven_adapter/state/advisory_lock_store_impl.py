"""
Advisory seat lock in local state.

Stored under `event-{id}-booked-seats` as
    {"version": n, "seats": [{"row": "A", "seatNumber": 1}]}
A bare JSON list (the older format) reads as version 0.

The CAS runs under the local storage lock and the file is replaced atomically, so two callers
in this process can not interleave a read-merge-write. Nothing here coordinates with other
clients or other machines.
"""

from typing import Any

import orjson

from eventora.platform.constant.storage_key import ADVISORY_LOCK_KEY
from eventora.platform.exception.exceptions import DomainError, LocalStorageError
from eventora.platform.logging.loguru_io import Logger
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.interface.i_advisory_lock_store import (
    AdvisoryLockRecord,
    IAdvisoryLockStore,
)
from eventora.service.booking.domain.booking_errors import AdvisoryLockWriteFailedError
from eventora.service.booking.domain.value_object.seat_ref import SeatRef, parse_seat_refs


class AdvisoryLockStoreImpl(IAdvisoryLockStore):
    def __init__(self, *, storage: LocalStorageClient) -> None:
        self.storage = storage

    @staticmethod
    def _key(event_id: str) -> str:
        return ADVISORY_LOCK_KEY.format(event_id=event_id)

    def read(self, *, event_id: str) -> AdvisoryLockRecord:
        try:
            raw = self.storage.get_item(self._key(event_id))
        except LocalStorageError as e:
            Logger.base.warning(
                f'⚠️ [ADVISORY-LOCK] Unreadable state for event {event_id}: {e}'
            )
            return AdvisoryLockRecord(event_id=event_id)
        if raw is None:
            return AdvisoryLockRecord(event_id=event_id)

        try:
            return self._decode(event_id, orjson.loads(raw))
        except (orjson.JSONDecodeError, DomainError, TypeError, ValueError) as e:
            # fail-open: a corrupt set never blocks booking
            Logger.base.warning(
                f'⚠️ [ADVISORY-LOCK] Corrupt seat set for event {event_id}: {e}'
            )
            return AdvisoryLockRecord(event_id=event_id)

    def compare_and_swap(
        self, *, event_id: str, expected_version: int, seats: tuple[SeatRef, ...]
    ) -> AdvisoryLockRecord | None:
        with self.storage.locked():
            current = self.read(event_id=event_id)
            if current.version != expected_version:
                Logger.base.debug(
                    f'🔁 [ADVISORY-LOCK] Version conflict for event {event_id}: '
                    f'expected {expected_version}, found {current.version}'
                )
                return None

            record = AdvisoryLockRecord(
                event_id=event_id, version=expected_version + 1, seats=tuple(seats)
            )
            payload = {
                'version': record.version,
                'seats': [seat.to_payload() for seat in record.seats],
            }
            try:
                self.storage.set_item(self._key(event_id), orjson.dumps(payload).decode())
            except LocalStorageError as e:
                raise AdvisoryLockWriteFailedError(f'Unable to reserve seats locally: {e}') from e
            return record

    @staticmethod
    def _decode(event_id: str, data: Any) -> AdvisoryLockRecord:
        if isinstance(data, list):
            return AdvisoryLockRecord(event_id=event_id, version=0, seats=parse_seat_refs(data))
        if not isinstance(data, dict):
            raise ValueError('seat set must be a list or an object')
        version = data.get('version', 0)
        if not isinstance(version, int) or isinstance(version, bool) or version < 0:
            raise ValueError(f'invalid version {version!r}')
        return AdvisoryLockRecord(
            event_id=event_id, version=version, seats=parse_seat_refs(data.get('seats', []))
        )

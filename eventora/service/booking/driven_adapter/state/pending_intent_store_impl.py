import orjson

from eventora.platform.constant.storage_key import POST_LOGIN_REDIRECT_KEY
from eventora.platform.logging.loguru_io import Logger
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.interface.i_pending_intent_store import IPendingIntentStore
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent


class PendingIntentStoreImpl(IPendingIntentStore):
    def __init__(self, *, storage: LocalStorageClient) -> None:
        self.storage = storage

    def save(self, *, intent: PendingIntent) -> None:
        self.storage.set_item(POST_LOGIN_REDIRECT_KEY, orjson.dumps(intent.to_payload()).decode())

    def pop(self) -> PendingIntent | None:
        with self.storage.locked():
            raw = self.storage.get_item(POST_LOGIN_REDIRECT_KEY)
            if raw is None:
                return None
            self.storage.remove_item(POST_LOGIN_REDIRECT_KEY)

        try:
            return PendingIntent.from_payload(orjson.loads(raw))
        except (orjson.JSONDecodeError, ValueError) as e:
            Logger.base.warning(f'⚠️ [PENDING-INTENT] Discarding malformed redirect: {e}')
            return None
